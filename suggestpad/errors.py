"""Error taxonomy for the suggestion subsystem."""


class EngineFault(Exception):
    """Autocomplete engine failed to answer a query or accept a configuration.

    Never fatal: the controller degrades to "no suggestions".
    """


class LayoutUnavailable(Exception):
    """Screen bounds of the editor could not be resolved (or the popup cannot fit)."""


class DictionaryError(OSError):
    """Dictionary load/save failed. Surfaced to the user, isolated to that operation."""
