"""Suggestpad, a plain text editor with inline word-completion suggestions."""

__version__ = "0.1.0"
