"""Entry point for Suggestpad.

Usage:
    python -m suggestpad.main [--debug] [FILE]
"""
import sys
import signal
import logging
import argparse


def setup_logging(debug: bool = False):
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def build_engine(config):
    """Engine from saved settings; falls back to defaults if they are invalid."""
    from suggestpad.engine import AutocompleteEngine, EngineConfig
    from suggestpad.errors import EngineFault

    try:
        return AutocompleteEngine(config.engine_config(), seed_language=config.seed_language)
    except (EngineFault, ValueError, KeyError) as e:
        logging.getLogger(__name__).warning(
            "Invalid autocomplete settings in %s (%s), using defaults", config.path, e)
        return AutocompleteEngine(EngineConfig(), seed_language=config.seed_language)


def run(filename=None, debug: bool = False) -> int:
    from PyQt5.QtWidgets import QApplication
    from suggestpad.config import Config
    from suggestpad.editor_window import EditorWindow

    app = QApplication(sys.argv)
    app.setApplicationName("Suggestpad")

    config = Config()
    setup_logging(debug or config.debug_logging)

    engine = build_engine(config)
    window = EditorWindow(config, engine)
    window.load_default_dictionary()
    if filename:
        window.open_path(filename)
    window.show()

    return app.exec_()


def main():
    signal.signal(signal.SIGINT, signal.SIG_DFL)

    parser = argparse.ArgumentParser(description="Text editor with inline word suggestions")
    parser.add_argument("file", nargs="?", help="File to open")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    sys.exit(run(args.file, debug=args.debug))


if __name__ == "__main__":
    main()
