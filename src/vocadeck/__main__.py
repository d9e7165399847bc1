"""Main entry point for the flashcard bot."""
from vocadeck.app import VocadeckBot
from vocadeck.config import ensure_directories
from vocadeck.logging_config import setup_logging


def main() -> None:
    """Prepare directories and logging, then run the bot until interrupted."""
    ensure_directories()
    setup_logging("Starting vocadeck ...")
    VocadeckBot().run()


if __name__ == "__main__":
    main()
