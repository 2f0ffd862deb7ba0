"""Main entry point for Freelance Tracker application."""

import logging
import sys

from freelance_tracker.ui.application import create_application


def main():
    """
    Run the Freelance Tracker application.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app, _window = create_application()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
