from __future__ import annotations

import logging
import os
import sys

_LOG_FILE = "portfolio_site.log"


def configure_logging() -> None:
    """Send logs to a file so they do not draw over the terminal UI."""
    level_name = os.getenv("PORTFOLIO_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        filename=_LOG_FILE,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_app() -> int:
    """Launch the terminal portfolio and block until it exits."""
    from portfolio_site.tui import PortfolioApp

    PortfolioApp().run()
    return 0


def main() -> int:
    """Entry point for the application."""
    configure_logging()
    try:
        return run_app()
    except KeyboardInterrupt:
        print("\nInterrupted by user. Exiting.")
        return 130
    except Exception as exc:
        logging.getLogger(__name__).exception("Unexpected error")
        print(f"\nUnexpected error: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
