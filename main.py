"""
Booking form entry point.

Runs the console front end over the form controller, either against the
local placeholder handler or against the configured static site.

Usage:
    Offline console:  python main.py console
    Live submission:  python main.py live
"""

import logging
import sys

from celebrity_booking.config import settings

logger = logging.getLogger(__name__)


def _run_console_mode(live: bool) -> None:
    """Start the console form session."""
    from console_demo import ConsoleSession

    logger.info(
        "Starting %s in %s mode", settings.app_name, "live" if live else "offline"
    )
    session = ConsoleSession(live=live)
    session.run()


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "live":
        _run_console_mode(live=True)
    else:
        _run_console_mode(live=False)
