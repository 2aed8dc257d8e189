"""
Command-line entry point for the Queue Bot Configurator.
"""

import argparse
import signal
import threading
import time
from typing import List, Optional

from rich.console import Console

from .config import DEFAULT_CONFIG_PATH, EXIT_DELAY_SECONDS, init_config
from .errors import ConfiguratorError
from .utils.logging import logger
from .wizard import Wizard

SAVED_MESSAGE = "Config saved! You may now close this window."
NOT_SAVED_MESSAGE = "Configuration not saved. You may now close this window."


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="queue-configurator",
        description="Interactive setup for the queue bot's config file.",
    )
    parser.add_argument(
        "-config", "--config",
        dest="config",
        default=DEFAULT_CONFIG_PATH,
        help="path to the config file (default: %(default)s)",
    )
    parser.add_argument(
        "-exit-delay", "--exit-delay",
        dest="exit_delay",
        type=float,
        default=EXIT_DELAY_SECONDS,
        metavar="SECONDS",
        help="exit after SECONDS instead of waiting for Ctrl+C",
    )
    return parser.parse_args(argv)


def wait_for_exit(delay: Optional[float]) -> None:
    """Keep the window open after a run.

    Sleeps for delay seconds when given, otherwise blocks until SIGINT.
    """
    if delay is not None:
        time.sleep(max(delay, 0))
        return

    interrupted = threading.Event()

    def signal_handler(sig: int, frame) -> None:
        interrupted.set()

    previous = signal.signal(signal.SIGINT, signal_handler)
    try:
        while not interrupted.wait(0.5):
            pass
    finally:
        signal.signal(signal.SIGINT, previous)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the wizard and return the process exit status.

    Raises:
        SystemExit: With status 1 on any fatal error.
    """
    args = parse_args(argv)
    init_config()

    console = Console()
    try:
        saved = Wizard(args.config, console=console).run()
    except ConfiguratorError as e:
        logger.error(str(e))
        console.print(f"[bold red]Error:[/] {e}", highlight=False)
        raise SystemExit(1) from e

    console.print(SAVED_MESSAGE if saved else NOT_SAVED_MESSAGE, highlight=False)
    wait_for_exit(args.exit_delay)
    return 0
