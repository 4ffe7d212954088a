"""Logging setup for CLI runs."""

import logging


def configure_logging(verbose: bool = False) -> None:
    """Configure the root logger for a command run.

    Args:
        verbose: Log at DEBUG level instead of INFO (shows describe queries
            and reflection fallbacks)
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
