"""Logging utilities."""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


# Chatty engine client loggers kept at WARNING unless debugging
QUIET_LOGGERS = ("docker", "urllib3")


def setup_logging(level: str = "INFO", console: Optional[Console] = None) -> logging.Handler:
    """Route log records to stderr through Rich.

    Progress messages go to stderr so command output on stdout stays clean.
    Returns the installed handler.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=log_level <= logging.DEBUG,
        markup=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=log_level,
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )

    third_party_level = logging.DEBUG if log_level <= logging.DEBUG else logging.WARNING
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(third_party_level)

    return handler
