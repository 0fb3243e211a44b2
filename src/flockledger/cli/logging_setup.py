"""Logging configuration for the command-line interface."""

import logging

import click

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ClickEchoHandler(logging.Handler):
    """Send log records to stderr through click.

    Looks up the current stderr on every record, so output follows
    click's stream redirection (e.g. under ``CliRunner``).
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def configure_logging(level: str = "WARNING") -> None:
    """Attach a single stderr handler to the ``flockledger`` logger."""
    logger = logging.getLogger("flockledger")
    logger.setLevel(level.upper())
    if not any(isinstance(h, ClickEchoHandler) for h in logger.handlers):
        handler = ClickEchoHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
