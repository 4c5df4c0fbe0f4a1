"""Logging configuration for playground.

A `LogConfig` is built once when the program starts and handed to each
component that emits diagnostics, which asks it for a logger. The loggers
belong to the configuration that made them and are not registered with the
`logging` module, so two configurations never change each other's verbosity or
output.
"""

from dataclasses import dataclass, field
import logging
import os
import sys
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler

__all__ = [
    "LogConfig",
]

LOG_LEVEL_ENV = "LOG_LEVEL"

FORMAT = "%(levelname)s:%(name)s:%(message)s"


@dataclass
class LogConfig:
    """Verbosity and output sink for diagnostics."""

    level: int = logging.WARNING
    stream: TextIO = field(default_factory=lambda: sys.stderr)
    color: bool = False
    _handler: logging.Handler | None = field(default=None, init=False, repr=False)
    _loggers: dict[str, logging.Logger] = field(
        default_factory=dict, init=False, repr=False
    )

    @classmethod
    def from_args(
        cls, log_level: str | None = None, color: bool | None = None
    ) -> "LogConfig":
        """Build the configuration from command line flags and the environment.

        An explicit level wins over LOG_LEVEL. Color defaults to on when
        writing to a terminal.
        """
        if log_level is None:
            log_level = os.environ.get(LOG_LEVEL_ENV)
        level = logging.WARNING
        if log_level:
            level = logging.getLevelNamesMapping().get(log_level.upper(), level)
        stream = sys.stderr
        if color is None:
            color = stream.isatty()
        return cls(level=level, stream=stream, color=color)

    @property
    def handler(self) -> logging.Handler:
        """The handler writing to this configuration's sink.

        Colored output is rendered by rich, plain output by a stream handler.
        """
        if self._handler is None:
            handler: logging.Handler
            if self.color:
                console = Console(
                    file=self.stream, force_terminal=True, color_system="standard"
                )
                handler = RichHandler(
                    console=console, show_time=False, show_path=False
                )
                handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
            else:
                handler = logging.StreamHandler(self.stream)
                handler.setFormatter(logging.Formatter(FORMAT))
            handler.setLevel(self.level)
            self._handler = handler
        return self._handler

    def logger(self, name: str) -> logging.Logger:
        """Return a logger for `name` that writes to this configuration's sink."""
        if (logger := self._loggers.get(name)) is None:
            logger = logging.Logger(name, self.level)
            logger.propagate = False
            logger.addHandler(self.handler)
            self._loggers[name] = logger
        return logger
