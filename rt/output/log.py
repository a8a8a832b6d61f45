"""Logging setup and the context logger used by release operations.

Every message about a module, train or iteration is prefixed with a fixed
width context column so that interleaved output from concurrent module
operations stays readable:

    Commons        > Building 2.4.0-M1
    2020.0.0       > Build finished: 18 modules, 18 succeeded, 0 failed, 0 skipped
"""

from __future__ import annotations

import logging

from rt.model.project import Project
from rt.model.train import Train
from rt.model.train_iteration import ModuleIteration, TrainIteration

__all__ = ["ContextLogger", "LOGGER_NAME", "LogContext", "configure_logging", "context_name"]

LOGGER_NAME = "rt"

_PREFIX = "%-14s > %s"

type LogContext = Project | ModuleIteration | Train | TrainIteration | str


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a rich handler to the ``rt`` logger.

    Calling this more than once only adjusts the level.
    """
    from rich.logging import RichHandler

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(show_path=False, markup=False, rich_tracebacks=verbose)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger


def context_name(context: LogContext) -> str:
    match context:
        case ModuleIteration():
            return context.project.name
        case Project() | Train():
            return context.name
        case TrainIteration():
            return str(context)
        case str():
            return context
        case _:
            raise TypeError(f"Unsupported log context: {context!r}")


class ContextLogger:
    """Logger prefixing each message with a project, train or iteration."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(f"{LOGGER_NAME}.release")

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def log(self, context: LogContext, template: str, *args: object) -> None:
        self._emit(logging.INFO, context, template, args)

    def warn(self, context: LogContext, template: str, *args: object) -> None:
        self._emit(logging.WARNING, context, template, args)

    def debug(self, context: LogContext, template: str, *args: object) -> None:
        self._emit(logging.DEBUG, context, template, args)

    def _emit(self, level: int, context: LogContext, template: str, args: tuple[object, ...]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        message = template % args if args else template
        self._logger.log(level, _PREFIX, context_name(context), message)
