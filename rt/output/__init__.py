"""Output abstraction layer."""

from .console import ConsoleProtocol, MockConsole, RichConsole, Style
from .log import ContextLogger, configure_logging

__all__ = [
    "ConsoleProtocol",
    "ContextLogger",
    "MockConsole",
    "RichConsole",
    "Style",
    "configure_logging",
]
