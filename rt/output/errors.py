"""Presentation of lookup misses and orchestration results.

Module failures are shown verbatim: which module, and what it raised.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rt.build.dispatch import NoImplementation
from rt.build.executor import ModuleFailure, Summary
from rt.core.errors import ErrorCode
from rt.core.result import Err, Ok
from rt.model.errors import NotFound
from rt.output.console import Style

if TYPE_CHECKING:
    from rt.output.console import ConsoleProtocol

__all__ = ["print_lookup_error", "print_summary", "summary_exit_code"]


def print_lookup_error(error: NotFound | NoImplementation, console: ConsoleProtocol) -> None:
    match error:
        case NotFound(available=available):
            console.error(error.message)
            if available:
                console.print(f"Available: {', '.join(available)}", Style.DIM)
        case NoImplementation():
            console.error(error.message)


def print_summary[T](summary: Summary[T], console: ConsoleProtocol, title: str | None = None) -> None:
    """Print one line per module followed by the totals."""
    if title:
        console.header(title)

    for module, outcome in summary:
        match outcome:
            case Ok():
                console.print(f"{module.project.name}: ok", Style.SUCCESS)
            case Err(ModuleFailure(kind="skipped", upstream=upstream)):
                console.print(f"{module.project.name}: skipped (upstream {', '.join(upstream)})", Style.WARNING)
            case Err(ModuleFailure(error=error)):
                console.print(f"{module.project.name}: {type(error).__name__}: {error}", Style.ERROR)

    if summary.is_success:
        console.success(str(summary))
    else:
        console.error(str(summary))


def summary_exit_code[T](summary: Summary[T]) -> int:
    return int(ErrorCode.OK if summary.is_success else ErrorCode.BUILD_ERROR)
