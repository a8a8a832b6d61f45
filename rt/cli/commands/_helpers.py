"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import typer

from rt.core.errors import ErrorCode
from rt.core.result import Err, Ok
from rt.model.errors import ConfigurationError
from rt.model.phase import Phase
from rt.output.errors import print_lookup_error

if TYPE_CHECKING:
    from rt.cli.context import CLIContext
    from rt.model.train_iteration import ModuleIteration, TrainIteration


def resolve_iteration(ctx: CLIContext, text: str) -> TrainIteration:
    """Parse ``Ockham M1`` or ``2020.0.1``, exiting with a user error on a miss."""
    match ctx.trains.parse_iteration(text):
        case Ok(iteration):
            return iteration
        case Err(missing):
            print_lookup_error(missing, ctx.console)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))


def resolve_phase(ctx: CLIContext, text: str) -> Phase:
    try:
        return Phase.parse(text)
    except ConfigurationError as e:
        ctx.console.error(str(e))
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))


def modules_in_build_order(ctx: CLIContext, train_iteration: TrainIteration) -> list[ModuleIteration]:
    return sorted(train_iteration.modules(), key=lambda m: ctx.projects.index(m.project))
