from __future__ import annotations

import typer

from rt.cli.context import build_context
from rt.core.errors import ErrorCode
from rt.core.result import Err, Ok
from rt.output.errors import print_lookup_error


def trains(
    selection: str | None = typer.Argument(
        None, help="Comma-separated train names, or the number of latest trains."
    ),
) -> None:
    """List release trains."""
    ctx = build_context()

    match ctx.trains.select(selection, ctx.config.trains.default_last):
        case Ok(selected):
            pass
        case Err(missing):
            print_lookup_error(missing, ctx.console)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    rows = [
        [
            train.name,
            str(train.calver) if train.calver is not None else "-",
            train.support_status.value,
            ", ".join(str(m) for m in train.modules),
        ]
        for train in selected
    ]
    ctx.console.table(["Train", "CalVer", "Support", "Modules"], rows)
