from __future__ import annotations

import typer

from rt.cli.context import build_context
from rt.core.errors import ErrorCode
from rt.model.project import SupportStatus


def projects(
    status: str | None = typer.Option(
        None, "--status", help="Only projects maintained as oss, commercial or eol."
    ),
) -> None:
    """List projects in build order with their dependencies."""
    ctx = build_context()

    selected: SupportStatus | None = None
    if status is not None:
        try:
            selected = SupportStatus(status.lower())
        except ValueError:
            allowed = ", ".join(s.value for s in SupportStatus)
            ctx.console.error(f"Unknown status {status!r} (expected one of: {allowed})")
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    rows = [
        [
            str(ctx.projects.index(project) + 1),
            project.name,
            ", ".join(project.dependencies) or "-",
            ctx.naming.full_name(project),
            project.maintainer.value,
            ctx.naming.repository(project),
        ]
        for project in ctx.projects.all(selected)
    ]
    ctx.console.table(["#", "Project", "Depends on", "Name", "Maintainer", "Repository"], rows)
