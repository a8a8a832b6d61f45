from __future__ import annotations

import os
from pathlib import Path

import typer

from rt import __version__
from rt.cli.commands.iteration import modules, simulate, versions, waves
from rt.cli.commands.projects import projects
from rt.cli.commands.trains import trains
from rt.cli.context import CONFIG_ENV
from rt.core.errors import ErrorCode
from rt.output.log import configure_logging


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(projects)
app.command()(trains)
app.command()(modules)
app.command()(waves)
app.command()(versions)
app.command()(simulate)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    config: Path | None = typer.Option(None, "--config", help="Path to rt.toml."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    configure_logging(verbose)

    if config is not None:
        path = config.expanduser()
        if not path.is_file():
            typer.echo(f"error: config file not found: {path}", err=True)
            raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))
        os.environ[CONFIG_ENV] = str(path.resolve())


def main() -> None:
    app()
