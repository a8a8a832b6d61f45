from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import typer

from rt.core.config import CONFIG_FILE_NAME, Config, load_config_or_default
from rt.core.errors import ErrorCode
from rt.core.result import Err
from rt.model.defaults import default_projects, default_trains
from rt.model.errors import ModelError
from rt.model.project import NamingStrategy
from rt.model.projects import ProjectRegistry
from rt.model.trains import TrainRegistry
from rt.output.console import ConsoleProtocol, RichConsole

# Set by the --config option of the root command.
CONFIG_ENV = "RT_CONFIG"


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    naming: NamingStrategy
    projects: ProjectRegistry
    trains: TrainRegistry
    console: ConsoleProtocol


def config_path() -> Path:
    configured = os.environ.get(CONFIG_ENV)
    if configured:
        return Path(configured)
    return Path.cwd() / CONFIG_FILE_NAME


def build_context() -> CLIContext:
    path = config_path()
    config_result = load_config_or_default(path)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))

    config = config_result.value
    naming = NamingStrategy.from_config(config.naming)

    try:
        projects = default_projects(naming)
        trains = default_trains(projects)
    except (ModelError, ValueError) as e:
        typer.echo(f"error: invalid release model: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))

    return CLIContext(
        config=config,
        naming=naming,
        projects=projects,
        trains=trains,
        console=RichConsole(),
    )
