"""Commands inspecting a single train iteration."""

from __future__ import annotations

import typer

from rt.build.executor import ExecutionMode, Orchestrator
from rt.build.update_information import UpdateInformation
from rt.cli.commands._helpers import modules_in_build_order, resolve_iteration, resolve_phase
from rt.cli.context import build_context
from rt.core.errors import ErrorCode
from rt.model.train_iteration import ModuleIteration
from rt.output.console import Style
from rt.output.errors import print_summary, summary_exit_code
from rt.output.log import ContextLogger


def modules(
    iteration: str = typer.Argument(..., help="Train iteration, e.g. 'Ockham M1' or 2020.0.1."),
) -> None:
    """Show version, branch and support status of every module."""
    ctx = build_context()
    train_iteration = resolve_iteration(ctx, iteration)

    rows = [
        [
            module.project.name,
            str(module.version),
            module.short_version_string,
            str(module.branch.with_remote(ctx.config.git.remote)),
            module.support_status.value,
            module.repository_name(ctx.naming),
        ]
        for module in modules_in_build_order(ctx, train_iteration)
    ]
    ctx.console.table(
        ["Project", "Version", "Short", "Branch", "Support", "Repository"],
        rows,
        title=f"{train_iteration.train.name} {train_iteration.iteration} ({train_iteration})",
    )


def waves(
    iteration: str = typer.Argument(..., help="Train iteration, e.g. 'Ockham M1' or 2020.0.1."),
) -> None:
    """Show the dependency waves modules are built in."""
    ctx = build_context()
    train_iteration = resolve_iteration(ctx, iteration)

    for number, wave in enumerate(ctx.projects.waves(train_iteration.train.projects), start=1):
        ctx.console.print(f"wave {number}: {', '.join(p.name for p in wave)}")


def versions(
    iteration: str = typer.Argument(..., help="Train iteration, e.g. 'Ockham M1' or 2020.0.1."),
    phase: str = typer.Option("prepare", "--phase", "-p", help="prepare, cleanup or maintenance."),
) -> None:
    """Show the versions written into project descriptors for a phase."""
    ctx = build_context()
    train_iteration = resolve_iteration(ctx, iteration)
    selected = resolve_phase(ctx, phase)

    parent = ctx.projects.parent
    if parent is None or not train_iteration.contains(parent):
        ctx.console.error(f"{train_iteration} does not contain the parent project")
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))

    info = UpdateInformation(train_iteration, selected, parent)

    ctx.console.print(f"train: {info.release_train_version()}", Style.HEADER)
    ctx.console.print(f"parent: {info.parent_version_to_set()}")
    rows = [
        [module.project.name, str(info.project_version_to_set(module.project))]
        for module in modules_in_build_order(ctx, train_iteration)
    ]
    ctx.console.table(["Project", "Version"], rows)
    for repository in info.repositories():
        ctx.console.print(f"repository: {repository.id} {repository.url}", Style.DIM)


def simulate(
    iteration: str = typer.Argument(..., help="Train iteration, e.g. 'Ockham M1' or 2020.0.1."),
    any_order: bool = typer.Option(False, "--any-order", help="Run without wave barriers."),
) -> None:
    """Walk the modules through the orchestrator without building anything."""
    ctx = build_context()
    train_iteration = resolve_iteration(ctx, iteration)

    log = ContextLogger()

    def announce(module: ModuleIteration) -> str:
        log.log(module, "Would release %s from %s", module.version, module.branch)
        return str(module.version)

    orchestrator = Orchestrator.from_config(ctx.projects, ctx.config)
    mode = ExecutionMode.ANY_ORDER if any_order else ExecutionMode.ORDERED
    summary = orchestrator.run(train_iteration, mode, announce)

    print_summary(summary, ctx.console, title=f"Simulated release of {train_iteration}")
    code = summary_exit_code(summary)
    if code != int(ErrorCode.OK):
        raise typer.Exit(code=code)
