from __future__ import annotations

from rt.build.dispatch import NoImplementation
from rt.build.executor import ModuleFailure, Summary
from rt.core.errors import ErrorCode
from rt.core.result import Err, Ok
from rt.model.errors import NotFound
from rt.model.iteration import GA
from rt.model.project import Project
from rt.model.train import Module, Train
from rt.output.console import MockConsole, Style
from rt.output.errors import print_lookup_error, print_summary, summary_exit_code

BUILD = Project("Build")
COMMONS = Project("Commons", ("Build",))
JPA = Project("JPA", ("Commons",))


def _summary() -> Summary[str]:
    modules = Train.of("Moore", Module.of(BUILD, "2.2"), Module.of(COMMONS, "2.2"), Module.of(JPA, "2.2")).at(GA).modules()
    return Summary(modules)


def test_lookup_error_lists_alternatives() -> None:
    console = MockConsole()
    print_lookup_error(NotFound("train", "Lovelace", ("Ockham", "Pascal")), console)

    assert console.messages == ["error: No train named 'Lovelace'", "Available: Ockham, Pascal"]
    assert console.outputs[1].style == Style.DIM


def test_lookup_error_without_alternatives() -> None:
    console = MockConsole()
    print_lookup_error(NoImplementation("BOM", "build system"), console)

    assert console.messages == ["error: No build system supports project BOM"]


def test_successful_summary() -> None:
    summary = _summary()
    for module in summary.pending:
        summary.record(module, Ok("done"))

    console = MockConsole()
    print_summary(summary, console, title="Build")

    assert console.messages == [
        "Build",
        "Build: ok",
        "Commons: ok",
        "JPA: ok",
        "OK 3 modules, 3 succeeded, 0 failed, 0 skipped",
    ]
    assert summary_exit_code(summary) == int(ErrorCode.OK)


def test_failed_summary() -> None:
    summary = _summary()
    build, commons, jpa = summary.pending
    summary.record(build, Ok("done"))
    summary.record(commons, Err(ModuleFailure("Commons", "failed", error=RuntimeError("compile error"))))
    summary.record(jpa, Err(ModuleFailure("JPA", "skipped", upstream=("Commons",))))

    console = MockConsole()
    print_summary(summary, console)

    assert console.messages == [
        "Build: ok",
        "Commons: RuntimeError: compile error",
        "JPA: skipped (upstream Commons)",
        "error: 3 modules, 1 succeeded, 1 failed, 1 skipped",
    ]
    assert summary_exit_code(summary) == int(ErrorCode.BUILD_ERROR)
