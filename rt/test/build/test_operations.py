from __future__ import annotations

import threading
from collections.abc import Callable

import pytest

from rt.build.dispatch import Dispatcher, NoImplementation
from rt.build.executor import Orchestrator
from rt.build.operations import BuildOperations, BuildSystem, MissingBuildSystemError
from rt.build.update_information import UpdateInformation
from rt.core.result import Err, Ok
from rt.model.iteration import GA
from rt.model.phase import Phase
from rt.model.project import Project
from rt.model.projects import ProjectRegistry
from rt.model.train import Module, Train
from rt.model.train_iteration import ModuleIteration, TrainIteration

BOM = Project("BOM", calver_versioned=True)
BUILD = Project("Build")
COMMONS = Project("Commons", ("Build",))
JPA = Project("JPA", ("Commons",))

PROJECTS = ProjectRegistry([BOM, BUILD, COMMONS, JPA], parent="Build")


class RecordingBuildSystem:
    """Build system double that records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []
        self.versions: dict[str, str] = {}
        self._lock = threading.Lock()

    def _record(self, step: str, module: ModuleIteration) -> ModuleIteration:
        with self._lock:
            self.calls.append((step, module.project.name))
        return module

    def update_project_descriptors(
        self, module: ModuleIteration, information: UpdateInformation
    ) -> ModuleIteration:
        with self._lock:
            self.versions[module.project.name] = str(information.project_version_to_set(module.project))
        return self._record("update", module)

    def prepare_version(self, module: ModuleIteration, phase: Phase) -> ModuleIteration:
        return self._record(f"prepare-{phase}", module)

    def trigger_build(self, module: ModuleIteration) -> ModuleIteration:
        return self._record("build", module)

    def trigger_distribution_build(self, module: ModuleIteration) -> ModuleIteration:
        return self._record("distribute", module)

    def trigger_pre_release_check(self, module: ModuleIteration) -> ModuleIteration:
        return self._record("check", module)


def _iteration() -> TrainIteration:
    train = Train.of(
        "Ockham",
        Module.of(JPA, "2.4"),
        Module.of(BOM, "2020.0"),
        Module.of(COMMONS, "2.4"),
        Module.of(BUILD, "2.4"),
    ).with_calver("2020.0")
    return train.at(GA)


def _operations(
    maven: BuildSystem, bom: BuildSystem | None = None, projects: ProjectRegistry = PROJECTS
) -> BuildOperations:
    candidates: list[tuple[Callable[[Project], bool], BuildSystem]] = []
    if bom is not None:
        candidates.append((lambda p: p == BOM, bom))
    candidates.append((lambda p: p != BOM, maven))
    return BuildOperations(projects, Orchestrator(projects), Dispatcher(candidates, role="build system"))


class TestBuildOperations:
    def test_build_runs_in_dependency_order(self) -> None:
        maven, bom = RecordingBuildSystem(), RecordingBuildSystem()

        summary = _operations(maven, bom).build(_iteration())

        assert summary.is_success
        assert maven.calls == [("build", "Build"), ("build", "Commons"), ("build", "JPA")]
        assert bom.calls == [("build", "BOM")]

    def test_update_project_descriptors_uses_phase_versions(self) -> None:
        maven, bom = RecordingBuildSystem(), RecordingBuildSystem()

        summary = _operations(maven, bom).update_project_descriptors(_iteration(), Phase.CLEANUP)

        assert summary.is_success
        assert maven.versions == {"Build": "2.5.0-SNAPSHOT", "Commons": "2.5.0-SNAPSHOT", "JPA": "2.5.0-SNAPSHOT"}
        assert bom.versions == {"BOM": "2020.1.0-SNAPSHOT"}

    def test_update_project_descriptors_requires_parent(self) -> None:
        projects = ProjectRegistry([BOM, BUILD, COMMONS, JPA])
        with pytest.raises(ValueError, match="parent"):
            _operations(RecordingBuildSystem(), projects=projects).update_project_descriptors(
                _iteration(), Phase.PREPARE
            )

    def test_prepare_versions(self) -> None:
        maven, bom = RecordingBuildSystem(), RecordingBuildSystem()

        _operations(maven, bom).prepare_versions(_iteration(), Phase.MAINTENANCE)

        assert ("prepare-maintenance", "JPA") in maven.calls
        assert bom.calls == [("prepare-maintenance", "BOM")]

    def test_prepare_single_version(self) -> None:
        maven = RecordingBuildSystem()
        operations = _operations(maven)
        jpa = _iteration().require_module(JPA)

        assert operations.prepare_version(jpa, Phase.PREPARE) == Ok(jpa)
        assert operations.prepare_version(_iteration().require_module(BOM), Phase.PREPARE) == Err(
            NoImplementation("BOM", "build system")
        )

    def test_missing_build_system_fails_the_module(self) -> None:
        maven = RecordingBuildSystem()

        summary = _operations(maven).build(_iteration())

        assert [f.module for f in summary.failures] == ["BOM"]
        assert isinstance(summary.failures[0].error, MissingBuildSystemError)
        assert summary.failures[0].error.missing.project == "BOM"
        # BOM has no dependents, so the rest still builds.
        assert len(maven.calls) == 3

    @pytest.mark.parametrize(
        ("step", "call"),
        [("distribute_resources", "distribute"), ("run_pre_release_checks", "check")],
    )
    def test_any_order_steps(self, step: str, call: str) -> None:
        maven, bom = RecordingBuildSystem(), RecordingBuildSystem()

        summary = getattr(_operations(maven, bom), step)(_iteration())

        assert summary.is_success
        assert sorted(maven.calls) == [(call, "Build"), (call, "Commons"), (call, "JPA")]
        assert bom.calls == [(call, "BOM")]
