"""Release build steps applied across a train iteration.

``BuildOperations`` selects a ``BuildSystem`` per project and runs one step
for every module through the orchestrator. Build systems are external
collaborators (e.g. a Maven wrapper); they are injected, never created here.

Usage:
    operations = BuildOperations(projects, orchestrator, Dispatcher([(lambda p: True, maven)]))
    summary = operations.build(iteration)
    if not summary.is_success:
        ...
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from rt.core.result import Err, Ok, Result
from rt.model.phase import Phase
from rt.model.projects import ProjectRegistry
from rt.model.train_iteration import ModuleIteration, TrainIteration
from rt.output.log import ContextLogger

from .dispatch import Dispatcher, NoImplementation
from .executor import ExecutionMode, Orchestrator, Summary
from .update_information import UpdateInformation

__all__ = ["BuildOperations", "BuildSystem", "MissingBuildSystemError"]


class BuildSystem(Protocol):
    """Build tool integration for the modules it supports."""

    def update_project_descriptors(
        self, module: ModuleIteration, information: UpdateInformation
    ) -> ModuleIteration: ...

    def prepare_version(self, module: ModuleIteration, phase: Phase) -> ModuleIteration: ...

    def trigger_build(self, module: ModuleIteration) -> ModuleIteration: ...

    def trigger_distribution_build(self, module: ModuleIteration) -> ModuleIteration: ...

    def trigger_pre_release_check(self, module: ModuleIteration) -> ModuleIteration: ...


class MissingBuildSystemError(LookupError):
    """Raised inside an orchestrated step when no build system supports a module."""

    def __init__(self, missing: NoImplementation) -> None:
        self.missing = missing
        super().__init__(missing.message)


class BuildOperations:
    def __init__(
        self,
        projects: ProjectRegistry,
        orchestrator: Orchestrator,
        build_systems: Dispatcher[BuildSystem],
        *,
        context_logger: ContextLogger | None = None,
    ) -> None:
        self._projects = projects
        self._orchestrator = orchestrator
        self._build_systems = build_systems
        self._log = context_logger or ContextLogger()

    def update_project_descriptors(
        self, iteration: TrainIteration, phase: Phase
    ) -> Summary[ModuleIteration]:
        """Write the versions of ``phase`` into every module's descriptors."""
        parent = self._projects.parent
        if parent is None:
            raise ValueError("Updating project descriptors requires a parent project")

        information = UpdateInformation(iteration, phase, parent)
        summary = self._ordered(
            iteration, lambda system, module: system.update_project_descriptors(module, information)
        )
        self._log.log(iteration, "Update project descriptors done: %s", summary)
        return summary

    def prepare_versions(self, iteration: TrainIteration, phase: Phase) -> Summary[ModuleIteration]:
        summary = self._ordered(iteration, lambda system, module: system.prepare_version(module, phase))
        self._log.log(iteration, "Prepare versions: %s", summary)
        return summary

    def prepare_version(
        self, module: ModuleIteration, phase: Phase
    ) -> Result[ModuleIteration, NoImplementation]:
        """Prepare the version of a single module."""
        match self._build_systems.resolve(module.project):
            case Ok(system):
                return Ok(system.prepare_version(module, phase))
            case Err(missing):
                return Err(missing)

    def build(self, iteration: TrainIteration) -> Summary[ModuleIteration]:
        """Build every module, dependencies first."""
        summary = self._ordered(iteration, lambda system, module: system.trigger_build(module))
        self._log.log(iteration, "Build finished: %s", summary)
        return summary

    def distribute_resources(self, iteration: TrainIteration) -> Summary[ModuleIteration]:
        summary = self._any_order(
            iteration, lambda system, module: system.trigger_distribution_build(module)
        )
        self._log.log(iteration, "Distribution build: %s", summary)
        return summary

    def run_pre_release_checks(self, iteration: TrainIteration) -> Summary[ModuleIteration]:
        summary = self._any_order(
            iteration, lambda system, module: system.trigger_pre_release_check(module)
        )
        self._log.log(iteration, "Pre-release checks: %s", summary)
        return summary

    # -- helpers ------------------------------------------------------------

    def _ordered[T](
        self, iteration: TrainIteration, step: Callable[[BuildSystem, ModuleIteration], T]
    ) -> Summary[T]:
        return self._orchestrator.run(iteration, ExecutionMode.ORDERED, self._with_build_system(step))

    def _any_order[T](
        self, iteration: TrainIteration, step: Callable[[BuildSystem, ModuleIteration], T]
    ) -> Summary[T]:
        return self._orchestrator.run(iteration, ExecutionMode.ANY_ORDER, self._with_build_system(step))

    def _with_build_system[T](
        self, step: Callable[[BuildSystem, ModuleIteration], T]
    ) -> Callable[[ModuleIteration], T]:
        def operation(module: ModuleIteration) -> T:
            match self._build_systems.resolve(module.project):
                case Ok(system):
                    return step(system, module)
                case Err(missing):
                    raise MissingBuildSystemError(missing)

        return operation
