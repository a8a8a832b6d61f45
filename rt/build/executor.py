"""Dependency-ordered concurrent execution of per-module operations.

The orchestrator applies one operation to every module of a train iteration
on a shared worker pool:

- ``ExecutionMode.ORDERED`` partitions the modules into dependency waves.
  Modules of a wave run concurrently; the next wave starts only after every
  operation of the current wave has returned.
- ``ExecutionMode.ANY_ORDER`` runs all modules concurrently.

Failures never escape ``run``. Each module gets exactly one outcome in the
returned ``Summary``: ``Ok(value)`` or ``Err(ModuleFailure)``. With the
``skip-dependents`` policy, a module in a later wave that depends on a
failed (or skipped) module is not run and is recorded as skipped.

Usage:
    orchestrator = Orchestrator(projects, workers=4)
    summary = orchestrator.run(iteration, ExecutionMode.ORDERED, build)
    if not summary.is_success:
        for failure in summary.failures:
            print(failure.message)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor, as_completed, wait
from dataclasses import dataclass
from enum import Enum
from typing import Literal

from rt.core.config import DEFAULT_FAILURE_POLICY, Config, FailurePolicy
from rt.core.result import Err, Ok, Result
from rt.model.project import Project
from rt.model.projects import ProjectRegistry
from rt.model.train_iteration import ModuleIteration, TrainIteration
from rt.output.log import ContextLogger

__all__ = [
    "ExecutionMode",
    "ModuleFailure",
    "Orchestrator",
    "Outcome",
    "Summary",
]

logger = logging.getLogger(__name__)


class ExecutionMode(Enum):
    ORDERED = "ordered"
    ANY_ORDER = "any-order"


@dataclass(frozen=True, slots=True)
class ModuleFailure:
    """Why a module has no result.

    Attributes:
        module: Name of the project whose operation did not succeed.
        kind: ``failed`` if the operation raised, ``skipped`` if it was not
            run because an upstream module did not succeed.
        error: The exception raised by the operation.
        upstream: Upstream modules that did not succeed, in build order.
    """

    module: str
    kind: Literal["failed", "skipped"]
    error: Exception | None = None
    upstream: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        if self.kind == "skipped":
            return f"{self.module}: skipped due to upstream failure in {', '.join(self.upstream)}"
        return f"{self.module}: {type(self.error).__name__}: {self.error}"


type Outcome[T] = Result[T, ModuleFailure]


class Summary[T]:
    """One outcome per module of an orchestration run.

    The modules of the run are fixed up front; workers record each
    module's outcome exactly once under a lock. Outcomes are reported in
    build order.
    """

    def __init__(self, modules: Iterable[ModuleIteration]) -> None:
        self._modules: dict[Project, ModuleIteration] = {m.project: m for m in modules}
        self._outcomes: dict[Project, Outcome[T]] = {}
        self._lock = threading.Lock()

    def record(self, module: ModuleIteration, outcome: Outcome[T]) -> None:
        """Store the outcome of ``module``.

        Raises:
            KeyError: If the module is not part of this run.
            ValueError: If the module already has an outcome.
        """
        with self._lock:
            if module.project not in self._modules:
                raise KeyError(module.project.name)
            if module.project in self._outcomes:
                raise ValueError(f"Outcome of {module.project.name} recorded twice")
            self._outcomes[module.project] = outcome

    def outcome(self, project: Project) -> Outcome[T] | None:
        with self._lock:
            return self._outcomes.get(project)

    @property
    def outcomes(self) -> list[tuple[ModuleIteration, Outcome[T]]]:
        with self._lock:
            return [(m, self._outcomes[p]) for p, m in self._modules.items() if p in self._outcomes]

    @property
    def successes(self) -> list[ModuleIteration]:
        return [m for m, outcome in self.outcomes if isinstance(outcome, Ok)]

    @property
    def failures(self) -> list[ModuleFailure]:
        return self._errors("failed")

    @property
    def skipped(self) -> list[ModuleFailure]:
        return self._errors("skipped")

    @property
    def pending(self) -> list[ModuleIteration]:
        """Modules without an outcome; empty once a run has returned."""
        with self._lock:
            return [m for p, m in self._modules.items() if p not in self._outcomes]

    @property
    def is_success(self) -> bool:
        return not self.pending and not self.failures and not self.skipped

    def values(self) -> list[T]:
        """Values of the successful modules."""
        return [outcome.value for _, outcome in self.outcomes if isinstance(outcome, Ok)]

    def __iter__(self) -> Iterator[tuple[ModuleIteration, Outcome[T]]]:
        return iter(self.outcomes)

    def __len__(self) -> int:
        with self._lock:
            return len(self._outcomes)

    def _errors(self, kind: Literal["failed", "skipped"]) -> list[ModuleFailure]:
        return [
            outcome.error
            for _, outcome in self.outcomes
            if isinstance(outcome, Err) and outcome.error.kind == kind
        ]

    def __str__(self) -> str:
        return (
            f"{len(self._modules)} modules, {len(self.successes)} succeeded, "
            f"{len(self.failures)} failed, {len(self.skipped)} skipped"
        )


class Orchestrator:
    """Runs per-module operations across a train iteration."""

    def __init__(
        self,
        projects: ProjectRegistry,
        *,
        workers: int = 1,
        failure_policy: FailurePolicy = DEFAULT_FAILURE_POLICY,
        context_logger: ContextLogger | None = None,
    ) -> None:
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        self._projects = projects
        self._workers = workers
        self._failure_policy: FailurePolicy = failure_policy
        self._log = context_logger or ContextLogger()

    @classmethod
    def from_config(cls, projects: ProjectRegistry, config: Config) -> Orchestrator:
        return cls(
            projects,
            workers=config.executor.worker_count(),
            failure_policy=config.orchestration.failure_policy,
        )

    @property
    def workers(self) -> int:
        return self._workers

    @property
    def failure_policy(self) -> FailurePolicy:
        return self._failure_policy

    def run[T](
        self,
        train_iteration: TrainIteration,
        mode: ExecutionMode,
        operation: Callable[[ModuleIteration], T],
        *exclusions: Project,
    ) -> Summary[T]:
        """Apply ``operation`` to every module not listed in ``exclusions``."""
        modules = self._projects_sorted(train_iteration.modules_except(*exclusions))
        summary: Summary[T] = Summary(modules)

        with ThreadPoolExecutor(max_workers=self._workers, thread_name_prefix="rt-worker") as pool:
            match mode:
                case ExecutionMode.ORDERED:
                    self._run_ordered(pool, modules, operation, summary)
                case ExecutionMode.ANY_ORDER:
                    self._run_any_order(pool, modules, operation, summary)
                case _:
                    raise AssertionError(f"unexpected execution mode: {mode}")

        self._log.log(train_iteration, "Finished: %s", summary)
        return summary

    def _run_ordered[T](
        self,
        pool: ThreadPoolExecutor,
        modules: list[ModuleIteration],
        operation: Callable[[ModuleIteration], T],
        summary: Summary[T],
    ) -> None:
        by_project = {m.project: m for m in modules}
        unsuccessful: set[Project] = set()

        for number, wave in enumerate(self._projects.waves(list(by_project)), start=1):
            logger.debug("Wave %d: %s", number, ", ".join(p.name for p in wave))

            runnable: list[ModuleIteration] = []
            for project in wave:
                module = by_project[project]
                upstream = self._failed_upstream(project, unsuccessful)
                if upstream:
                    self._log.warn(module, "Skipped, upstream failed: %s", ", ".join(upstream))
                    summary.record(module, Err(ModuleFailure(project.name, "skipped", upstream=upstream)))
                    unsuccessful.add(project)
                else:
                    runnable.append(module)

            futures = [pool.submit(self._execute, m, operation, summary) for m in runnable]
            wait(futures)
            _reraise_internal(futures)

            unsuccessful.update(
                m.project for m in runnable if isinstance(summary.outcome(m.project), Err)
            )

    def _run_any_order[T](
        self,
        pool: ThreadPoolExecutor,
        modules: list[ModuleIteration],
        operation: Callable[[ModuleIteration], T],
        summary: Summary[T],
    ) -> None:
        futures = [pool.submit(self._execute, m, operation, summary) for m in modules]
        for future in as_completed(futures):
            future.result()

    def _execute[T](
        self,
        module: ModuleIteration,
        operation: Callable[[ModuleIteration], T],
        summary: Summary[T],
    ) -> None:
        try:
            outcome: Outcome[T] = Ok(operation(module))
        except Exception as e:
            self._log.warn(module, "Failed: %s", e)
            logger.debug("Operation failed for %s", module.project.name, exc_info=True)
            outcome = Err(ModuleFailure(module.project.name, "failed", error=e))
        summary.record(module, outcome)

    def _failed_upstream(self, project: Project, unsuccessful: set[Project]) -> tuple[str, ...]:
        if self._failure_policy != "skip-dependents" or not unsuccessful:
            return ()
        upstream = self._projects.dependencies_of(project) & unsuccessful
        return tuple(p.name for p in self._projects.sort(upstream))

    def _projects_sorted(self, modules: list[ModuleIteration]) -> list[ModuleIteration]:
        return sorted(modules, key=lambda m: self._projects.index(m.project))


def _reraise_internal(futures: list[Future[None]]) -> None:
    # Operation errors are captured by _execute; anything left is a bug here.
    for future in futures:
        future.result()
