"""Release trains: named generations bundling one version per project.

Trains are immutable. A new generation is derived from its predecessor with
``Train.next``, which carries every module forward (bumped according to the
transition) unless a module override is given. Further ``with_*`` and
``filter_modules`` calls each return a new train.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

from rt.core.result import Err, Ok, Result

from .errors import NotFound
from .iteration import DEFAULT_ITERATIONS, Iteration, Iterations
from .project import Project, SupportStatus
from .version import Version

if TYPE_CHECKING:
    from .train_iteration import TrainIteration

__all__ = ["Module", "Train", "Transition"]


class Transition(Enum):
    """Default version bump applied to modules carried into the next train."""

    MAJOR = "major"
    MINOR = "minor"


@dataclass(frozen=True, slots=True)
class Module:
    """A project at a given version within a train."""

    project: Project
    version: Version

    @classmethod
    def of(cls, project: Project, version: str) -> Module:
        return cls(project, Version.parse(version))

    def next(self, transition: Transition) -> Module:
        match transition:
            case Transition.MAJOR:
                return Module(self.project, self.version.next_major())
            case Transition.MINOR:
                return Module(self.project, self.version.next_minor())
            case _:
                raise AssertionError(f"unexpected transition: {transition}")

    def __str__(self) -> str:
        return f"{self.project.name} {self.version}"


@dataclass(frozen=True, slots=True)
class Train:
    """A named generation of the product family.

    Attributes:
        name: Train name, e.g. ``Ockham``.
        modules: Participating modules in declaration order.
        iterations: Release stages of this train.
        calver: CalVer generation (``2020.0``) or None for classic names.
        support_status: Whether the generation is OSS, commercial or EOL.
        always_use_branch: Release every iteration from a version branch.
    """

    name: str
    modules: tuple[Module, ...]
    iterations: Iterations = DEFAULT_ITERATIONS
    calver: Version | None = None
    support_status: SupportStatus = SupportStatus.OSS
    always_use_branch: bool = False

    def __post_init__(self) -> None:
        seen: set[Project] = set()
        for module in self.modules:
            if module.project in seen:
                raise ValueError(f"Train {self.name} lists {module.project.name} twice")
            seen.add(module.project)

    @classmethod
    def of(cls, name: str, *modules: Module) -> Train:
        return cls(name, tuple(modules))

    # -- derivation -------------------------------------------------------

    def next(self, name: str, transition: Transition, *overrides: Module) -> Train:
        """Derive the next generation.

        Every module is bumped by ``transition`` unless an override for its
        project is given. Overrides for projects not yet part of this train
        add them. The iterations carry over; CalVer, support status and
        branching start from their defaults and are set with ``with_*``.
        """
        by_project = {module.project: module for module in overrides}

        modules = [by_project.pop(m.project, None) or m.next(transition) for m in self.modules]
        modules.extend(by_project.values())

        return Train(name, tuple(modules), iterations=self.iterations)

    def filter_modules(self, predicate: Callable[[Module], bool]) -> Train:
        """Keep only the modules matching ``predicate``."""
        return replace(self, modules=tuple(m for m in self.modules if predicate(m)))

    def without(self, *projects: Project) -> Train:
        return self.filter_modules(lambda m: m.project not in projects)

    def with_calver(self, calver: str | Version) -> Train:
        """Use CalVer naming. Calver-versioned modules take the generation as version."""
        version = Version.parse(calver) if isinstance(calver, str) else calver
        generation = Version(version.major, version.minor)
        modules = tuple(
            Module(m.project, generation) if m.project.calver_versioned else m for m in self.modules
        )
        return replace(self, calver=generation, modules=modules)

    def with_support_status(self, status: SupportStatus) -> Train:
        return replace(self, support_status=status)

    def with_always_use_branch(self, always_use_branch: bool = True) -> Train:
        return replace(self, always_use_branch=always_use_branch)

    def with_iterations(self, iterations: Iterations) -> Train:
        return replace(self, iterations=iterations)

    # -- queries ----------------------------------------------------------

    @property
    def uses_calver(self) -> bool:
        return self.calver is not None

    @property
    def uses_modifier_format(self) -> bool:
        """CalVer generations publish ``2.4.0-M1`` style versions."""
        return self.uses_calver

    @property
    def is_commercial(self) -> bool:
        return self.support_status.is_commercial

    @property
    def projects(self) -> tuple[Project, ...]:
        return tuple(m.project for m in self.modules)

    def find_module(self, project: Project) -> Module | None:
        for module in self.modules:
            if module.project == project:
                return module
        return None

    def contains(self, project: Project) -> bool:
        return self.find_module(project) is not None

    def at(self, iteration: Iteration) -> TrainIteration:
        """This train at ``iteration``."""
        from .train_iteration import TrainIteration

        return TrainIteration(self, iteration)

    def iteration(self, name: str) -> Result[TrainIteration, NotFound]:
        """This train at the iteration named ``name`` (``M1``, ``GA``, ``SR2``)."""
        match self.iterations.find(name):
            case Ok(iteration):
                return Ok(self.at(iteration))
            case Err(missing):
                return Err(missing)

    def __str__(self) -> str:
        if self.calver is not None:
            return f"{self.name} ({self.calver})"
        return self.name
