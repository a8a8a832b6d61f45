"""Projections of a train onto an iteration and onto a single module.

``TrainIteration`` and ``ModuleIteration`` hold nothing but their key; every
derived property (artifact version, branch, support status) is computed on
access from the underlying train.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .iteration import Iteration
from .project import NamingStrategy, Project, SupportStatus
from .train import Module, Train
from .version import ArtifactVersion, Version

if TYPE_CHECKING:
    from rt.git.branch import Branch

__all__ = ["ModuleIteration", "TrainIteration"]


@dataclass(frozen=True, slots=True)
class TrainIteration:
    """A train at one of its iterations, e.g. ``Ockham M1``."""

    train: Train
    iteration: Iteration

    def __post_init__(self) -> None:
        if self.iteration not in self.train.iterations:
            raise ValueError(f"Train {self.train.name} has no iteration {self.iteration}")

    def __iter__(self) -> Iterator[ModuleIteration]:
        return iter(self.modules())

    def modules(self) -> list[ModuleIteration]:
        """All modules of the train at this iteration, in train order."""
        return [ModuleIteration(self, module) for module in self.train.modules]

    def modules_except(self, *exclusions: Project) -> list[ModuleIteration]:
        return [m for m in self.modules() if m.project not in exclusions]

    def module(self, project: Project) -> ModuleIteration | None:
        module = self.train.find_module(project)
        if module is None:
            return None
        return ModuleIteration(self, module)

    def require_module(self, project: Project) -> ModuleIteration:
        """Module for ``project``.

        Raises:
            ValueError: If the project does not take part in the train.
        """
        module = self.module(project)
        if module is None:
            raise ValueError(f"{project.name} is not part of {self}")
        return module

    def module_version(self, project: Project) -> ArtifactVersion:
        return self.require_module(project).version

    def contains(self, project: Project) -> bool:
        return self.train.contains(project)

    def previous_module_iteration(self, module: ModuleIteration) -> ModuleIteration:
        """The same module at the preceding iteration of this train.

        Raises:
            IterationBoundaryError: If this is the train's first iteration.
        """
        previous = self.train.iterations.previous(self.iteration)
        return TrainIteration(self.train, previous).require_module(module.project)

    # -- naming -------------------------------------------------------------

    @property
    def calver(self) -> Version | None:
        """CalVer of this iteration, e.g. ``2020.0.1`` for SR1 of ``2020.0``."""
        if self.train.calver is None:
            return None
        return self.train.calver.with_bugfix(self.iteration.bugfix_value)

    @property
    def name(self) -> str:
        calver = self.calver
        if calver is not None:
            return calver.to_major_minor_bugfix()
        return self.train.name

    @property
    def release_train_name_and_version(self) -> str:
        calver = self.calver
        if calver is not None:
            if self.iteration.is_milestone or self.iteration.is_release_candidate:
                return f"{calver.to_major_minor_bugfix()}-{self.iteration}"
            return calver.to_major_minor_bugfix()

        if self.iteration.is_ga:
            return f"{self.train.name}-RELEASE"
        return f"{self.train.name}-{self.iteration}"

    @property
    def next_bugfix_name(self) -> str:
        """CalVer of the next service release, e.g. ``2020.0.2`` after SR1."""
        calver = self._require_calver()
        if self.iteration.is_ga or self.iteration.is_service_release:
            return calver.with_bugfix(self.iteration.bugfix_value + 1).to_major_minor_bugfix()
        return calver.to_major_minor_bugfix()

    @property
    def next_iteration_name(self) -> str:
        """CalVer of the next generation, e.g. ``2020.1.0`` after ``2020.0``."""
        return self._require_calver().next_minor().to_major_minor_bugfix()

    # -- status -------------------------------------------------------------

    @property
    def support_status(self) -> SupportStatus:
        return self.train.support_status

    @property
    def is_commercial(self) -> bool:
        return self.train.is_commercial

    @property
    def is_public(self) -> bool:
        """Public iterations are published to the open-source repositories."""
        return not self.train.is_commercial

    def _require_calver(self) -> Version:
        if self.train.calver is None:
            raise ValueError(f"Train {self.train.name} does not use CalVer")
        return self.train.calver

    def __str__(self) -> str:
        calver = self.calver
        if calver is not None:
            return calver.to_major_minor_bugfix()
        return f"{self.train.name} {self.iteration}"


@dataclass(frozen=True, slots=True)
class ModuleIteration:
    """One module of a train iteration."""

    train_iteration: TrainIteration
    module: Module

    @property
    def project(self) -> Project:
        return self.module.project

    @property
    def train(self) -> Train:
        return self.train_iteration.train

    @property
    def iteration(self) -> Iteration:
        return self.train_iteration.iteration

    @property
    def version(self) -> ArtifactVersion:
        """Artifact version released by this module in this iteration."""
        return ArtifactVersion.from_iteration(
            self.module.version, self.iteration, self.train.uses_modifier_format
        )

    @property
    def is_branch_version(self) -> bool:
        """Released from a version branch instead of main."""
        return self.iteration.is_service_release or self.train.always_use_branch

    @property
    def is_commercial(self) -> bool:
        return self.train.is_commercial

    @property
    def support_status(self) -> SupportStatus:
        return self.train.support_status

    @property
    def branch(self) -> Branch:
        from rt.git.branch import Branch

        return Branch.from_module(self)

    def repository_name(self, naming: NamingStrategy) -> str:
        return naming.repository(self.project, self.support_status)

    # -- display ------------------------------------------------------------

    @property
    def short_version_string(self) -> str:
        """``2.4 M1`` for previews and GA, ``2.4.1`` for service releases."""
        if self.iteration.is_service_release:
            return self.version.short_string()
        if self.project.use_short_version_milestones:
            return str(self.version)
        return f"{self.module.version} {self.iteration}"

    @property
    def medium_version_string(self) -> str:
        return f"{self.short_version_string} ({self.train_iteration})"

    @property
    def full_version_string(self) -> str:
        return f"{self.version} ({self.train_iteration})"

    def __str__(self) -> str:
        return f"{self.project.name} {self.short_version_string}"
