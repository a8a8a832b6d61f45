"""Versions to write into project descriptors for a release phase.

Usage:
    info = UpdateInformation(train_iteration, Phase.CLEANUP, parent=build)
    info.project_version_to_set(commons)   # 2.5.0-SNAPSHOT
    info.release_train_version()           # 2020.0.1-SNAPSHOT
"""

from __future__ import annotations

from dataclasses import dataclass

from rt.model.errors import ConfigurationError
from rt.model.phase import Phase
from rt.model.project import Project
from rt.model.train_iteration import TrainIteration
from rt.model.version import ArtifactVersion

from .repository import COMMERCIAL_RELEASE, COMMERCIAL_SNAPSHOT, MILESTONE, SNAPSHOT, Repository

__all__ = ["UpdateInformation"]


@dataclass(frozen=True, slots=True)
class UpdateInformation:
    """Phase-specific version computation for one train iteration.

    Attributes:
        train_iteration: The iteration being released.
        phase: The lifecycle stage the descriptors are updated for.
        parent: The shared build parent project.
    """

    train_iteration: TrainIteration
    phase: Phase
    parent: Project

    def project_version_to_set(self, project: Project) -> ArtifactVersion:
        """Version of ``project`` to write in this phase.

        Raises:
            ValueError: If the project is not part of the train.
            ConfigurationError: For an unsupported phase.
        """
        return self._for_phase(self.train_iteration.module_version(project))

    def parent_version_to_set(self) -> ArtifactVersion:
        """Version of the parent reference to write in this phase."""
        return self._for_phase(self.train_iteration.module_version(self.parent))

    def release_train_version(self) -> str:
        """Version string describing the release train as a whole."""
        iteration = self.train_iteration
        uses_calver = iteration.train.uses_calver

        match self.phase:
            case Phase.PREPARE:
                return iteration.release_train_name_and_version
            case Phase.MAINTENANCE if uses_calver:
                return f"{iteration.next_bugfix_name}-SNAPSHOT"
            case Phase.CLEANUP if uses_calver:
                if iteration.iteration.is_ga:
                    return f"{iteration.next_iteration_name}-SNAPSHOT"
                return f"{iteration.next_bugfix_name}-SNAPSHOT"
            case Phase.CLEANUP | Phase.MAINTENANCE:
                return f"{iteration.train.name}-BUILD-SNAPSHOT"
            case _:
                raise ConfigurationError(f"Unexpected phase: {self.phase!r}")

    def repositories(self) -> list[Repository]:
        """Repositories to declare once the release is done."""
        match self.phase:
            case Phase.CLEANUP | Phase.MAINTENANCE:
                if self.train_iteration.is_commercial:
                    return [COMMERCIAL_SNAPSHOT, COMMERCIAL_RELEASE]
                return [SNAPSHOT, MILESTONE]
            case Phase.PREPARE:
                return []
            case _:
                raise ConfigurationError(f"Unexpected phase: {self.phase!r}")

    @property
    def is_bom_in_build_project(self) -> bool:
        """Classic trains ship the BOM as part of the build project."""
        return not self.train_iteration.train.uses_calver

    def _for_phase(self, version: ArtifactVersion) -> ArtifactVersion:
        match self.phase:
            case Phase.PREPARE:
                return version
            case Phase.CLEANUP:
                return version.next_development_version()
            case Phase.MAINTENANCE:
                return version.next_bugfix_version()
            case _:
                raise ConfigurationError(f"Unexpected phase: {self.phase!r}")
