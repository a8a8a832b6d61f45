"""Project definitions and naming.

A project is a buildable module of the product family. Projects refer to
their dependencies by name; the ``ProjectRegistry`` resolves names and
validates the resulting graph.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from rt.core.config import NamingConfig

__all__ = [
    "ArtifactCoordinate",
    "Maintainer",
    "NamingStrategy",
    "Project",
    "SupportStatus",
    "Tracker",
]


class Tracker(Enum):
    """Issue tracker a project uses."""

    GITHUB = "github"

    @property
    def ticket_pattern(self) -> re.Pattern[str]:
        """Pattern of branch names created for a single ticket."""
        return _TICKET_PATTERNS[self]


_TICKET_PATTERNS = {
    Tracker.GITHUB: re.compile(r"(issue/)?(GH-)?\d+(-[\w.-]+)?"),
}


class Maintainer(Enum):
    CORE = "core"
    COMMUNITY = "community"


class SupportStatus(Enum):
    OSS = "oss"
    COMMERCIAL = "commercial"
    EOL = "eol"

    @property
    def is_open_source(self) -> bool:
        return self is SupportStatus.OSS

    @property
    def is_commercial(self) -> bool:
        return self is SupportStatus.COMMERCIAL

    @property
    def is_end_of_life(self) -> bool:
        return self is SupportStatus.EOL


@dataclass(frozen=True, slots=True)
class ArtifactCoordinate:
    group_id: str
    artifact_id: str

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"


@dataclass(frozen=True, slots=True, eq=False)
class Project:
    """A buildable module definition.

    Projects compare and hash by case-insensitive name.

    Attributes:
        name: Short name, e.g. ``Commons``.
        dependencies: Names of projects this project directly depends on.
        full_name: Display name; derived from the naming strategy when None.
        additional_artifacts: Artifacts published besides the main one.
        use_short_version_milestones: Render milestones as ``2.3.0-RC1``
            rather than ``2.3 RC1``.
        calver_versioned: The project takes its version from the train's
            CalVer generation (e.g. a bill of materials).
        end_of_life: The project is no longer maintained.
        commercial_only: The project is only maintained commercially.
    """

    name: str
    dependencies: tuple[str, ...] = ()
    full_name: str | None = None
    tracker: Tracker = Tracker.GITHUB
    additional_artifacts: tuple[ArtifactCoordinate, ...] = ()
    maintainer: Maintainer = Maintainer.CORE
    skip_tests: bool = True
    use_short_version_milestones: bool = False
    calver_versioned: bool = False
    end_of_life: bool = False
    commercial_only: bool = False

    @property
    def key(self) -> str:
        return self.name.lower()

    def uses(self, tracker: Tracker) -> bool:
        return self.tracker is tracker

    def matches(self, status: SupportStatus) -> bool:
        """True if the project is maintained under ``status``."""
        if status.is_end_of_life:
            return self.end_of_life
        if self.end_of_life:
            return False
        if status.is_open_source:
            return not self.commercial_only
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Project):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class NamingStrategy:
    """Derives repository, artifact and display names from project names."""

    owner: str = "spring-projects"
    prefix: str = "spring-data"
    group_id: str = "org.springframework.data"
    full_name_prefix: str = "Spring Data"

    @classmethod
    def from_config(cls, config: NamingConfig) -> NamingStrategy:
        return cls(
            owner=config.owner,
            prefix=config.prefix,
            group_id=config.group_id,
            full_name_prefix=config.full_name_prefix,
        )

    def repository(self, project: Project, status: SupportStatus = SupportStatus.OSS) -> str:
        name = f"{self.prefix}-{project.key}"
        return f"{name}-commercial" if status.is_commercial else name

    def folder_name(self, project: Project, status: SupportStatus) -> str:
        return f"{status.value}/{self.repository(project)}"

    def artifact_name(self, simple_name: str) -> str:
        return f"{self.prefix}-{simple_name.lower()}"

    def artifact(self, simple_name: str, group_id: str | None = None) -> ArtifactCoordinate:
        return ArtifactCoordinate(group_id or self.group_id, self.artifact_name(simple_name))

    def full_name(self, project: Project) -> str:
        return project.full_name or f"{self.full_name_prefix} {project.name}"
