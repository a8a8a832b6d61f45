"""Error types for the release model.

Exceptions here signal broken configuration or impossible requests and are
never retried. Lookups that may legitimately miss return ``Err(NotFound)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

__all__ = [
    "ConfigurationError",
    "CyclicDependencyError",
    "IterationBoundaryError",
    "ModelError",
    "NotFound",
    "UnknownProjectError",
    "VersionParseError",
]


class ModelError(Exception):
    """Base class for release model errors."""


class VersionParseError(ModelError, ValueError):
    """A version string matched none of the supported grammars."""

    def __init__(self, source: str, grammars: tuple[str, ...]) -> None:
        self.source = source
        self.grammars = grammars
        super().__init__(
            f"Version {source!r} does not match any supported format: {' nor '.join(grammars)}"
        )


class CyclicDependencyError(ModelError):
    """Declared project dependencies contain a cycle."""

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = cycle
        super().__init__(f"Project dependencies contain a cycle: {' -> '.join(cycle)}")


class UnknownProjectError(ModelError):
    """A project declares a dependency on a project that is not registered."""

    def __init__(self, project: str, dependency: str) -> None:
        self.project = project
        self.dependency = dependency
        super().__init__(f"Project {project} depends on unknown project {dependency}")


class IterationBoundaryError(ModelError, LookupError):
    """There is no iteration before the requested one."""


class ConfigurationError(ModelError):
    """A value outside the supported set was supplied, e.g. an unknown phase."""


@dataclass(frozen=True, slots=True)
class NotFound:
    """A lookup by name did not match anything."""

    kind: Literal["project", "train", "iteration", "module"]
    name: str
    available: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        return f"No {self.kind} named {self.name!r}"

    def pretty(self) -> str:
        if self.available:
            return f"{self.message} (available: {', '.join(self.available)})"
        return self.message
