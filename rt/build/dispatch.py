"""First-match selection of an implementation by predicate.

Usage:
    systems = Dispatcher[BuildSystem]([(lambda p: p.name != "BOM", maven)])
    match systems.resolve(project):
        case Ok(system):
            system.trigger_build(module)
        case Err(missing):
            print(missing.message)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from rt.core.result import Err, Ok, Result
from rt.model.project import Project

__all__ = ["Dispatcher", "NoImplementation"]


@dataclass(frozen=True, slots=True)
class NoImplementation:
    """No registered implementation supports the project."""

    project: str
    role: str = "implementation"

    @property
    def message(self) -> str:
        return f"No {self.role} supports project {self.project}"


class Dispatcher[T]:
    """Ordered ``(predicate, implementation)`` pairs; the first match wins."""

    def __init__(
        self, candidates: Iterable[tuple[Callable[[Project], bool], T]], *, role: str = "implementation"
    ) -> None:
        self._candidates = tuple(candidates)
        self._role = role

    def __iter__(self) -> Iterator[T]:
        return (implementation for _, implementation in self._candidates)

    def __len__(self) -> int:
        return len(self._candidates)

    def resolve(self, project: Project) -> Result[T, NoImplementation]:
        for supports, implementation in self._candidates:
            if supports(project):
                return Ok(implementation)
        return Err(NoImplementation(project.name, self._role))
