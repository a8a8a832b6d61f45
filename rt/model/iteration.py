"""Release stages within a train generation.

Iterations are strictly ordered: milestones, then release candidates, then
GA, then service releases, each numbered within its kind. Unlike artifact
version suffixes, iteration numbers compare numerically (``M2 < M10``).
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum

from rt.core.result import Err, Ok, Result

from .errors import IterationBoundaryError, NotFound

__all__ = ["Iteration", "IterationKind", "Iterations"]


_NAME_RE = re.compile(r"(M|RC|SR)(\d+)|GA", re.IGNORECASE)


class IterationKind(IntEnum):
    """Kind of iteration; the numeric value is the stage rank."""

    MILESTONE = 0
    RELEASE_CANDIDATE = 1
    GA = 2
    SERVICE_RELEASE = 3


_PREFIXES = {
    IterationKind.MILESTONE: "M",
    IterationKind.RELEASE_CANDIDATE: "RC",
    IterationKind.SERVICE_RELEASE: "SR",
}
_KINDS = {prefix: kind for kind, prefix in _PREFIXES.items()}


@dataclass(frozen=True, slots=True, order=True)
class Iteration:
    kind: IterationKind
    number: int = 0

    def __post_init__(self) -> None:
        if self.kind is IterationKind.GA and self.number != 0:
            raise ValueError("GA iterations are not numbered")
        if self.kind is not IterationKind.GA and self.number < 1:
            raise ValueError(f"{self.kind.name} iterations are numbered from 1")

    @classmethod
    def milestone(cls, number: int) -> Iteration:
        return cls(IterationKind.MILESTONE, number)

    @classmethod
    def release_candidate(cls, number: int) -> Iteration:
        return cls(IterationKind.RELEASE_CANDIDATE, number)

    @classmethod
    def service_release(cls, number: int) -> Iteration:
        return cls(IterationKind.SERVICE_RELEASE, number)

    @classmethod
    def parse(cls, name: str) -> Iteration | None:
        """Parse ``M1``, ``RC2``, ``GA`` or ``SR3`` (case-insensitive)."""
        m = _NAME_RE.fullmatch(name.strip())
        if m is None:
            return None
        if m.group(1) is None:
            return GA
        number = int(m.group(2))
        if number < 1:
            return None
        return cls(_KINDS[m.group(1).upper()], number)

    @property
    def name(self) -> str:
        if self.kind is IterationKind.GA:
            return "GA"
        return f"{_PREFIXES[self.kind]}{self.number}"

    @property
    def is_milestone(self) -> bool:
        return self.kind is IterationKind.MILESTONE

    @property
    def is_release_candidate(self) -> bool:
        return self.kind is IterationKind.RELEASE_CANDIDATE

    @property
    def is_ga(self) -> bool:
        return self.kind is IterationKind.GA

    @property
    def is_service_release(self) -> bool:
        return self.kind is IterationKind.SERVICE_RELEASE

    @property
    def is_public(self) -> bool:
        """GA and service releases are public; milestones and RCs are previews."""
        return self.is_ga or self.is_service_release

    @property
    def bugfix_value(self) -> int:
        """Bugfix component contributed to versions released in this iteration."""
        return self.number if self.is_service_release else 0

    def __str__(self) -> str:
        return self.name


GA = Iteration(IterationKind.GA)
M1 = Iteration.milestone(1)
RC1 = Iteration.release_candidate(1)
SR1 = Iteration.service_release(1)


@dataclass(frozen=True, slots=True)
class Iterations:
    """Ordered iterations of a train."""

    items: tuple[Iteration, ...]

    def __post_init__(self) -> None:
        if not self.items:
            raise ValueError("A train needs at least one iteration")
        for earlier, later in zip(self.items, self.items[1:]):
            if not earlier < later:
                raise ValueError(f"Iterations must be strictly ordered: {earlier} before {later}")

    @classmethod
    def of(cls, *items: Iteration) -> Iterations:
        return cls(tuple(items))

    def __iter__(self) -> Iterator[Iteration]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __contains__(self, iteration: object) -> bool:
        return iteration in self.items

    @property
    def first(self) -> Iteration:
        return self.items[0]

    def find(self, name: str) -> Result[Iteration, NotFound]:
        iteration = Iteration.parse(name)
        if iteration is None or iteration not in self.items:
            return Err(NotFound("iteration", name, tuple(it.name for it in self.items)))
        return Ok(iteration)

    def is_first(self, iteration: Iteration) -> bool:
        return iteration == self.items[0]

    def previous(self, iteration: Iteration) -> Iteration:
        """Iteration preceding ``iteration``.

        Raises:
            IterationBoundaryError: For the first iteration.
            ValueError: If the iteration is not part of this collection.
        """
        if iteration not in self.items:
            raise ValueError(f"Iteration {iteration} is not part of {self}")
        index = self.items.index(iteration)
        if index == 0:
            raise IterationBoundaryError(f"No iteration before {iteration}")
        return self.items[index - 1]

    def __str__(self) -> str:
        return ", ".join(it.name for it in self.items)


DEFAULT_ITERATIONS = Iterations(
    (
        *(Iteration.milestone(n) for n in range(1, 4)),
        *(Iteration.release_candidate(n) for n in range(1, 3)),
        GA,
        *(Iteration.service_release(n) for n in range(1, 25)),
    )
)
