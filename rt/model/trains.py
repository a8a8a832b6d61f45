"""Chronological registry of release trains."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from rt.core.result import Err, Ok, Result

from .errors import IterationBoundaryError, NotFound, VersionParseError
from .iteration import GA, Iteration
from .train import Train
from .train_iteration import TrainIteration
from .version import ArtifactVersion, Version

__all__ = ["TrainRegistry"]


_CALVER_ITERATION_RE = re.compile(r"\d{4}(\.\d+)+(-M\d+|-RC\d+)?")
_CALVER_RE = re.compile(r"\d{4}(\.\d+)+")


class TrainRegistry:
    """Trains in release order, oldest first."""

    def __init__(self, trains: Iterable[Train]) -> None:
        self._trains: tuple[Train, ...] = tuple(trains)
        names: set[str] = set()
        for train in self._trains:
            key = train.name.lower()
            if key in names:
                raise ValueError(f"Duplicate train: {train.name}")
            names.add(key)

    def __iter__(self) -> Iterator[Train]:
        return iter(self._trains)

    def __len__(self) -> int:
        return len(self._trains)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(t.name for t in self._trains)

    # -- lookups ------------------------------------------------------------

    def by_name(self, name: str) -> Result[Train, NotFound]:
        """Case-insensitive lookup by train name, or by CalVer generation."""
        wanted = name.strip()
        for train in self._trains:
            if train.name.lower() == wanted.lower():
                return Ok(train)

        if _CALVER_RE.fullmatch(wanted):
            train = self.by_calver(Version.parse(wanted))
            if train is not None:
                return Ok(train)

        return Err(NotFound("train", name, self.names))

    def by_calver(self, calver: Version) -> Train | None:
        """Train of the CalVer generation (major and minor) of ``calver``."""
        for train in self._trains:
            if train.calver is None:
                continue
            if (train.calver.major, train.calver.minor) == (calver.major, calver.minor):
                return train
        return None

    def latest(self, count: int = 1) -> list[Train]:
        """The ``count`` most recent trains, oldest first."""
        if count <= 0:
            return []
        return list(self._trains[-count:])

    def select(self, names_or_count: str | None, default_last: int) -> Result[list[Train], NotFound]:
        """Resolve a comma-separated list of names, or a number of latest trains.

        A number selects that many latest trains, newest first. No selection
        returns the ``default_last`` latest trains, oldest first.
        """
        if not names_or_count or not names_or_count.strip():
            return Ok(self.latest(default_last))

        text = names_or_count.strip()
        if text.isdigit():
            return Ok(list(reversed(self.latest(int(text)))))

        trains: list[Train] = []
        for name in text.split(","):
            match self.by_name(name.strip()):
                case Ok(train):
                    trains.append(train)
                case Err(missing):
                    return Err(missing)
        return Ok(trains)

    # -- chronology ---------------------------------------------------------

    def index(self, train: Train) -> int:
        for i, candidate in enumerate(self._trains):
            if candidate.name == train.name:
                return i
        raise ValueError(f"Train {train.name} is not registered")

    def is_before(self, train: Train, other: Train) -> bool:
        """True if ``train`` was released before ``other``."""
        if train.calver is not None and other.calver is not None:
            return train.calver < other.calver
        return self.index(train) < self.index(other)

    def previous_train(self, train: Train) -> Train | None:
        index = self.index(train)
        if index == 0:
            return None
        return self._trains[index - 1]

    def previous_iteration(self, train_iteration: TrainIteration) -> TrainIteration:
        """Iteration released before ``train_iteration``.

        Within a train this is the preceding iteration. The first iteration
        of a train follows the GA of the previous train.

        Raises:
            IterationBoundaryError: For the first iteration of the first train.
        """
        train = train_iteration.train
        iterations = train.iterations

        if not iterations.is_first(train_iteration.iteration):
            return TrainIteration(train, iterations.previous(train_iteration.iteration))

        previous = self.previous_train(train)
        if previous is None:
            raise IterationBoundaryError(
                f"{train_iteration} is the first iteration of the first train; "
                "there is no previous iteration"
            )
        if GA not in previous.iterations:
            raise IterationBoundaryError(f"Train {previous.name} has no GA iteration")
        return TrainIteration(previous, GA)

    # -- parsing ------------------------------------------------------------

    def parse_iteration(self, text: str) -> Result[TrainIteration, NotFound]:
        """Resolve ``Ockham M1``, ``2020.0.1`` or ``2021.1.0-RC1``."""
        value = text.strip()

        if _CALVER_ITERATION_RE.fullmatch(value):
            return self._parse_calver_iteration(value)

        parts = value.split()
        if len(parts) != 2:
            return Err(NotFound("iteration", text))

        match self.by_name(parts[0]):
            case Ok(train):
                return train.iteration(parts[1])
            case Err(missing):
                return Err(missing)

    def _parse_calver_iteration(self, value: str) -> Result[TrainIteration, NotFound]:
        try:
            version = ArtifactVersion.parse(value)
        except VersionParseError:
            return Err(NotFound("iteration", value))

        train = self.by_calver(version.version)
        if train is None:
            calvers = tuple(str(t.calver) for t in self._trains if t.calver is not None)
            return Err(NotFound("train", value, calvers))

        if version.is_bugfix_version:
            return train.iteration(f"SR{version.version.bugfix}")
        if version.is_release_version:
            return train.iteration(GA.name)
        iteration = Iteration.parse(version.suffix)
        if iteration is None:
            return Err(NotFound("iteration", value))
        return train.iteration(iteration.name)
