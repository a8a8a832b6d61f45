"""Numeric versions and publishable artifact versions.

Two textual grammars are understood for artifact versions:

- classic:  ``<major>.<minor>[.<bugfix>].<SUFFIX>`` with SUFFIX one of
  ``RELEASE``, ``M<n>``, ``RC<n>``, ``BUILD-SNAPSHOT``
- modifier: ``<major>.<minor>[.<bugfix>][-<SUFFIX>]`` with SUFFIX one of
  ``M<n>``, ``RC<n>``, ``SNAPSHOT``; no suffix means a release

Artifact versions order by numeric version first and then by the raw suffix
text. The suffix comparison is lexicographic, so ``M10`` sorts before ``M2``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from functools import total_ordering
from typing import TYPE_CHECKING

from .errors import VersionParseError

if TYPE_CHECKING:
    from .iteration import Iteration

__all__ = ["ArtifactVersion", "SuffixKind", "Version"]


_VERSION_RE = re.compile(r"(\d+)\.(\d+)(?:\.(\d+))?(?:\.(\d+))?")
_CLASSIC_RE = re.compile(r"(\d+)\.(\d+)(?:\.(\d+))?\.(RELEASE|M\d+|RC\d+|BUILD-SNAPSHOT)")
_MODIFIER_RE = re.compile(r"(\d+)\.(\d+)(?:\.(\d+))?(?:-(M\d+|RC\d+|SNAPSHOT))?")

_MILESTONE_RE = re.compile(r"M(\d+)")
_RC_RE = re.compile(r"RC(\d+)")

VERSION_GRAMMAR = "<major>.<minor>[.<bugfix>[.<build>]]"
CLASSIC_GRAMMAR = "<major>.<minor>[.<bugfix>].<RELEASE|M<n>|RC<n>|BUILD-SNAPSHOT>"
MODIFIER_GRAMMAR = "<major>.<minor>[.<bugfix>][-<M<n>|RC<n>|SNAPSHOT>]"

RELEASE_SUFFIX = "RELEASE"
SNAPSHOT_SUFFIX = "BUILD-SNAPSHOT"
SNAPSHOT_MODIFIER = "SNAPSHOT"


@dataclass(frozen=True, slots=True, order=True)
class Version:
    """A numeric ``major.minor.bugfix.build`` version, ordered numerically."""

    major: int
    minor: int
    bugfix: int = 0
    build: int = 0

    @classmethod
    def parse(cls, source: str) -> Version:
        """Parse ``2.4``, ``2.4.1`` or ``2.4.1.3``.

        Raises:
            VersionParseError: If the source is not a numeric version.
        """
        m = _VERSION_RE.fullmatch(source.strip())
        if m is None:
            raise VersionParseError(source, (VERSION_GRAMMAR,))
        major, minor, bugfix, build = m.groups()
        return cls(int(major), int(minor), int(bugfix or 0), int(build or 0))

    def next_major(self) -> Version:
        return Version(self.major + 1, 0, 0, 0)

    def next_minor(self) -> Version:
        return Version(self.major, self.minor + 1, 0, 0)

    def next_bugfix(self) -> Version:
        return Version(self.major, self.minor, self.bugfix + 1, 0)

    def with_bugfix(self, bugfix: int) -> Version:
        return Version(self.major, self.minor, bugfix, self.build)

    def to_major_minor_bugfix(self) -> str:
        return f"{self.major}.{self.minor}.{self.bugfix}"

    def __str__(self) -> str:
        if self.build:
            return f"{self.major}.{self.minor}.{self.bugfix}.{self.build}"
        if self.bugfix:
            return f"{self.major}.{self.minor}.{self.bugfix}"
        return f"{self.major}.{self.minor}"


class SuffixKind(Enum):
    RELEASE = auto()
    MILESTONE = auto()
    RELEASE_CANDIDATE = auto()
    SNAPSHOT = auto()


@total_ordering
@dataclass(frozen=True, slots=True, eq=False)
class ArtifactVersion:
    """A publishable version: numeric version plus release-phase suffix.

    Attributes:
        version: Numeric version.
        modifier_format: True for the dash-separated grammar.
        suffix: Raw suffix text (``RELEASE``, ``M1``, ``RC2``, ``SNAPSHOT``,
            ``BUILD-SNAPSHOT``).
    """

    version: Version
    modifier_format: bool
    suffix: str

    @classmethod
    def parse(cls, source: str) -> ArtifactVersion:
        """Parse a classic or modifier formatted artifact version.

        The classic grammar is tried first.

        Raises:
            VersionParseError: If neither grammar matches.
        """
        text = source.strip()

        m = _CLASSIC_RE.fullmatch(text)
        if m is not None:
            return cls(_version_from_groups(m), False, m.group(4))

        m = _MODIFIER_RE.fullmatch(text)
        if m is not None:
            return cls(_version_from_groups(m), True, m.group(4) or RELEASE_SUFFIX)

        raise VersionParseError(source, (CLASSIC_GRAMMAR, MODIFIER_GRAMMAR))

    @classmethod
    def of(cls, version: Version, modifier_format: bool = False) -> ArtifactVersion:
        """Release version for the given numeric version."""
        return cls(version, modifier_format, RELEASE_SUFFIX)

    @classmethod
    def from_iteration(
        cls, version: Version, iteration: Iteration, modifier_format: bool = False
    ) -> ArtifactVersion:
        """Artifact version of a module at ``version`` within ``iteration``.

        GA yields the release itself, a service release the bugfix release
        numbered after it, milestones and release candidates carry the
        iteration name as suffix.
        """
        if iteration.is_ga:
            return cls(version, modifier_format, RELEASE_SUFFIX)
        if iteration.is_service_release:
            return cls(version.with_bugfix(iteration.bugfix_value), modifier_format, RELEASE_SUFFIX)
        return cls(version, modifier_format, iteration.name)

    # -- classification ---------------------------------------------------

    @property
    def kind(self) -> SuffixKind:
        if self.is_snapshot_version:
            return SuffixKind.SNAPSHOT
        if self.is_milestone_version:
            return SuffixKind.MILESTONE
        if self.is_release_candidate_version:
            return SuffixKind.RELEASE_CANDIDATE
        return SuffixKind.RELEASE

    @property
    def is_release_version(self) -> bool:
        return self.suffix in ("", RELEASE_SUFFIX)

    @property
    def is_milestone_version(self) -> bool:
        return _MILESTONE_RE.fullmatch(self.suffix) is not None

    @property
    def is_release_candidate_version(self) -> bool:
        return _RC_RE.fullmatch(self.suffix) is not None

    @property
    def is_snapshot_version(self) -> bool:
        return self.suffix in (SNAPSHOT_SUFFIX, SNAPSHOT_MODIFIER)

    @property
    def is_bugfix_version(self) -> bool:
        return self.is_release_version and self.version.bugfix != 0

    @property
    def level(self) -> int:
        """Milestone or RC number, or the bugfix number of a service release.

        Raises:
            ValueError: For GA releases and snapshots.
        """
        for pattern in (_MILESTONE_RE, _RC_RE):
            m = pattern.fullmatch(self.suffix)
            if m is not None:
                return int(m.group(1))
        if self.is_bugfix_version:
            return self.version.bugfix
        raise ValueError(f"{self} is not a milestone, release candidate or service release")

    # -- transformations --------------------------------------------------

    def release_version(self) -> ArtifactVersion:
        return ArtifactVersion(self.version, self.modifier_format, RELEASE_SUFFIX)

    def snapshot_version(self) -> ArtifactVersion:
        return ArtifactVersion(self.version, self.modifier_format, self._snapshot_suffix())

    def next_development_version(self) -> ArtifactVersion:
        """Snapshot version to continue development with after this version.

        A GA release (bugfix 0) moves to the next minor, a service release to
        the next bugfix. Any other version is already in development and is
        returned as is.
        """
        if self.suffix == RELEASE_SUFFIX:
            is_ga = self.version.with_bugfix(0) == self.version
            following = self.version.next_minor() if is_ga else self.version.next_bugfix()
            return ArtifactVersion(following, self.modifier_format, self._snapshot_suffix())
        return self._in_development()

    def next_bugfix_version(self) -> ArtifactVersion:
        """Snapshot version of the next bugfix release."""
        if self.suffix == RELEASE_SUFFIX:
            return ArtifactVersion(
                self.version.next_bugfix(), self.modifier_format, self._snapshot_suffix()
            )
        return self._in_development()

    def next_minor_version(self) -> ArtifactVersion:
        return ArtifactVersion(self.version.next_minor(), self.modifier_format, self.suffix)

    def release_train_suffix(self) -> str:
        """Suffix used when naming the train release this version belongs to."""
        if self.is_snapshot_version or self.is_milestone_version or self.is_release_candidate_version:
            return self.suffix
        if self.is_bugfix_version:
            return f"SR{self.version.bugfix}"
        return "GA"

    # -- rendering --------------------------------------------------------

    def is_version_within(self, version: Version) -> bool:
        """True if ``version`` is a component-wise prefix of this version.

        ``2.4.1`` is within ``2.4``; ``2.4.10`` is not within ``2.4.1``.
        """
        mine = self.version.to_major_minor_bugfix().split(".")
        theirs = str(version).split(".")
        return mine[: len(theirs)] == theirs

    def short_string(self) -> str:
        return str(self.version)

    def major_minor(self, include_suffix: bool = False) -> str:
        if include_suffix and self.is_snapshot_version:
            return f"{self.version.major}.{self.version.minor}-SNAPSHOT"
        return f"{self.version.major}.{self.version.minor}"

    @property
    def generation(self) -> str:
        return f"{self.major_minor()}.x"

    def __str__(self) -> str:
        base = self.version.to_major_minor_bugfix()
        if self.modifier_format:
            if self.is_release_version:
                return base
            return f"{base}-{self.suffix}"
        return f"{base}.{self.suffix}"

    # -- comparison -------------------------------------------------------

    def _key(self) -> tuple[Version, bool, bool, bool, bool, str]:
        return (
            self.version,
            self.is_release_version,
            self.is_snapshot_version,
            self.is_milestone_version,
            self.is_release_candidate_version,
            self.suffix,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArtifactVersion):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ArtifactVersion):
            return NotImplemented
        if self.version != other.version:
            return self.version < other.version
        return self.suffix < other.suffix

    # -- helpers ----------------------------------------------------------

    def _snapshot_suffix(self) -> str:
        return SNAPSHOT_MODIFIER if self.modifier_format else SNAPSHOT_SUFFIX

    def _in_development(self) -> ArtifactVersion:
        # Snapshots, milestones and release candidates are already in development.
        return self


def _version_from_groups(m: re.Match[str]) -> Version:
    major, minor, bugfix = m.group(1), m.group(2), m.group(3)
    return Version(int(major), int(minor), int(bugfix or 0))
