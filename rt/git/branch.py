"""Source-control branches a module is released from.

Modules are developed on ``main`` until their iteration diverges from
mainline development: service releases, commercial trains and trains that
always release from a version branch use ``<major>.<minor>.x``.

Usage:
    branch = Branch.from_module(module_iteration)
    if branch.is_service_release_branch:
        print(branch.as_version())   # 2.4

    Branch.from_name("origin/2.4.x").with_remote("origin")   # origin/2.4.x
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering
from typing import TYPE_CHECKING

from rt.model.project import Tracker
from rt.model.version import Version

if TYPE_CHECKING:
    from rt.model.train_iteration import ModuleIteration

__all__ = ["Branch", "MAIN"]


_SERVICE_RELEASE_BRANCH_RE = re.compile(r"(\d+)\.(\d+)\.x")


@total_ordering
@dataclass(frozen=True, slots=True)
class Branch:
    """A branch name, without remote prefix unless ``with_remote`` added one."""

    name: str

    @classmethod
    def from_module(cls, module: ModuleIteration) -> Branch:
        """Branch the module is released from in its iteration."""
        if module.is_branch_version or module.is_commercial:
            return cls.from_version(module.version.version)
        return MAIN

    @classmethod
    def from_version(cls, version: Version) -> Branch:
        return cls(f"{version.major}.{version.minor}.x")

    @classmethod
    def from_name(cls, name: str) -> Branch:
        """Branch from a possibly remote-qualified name (``origin/main``)."""
        return cls(name.rsplit("/", 1)[-1])

    def with_remote(self, remote: str) -> Branch:
        if self.name.startswith(f"{remote}/"):
            return self
        return Branch(f"{remote}/{self.name}")

    @property
    def is_service_release_branch(self) -> bool:
        return _SERVICE_RELEASE_BRANCH_RE.fullmatch(self.name) is not None

    @property
    def is_main(self) -> bool:
        return self == MAIN

    def is_issue_branch(self, tracker: Tracker) -> bool:
        return tracker.ticket_pattern.fullmatch(self.name) is not None

    def as_version(self) -> Version:
        """Version line of a service release branch.

        Raises:
            ValueError: If this is not a service release branch.
        """
        m = _SERVICE_RELEASE_BRANCH_RE.fullmatch(self.name)
        if m is None:
            raise ValueError(f"Branch {self.name} is not a service release branch")
        return Version(int(m.group(1)), int(m.group(2)))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Branch):
            return NotImplemented
        return self.name.lower() < other.name.lower()

    def __str__(self) -> str:
        return self.name


MAIN = Branch("main")
