from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "COMMERCIAL_RELEASE",
    "COMMERCIAL_SNAPSHOT",
    "MILESTONE",
    "Repository",
    "SNAPSHOT",
]


@dataclass(frozen=True, slots=True)
class Repository:
    """An artifact repository declared in project descriptors.

    ``snapshots`` and ``releases`` are None when the descriptor leaves the
    respective policy at its default.
    """

    id: str
    url: str
    snapshots: bool | None = None
    releases: bool | None = None


SNAPSHOT = Repository("spring-snapshot", "https://repo.spring.io/snapshot", snapshots=True, releases=False)
MILESTONE = Repository("spring-milestone", "https://repo.spring.io/milestone")

COMMERCIAL_SNAPSHOT = Repository(
    "spring-enterprise-snapshot",
    "https://usw1.packages.broadcom.com/artifactory/spring-enterprise-maven-dev-local",
    snapshots=True,
    releases=False,
)
COMMERCIAL_RELEASE = Repository(
    "spring-enterprise-release",
    "https://usw1.packages.broadcom.com/artifactory/spring-enterprise-maven-prod-local",
    snapshots=False,
    releases=True,
)
