"""The built-in project family and its release trains.

Both registries are plain values built on demand; callers construct them
once at start-up and pass them on. Tests build their own, smaller ones.
"""

from __future__ import annotations

from .iteration import DEFAULT_ITERATIONS
from .project import ArtifactCoordinate, Maintainer, NamingStrategy, Project, SupportStatus
from .projects import ProjectRegistry
from .train import Module, Train, Transition
from .trains import TrainRegistry

__all__ = ["PARENT_PROJECT", "default_projects", "default_trains"]

PARENT_PROJECT = "Build"


def default_projects(naming: NamingStrategy | None = None) -> ProjectRegistry:
    """Projects of the family, declared in preferred build order."""
    naming = naming or NamingStrategy()
    build_group = f"{naming.group_id}.build"

    def artifacts(*names: str, group_id: str | None = None) -> tuple[ArtifactCoordinate, ...]:
        return tuple(naming.artifact(name, group_id) for name in names)

    projects = [
        Project("BOM", use_short_version_milestones=True, calver_versioned=True),
        Project(
            "Build",
            additional_artifacts=(
                *artifacts("build", "parent", "build-parent", "build-resources", group_id=build_group),
                naming.artifact("releasetrain"),
            ),
        ),
        Project("Commons", ("Build",)),
        Project("JPA", ("Commons",), additional_artifacts=artifacts("envers", "jpa-parent", "jpa-distribution")),
        Project(
            "JDBC",
            ("Commons",),
            additional_artifacts=artifacts("relational", "relational-parent", "jdbc"),
            commercial_only=True,
        ),
        Project(
            "Relational",
            ("Commons",),
            additional_artifacts=artifacts(
                "relational", "relational-parent", "jdbc", "jdbc-distribution", "r2dbc"
            ),
        ),
        Project(
            "MongoDB",
            ("Commons",),
            additional_artifacts=artifacts("mongodb-parent", "mongodb-distribution"),
        ),
        Project("Neo4j", ("Build",), maintainer=Maintainer.COMMUNITY),
        Project("Solr", ("Build",), full_name="Spring Data for Apache Solr", end_of_life=True),
        Project("Couchbase", ("Build",), maintainer=Maintainer.COMMUNITY),
        Project(
            "Cassandra",
            ("Commons",),
            full_name="Spring Data for Apache Cassandra",
            additional_artifacts=artifacts("cassandra-parent", "cassandra-distribution"),
        ),
        Project("Elasticsearch", ("Build",), maintainer=Maintainer.COMMUNITY),
        Project("Redis", ("KeyValue",)),
        Project(
            "REST",
            ("JPA", "MongoDB", "Neo4j", "Cassandra", "KeyValue"),
            additional_artifacts=artifacts(
                "rest-parent", "rest-distribution", "core", "webmvc", "hal-browser", "hal-explorer"
            ),
        ),
        Project("KeyValue", ("Commons",)),
        Project("Envers", ("JPA",), commercial_only=True),
        Project("LDAP", ("Commons",)),
        Project(
            "Geode",
            ("Commons",),
            full_name="Spring Data for Apache Geode",
            additional_artifacts=artifacts("geode-parent", "geode-distribution"),
            commercial_only=True,
        ),
        Project("R2DBC", ("Commons", "JDBC"), commercial_only=True),
    ]
    return ProjectRegistry(projects, parent=PARENT_PROJECT)


def default_trains(projects: ProjectRegistry) -> TrainRegistry:
    """Every train from Ockham (2020.0) onwards, oldest first."""

    def module(name: str, version: str) -> Module:
        return Module.of(projects.by_name(name).unwrap(), version)

    def project(name: str) -> Project:
        return projects.by_name(name).unwrap()

    ockham = (
        Train.of(
            "Ockham",
            module("BOM", "2020.0.0"),
            module("Build", "2.4"),
            module("Cassandra", "3.1"),
            module("Commons", "2.4"),
            module("Envers", "2.4"),
            module("Geode", "2.4"),
            module("JPA", "2.4"),
            module("JDBC", "2.1"),
            module("KeyValue", "2.4"),
            module("LDAP", "2.4"),
            module("R2DBC", "1.2"),
            module("MongoDB", "3.1"),
            module("Redis", "2.4"),
            module("REST", "3.4"),
            module("Neo4j", "6.0"),
            module("Solr", "4.3"),
            module("Couchbase", "4.1"),
            module("Elasticsearch", "4.1"),
        )
        .with_iterations(DEFAULT_ITERATIONS)
        .with_calver("2020.0")
        .with_support_status(SupportStatus.EOL)
    )

    pascal = (
        ockham.next("Pascal", Transition.MINOR)
        .without(project("Solr"))
        .with_calver("2021.0")
        .with_support_status(SupportStatus.EOL)
    )
    q = pascal.next("Q", Transition.MINOR).with_calver("2021.1").with_support_status(SupportStatus.EOL)
    raj = q.next("Raj", Transition.MINOR).with_calver("2021.2").with_support_status(SupportStatus.COMMERCIAL)
    turing = (
        raj.next("Turing", Transition.MAJOR, module("Relational", "3.0"))
        .with_calver("2022.0")
        .without(project("Envers"), project("Geode"), project("R2DBC"), project("JDBC"))
        .with_support_status(SupportStatus.COMMERCIAL)
    )
    ullman = turing.next("Ullman", Transition.MINOR).with_calver("2023.0").with_support_status(SupportStatus.COMMERCIAL)
    vaughan = ullman.next("Vaughan", Transition.MINOR).with_calver("2023.1").with_support_status(SupportStatus.COMMERCIAL)
    w = vaughan.next("W", Transition.MINOR).with_calver("2024.0").with_support_status(SupportStatus.COMMERCIAL)
    x = w.next("X", Transition.MINOR).with_calver("2024.1").with_support_status(SupportStatus.COMMERCIAL)
    y = x.next("Y", Transition.MINOR).with_calver("2025.0")
    z = y.next("Z", Transition.MAJOR).with_calver("2025.1")
    a = z.next("A", Transition.MINOR).with_calver("2026.0")

    return TrainRegistry([ockham, pascal, q, raj, turing, ullman, vaughan, w, x, y, z, a])
