"""Tests for the project registry and build order."""

from __future__ import annotations

import itertools

import pytest

from rt.core.result import Err, Ok
from rt.model.defaults import default_projects
from rt.model.errors import CyclicDependencyError, UnknownProjectError
from rt.model.project import NamingStrategy, Project, SupportStatus
from rt.model.projects import ProjectRegistry


def _names(projects: object) -> list[str]:
    return [p.name for p in projects]  # type: ignore[attr-defined]


class TestBuildOrder:
    def test_dependencies_come_first(self) -> None:
        registry = ProjectRegistry(
            [Project("REST", ("JPA",)), Project("JPA", ("Commons",)), Project("Commons", ("Build",)), Project("Build")]
        )
        assert _names(registry.build_order) == ["Build", "Commons", "JPA", "REST"]

    def test_declaration_order_breaks_ties(self) -> None:
        registry = ProjectRegistry(
            [Project("Build"), Project("Neo4j", ("Build",)), Project("Commons", ("Build",)), Project("Solr", ("Build",))]
        )
        assert _names(registry) == ["Build", "Neo4j", "Commons", "Solr"]

    def test_default_registry_respects_every_dependency(self) -> None:
        registry = default_projects()
        for project, other in itertools.permutations(registry, 2):
            if registry.depends_on(project, other):
                assert registry.index(other) < registry.index(project)

    def test_default_build_order(self) -> None:
        assert _names(default_projects()) == [
            "BOM",
            "Build",
            "Commons",
            "JPA",
            "JDBC",
            "Relational",
            "MongoDB",
            "Neo4j",
            "Solr",
            "Couchbase",
            "Cassandra",
            "Elasticsearch",
            "KeyValue",
            "Redis",
            "REST",
            "Envers",
            "LDAP",
            "Geode",
            "R2DBC",
        ]

    def test_sort(self) -> None:
        registry = default_projects()
        shuffled = [registry.get("REST"), registry.get("Build"), registry.get("Redis")]
        assert _names(registry.sort(shuffled)) == ["Build", "Redis", "REST"]


class TestValidation:
    def test_cycle_is_rejected(self) -> None:
        with pytest.raises(CyclicDependencyError) as exc:
            ProjectRegistry([Project("A", ("B",)), Project("B", ("A",))])
        assert set(exc.value.cycle) == {"A", "B"}
        assert exc.value.cycle[0] == exc.value.cycle[-1]

    def test_self_dependency_is_a_cycle(self) -> None:
        with pytest.raises(CyclicDependencyError):
            ProjectRegistry([Project("A", ("A",))])

    def test_unknown_dependency(self) -> None:
        with pytest.raises(UnknownProjectError, match="Commons"):
            ProjectRegistry([Project("JPA", ("Commons",))])

    def test_duplicate_names(self) -> None:
        with pytest.raises(ValueError, match="Duplicate"):
            ProjectRegistry([Project("JPA"), Project("jpa")])

    def test_unknown_parent(self) -> None:
        with pytest.raises(ValueError, match="parent"):
            ProjectRegistry([Project("JPA")], parent="Build")


class TestLookups:
    def test_by_name_is_case_insensitive(self) -> None:
        registry = default_projects()
        match registry.by_name("mongodb"):
            case Ok(project):
                assert project.name == "MongoDB"
            case Err(missing):
                pytest.fail(missing.message)

    def test_by_name_missing(self) -> None:
        result = default_projects().by_name("Hadoop")
        assert isinstance(result, Err)
        assert "Hadoop" in result.error.pretty()
        assert "Commons" in result.error.available

    def test_transitive_dependencies(self) -> None:
        registry = default_projects()
        redis = registry.get("Redis")
        assert redis is not None
        assert _names(registry.sort(registry.dependencies_of(redis))) == ["Build", "Commons", "KeyValue"]

    def test_parent(self) -> None:
        parent = default_projects().parent
        assert parent is not None
        assert parent.name == "Build"

    def test_contains(self) -> None:
        registry = default_projects()
        assert "jpa" in registry
        assert Project("JPA") in registry
        assert "Hadoop" not in registry

    def test_all_by_status(self) -> None:
        registry = default_projects()
        assert _names(registry.all(SupportStatus.EOL)) == ["Solr"]
        oss = _names(registry.all(SupportStatus.OSS))
        assert "Envers" not in oss
        assert "Solr" not in oss
        assert "Envers" in _names(registry.all(SupportStatus.COMMERCIAL))


class TestWaves:
    def test_waves_follow_dependencies(self) -> None:
        registry = default_projects()
        projects = [registry.get(n) for n in ("REST", "Build", "JPA", "Commons", "Neo4j")]
        assert [_names(w) for w in registry.waves(projects)] == [  # type: ignore[arg-type]
            ["Build"],
            ["Commons", "Neo4j"],
            ["JPA"],
            ["REST"],
        ]

    def test_dependencies_outside_the_set_are_satisfied(self) -> None:
        registry = default_projects()
        projects = [registry.get(n) for n in ("Redis", "JPA")]
        assert [_names(w) for w in registry.waves(projects)] == [["JPA", "Redis"]]  # type: ignore[arg-type]

    def test_transitive_dependency_orders_waves(self) -> None:
        registry = default_projects()
        # Redis reaches Build only through KeyValue and Commons.
        projects = [registry.get(n) for n in ("Redis", "Build")]
        assert [_names(w) for w in registry.waves(projects)] == [["Build"], ["Redis"]]  # type: ignore[arg-type]


class TestNamingStrategy:
    def test_names(self) -> None:
        naming = NamingStrategy()
        commons = Project("Commons")
        assert naming.repository(commons) == "spring-data-commons"
        assert naming.repository(commons, SupportStatus.COMMERCIAL) == "spring-data-commons-commercial"
        assert naming.full_name(commons) == "Spring Data Commons"
        assert naming.full_name(Project("Solr", full_name="Spring Data for Apache Solr")) == "Spring Data for Apache Solr"
        assert str(naming.artifact("commons")) == "org.springframework.data:spring-data-commons"

    def test_folder_name_is_grouped_by_status(self) -> None:
        naming = NamingStrategy()
        commons = Project("Commons")
        assert naming.folder_name(commons, SupportStatus.COMMERCIAL) == "commercial/spring-data-commons"
        assert naming.folder_name(commons, SupportStatus.OSS) == "oss/spring-data-commons"
