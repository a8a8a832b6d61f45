"""Project registry and dependency-first build order.

The registry is built once from a hand-maintained list of projects. It
builds a directed graph with an edge ``dependent -> dependency`` for every
declared dependency, rejects cycles, and sorts the reversed graph
topologically so that every project comes after everything it depends on.
Declaration order breaks ties. That build order is the sort key for any
collection of projects afterwards.

Usage:
    registry = ProjectRegistry([build, commons, jpa], parent="Build")
    [p.name for p in registry.build_order]  # ["Build", "Commons", "JPA"]
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import networkx as nx

from rt.core.result import Err, Ok, Result

from .errors import CyclicDependencyError, NotFound, UnknownProjectError
from .project import Project, SupportStatus

__all__ = ["ProjectRegistry"]


class ProjectRegistry:
    """Immutable set of projects with a validated dependency graph."""

    def __init__(self, projects: Iterable[Project], *, parent: str | None = None) -> None:
        """Register projects and compute the build order.

        Args:
            projects: Projects in declaration order. The order breaks ties
                between projects that do not depend on each other.
            parent: Name of the shared build parent project, if any.

        Raises:
            UnknownProjectError: A dependency names an unregistered project.
            CyclicDependencyError: The declared dependencies contain a cycle.
            ValueError: Two projects share a name or the parent is unknown.
        """
        self._projects: dict[str, Project] = {}
        for project in projects:
            if project.key in self._projects:
                raise ValueError(f"Duplicate project: {project.name}")
            self._projects[project.key] = project

        self._graph = _dependency_graph(self._projects)
        declared = {key: i for i, key in enumerate(self._projects)}
        self._order: tuple[Project, ...] = tuple(
            self._projects[key]
            for key in nx.lexicographical_topological_sort(
                self._graph.reverse(copy=False), key=declared.__getitem__
            )
        )
        self._index = {project.key: i for i, project in enumerate(self._order)}

        self._parent: Project | None = None
        if parent is not None:
            found = self._projects.get(parent.lower())
            if found is None:
                raise ValueError(f"Unknown parent project: {parent}")
            self._parent = found

    # -- collection protocol ----------------------------------------------

    def __iter__(self) -> Iterator[Project]:
        return iter(self._order)

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Project):
            return item.key in self._projects
        if isinstance(item, str):
            return item.lower() in self._projects
        return False

    # -- lookups ------------------------------------------------------------

    @property
    def build_order(self) -> tuple[Project, ...]:
        """All projects, dependencies before dependents."""
        return self._order

    @property
    def parent(self) -> Project | None:
        return self._parent

    def get(self, name: str) -> Project | None:
        return self._projects.get(name.lower())

    def by_name(self, name: str) -> Result[Project, NotFound]:
        """Case-insensitive lookup."""
        project = self.get(name)
        if project is None:
            return Err(NotFound("project", name, tuple(p.name for p in self._order)))
        return Ok(project)

    def all(self, status: SupportStatus | None = None) -> list[Project]:
        """Projects in build order, optionally restricted to a support status."""
        if status is None:
            return list(self._order)
        return [p for p in self._order if p.matches(status)]

    # -- dependencies -------------------------------------------------------

    def dependencies_of(self, project: Project) -> frozenset[Project]:
        """Transitive dependencies of ``project``."""
        return frozenset(self._projects[key] for key in nx.descendants(self._graph, project.key))

    def depends_on(self, project: Project, other: Project) -> bool:
        """True if ``project`` depends directly or transitively on ``other``."""
        return other in self.dependencies_of(project)

    def index(self, project: Project) -> int:
        """Position of ``project`` in the build order."""
        return self._index[project.key]

    def sort[P: Project](self, projects: Iterable[P]) -> list[P]:
        """Sort projects by build order."""
        return sorted(projects, key=self.index)

    def waves(self, projects: Iterable[Project]) -> list[tuple[Project, ...]]:
        """Partition ``projects`` into dependency waves.

        Wave 0 holds the projects without dependencies inside the given set;
        every later wave holds the projects whose dependencies inside the set
        all sit in earlier waves. Dependencies outside the set are treated as
        satisfied. Projects within a wave are in build order.
        """
        members = {p.key: p for p in projects}

        subgraph = nx.DiGraph()
        for key in sorted(members, key=lambda k: self._index[k]):
            subgraph.add_node(key)
            for dependency in nx.descendants(self._graph, key):
                if dependency in members:
                    subgraph.add_edge(dependency, key)

        return [
            tuple(members[key] for key in sorted(generation, key=lambda k: self._index[k]))
            for generation in nx.topological_generations(subgraph)
        ]


def _dependency_graph(projects: dict[str, Project]) -> nx.DiGraph:
    graph = nx.DiGraph()
    for project in projects.values():
        graph.add_node(project.key)

    for project in projects.values():
        for name in project.dependencies:
            dependency = projects.get(name.lower())
            if dependency is None:
                raise UnknownProjectError(project.name, name)
            graph.add_edge(project.key, dependency.key)

    if not nx.is_directed_acyclic_graph(graph):
        edges = nx.find_cycle(graph)
        cycle = [projects[source].name for source, _ in edges]
        cycle.append(cycle[0])
        raise CyclicDependencyError(cycle)

    return graph
