from __future__ import annotations

import pytest

from rt.git.branch import MAIN, Branch
from rt.model.defaults import default_projects, default_trains
from rt.model.iteration import GA, M1, SR1
from rt.model.project import Project, Tracker
from rt.model.train import Module, Train
from rt.model.version import Version

PROJECTS = default_projects()
TRAINS = default_trains(PROJECTS)
COMMONS = PROJECTS.by_name("Commons").unwrap()


class TestFromModule:
    def test_oss_ga_is_released_from_main(self) -> None:
        module = TRAINS.by_name("Y").unwrap().at(GA).require_module(COMMONS)
        assert module.branch == MAIN
        assert module.branch.is_main

    def test_milestone_is_released_from_main(self) -> None:
        module = TRAINS.by_name("A").unwrap().at(M1).require_module(COMMONS)
        assert module.branch == MAIN

    def test_service_release_uses_version_branch(self) -> None:
        train = Train.of("Moore", Module.of(COMMONS, "3.2"))
        assert train.at(SR1).require_module(COMMONS).branch == Branch("3.2.x")

    def test_commercial_ga_uses_version_branch(self) -> None:
        module = TRAINS.by_name("X").unwrap().at(GA).require_module(COMMONS)
        assert module.branch.is_service_release_branch
        assert module.branch.as_version() == Version(module.version.version.major, module.version.version.minor)

    def test_always_use_branch(self) -> None:
        train = Train.of("Moore", Module.of(COMMONS, "3.2")).with_always_use_branch()
        assert str(train.at(GA).require_module(COMMONS).branch) == "3.2.x"


class TestBranch:
    def test_from_name_strips_remote(self) -> None:
        assert Branch.from_name("origin/2.4.x") == Branch("2.4.x")

    def test_with_remote_is_idempotent(self) -> None:
        remote = Branch("2.4.x").with_remote("origin")
        assert str(remote) == "origin/2.4.x"
        assert remote.with_remote("origin") == remote

    @pytest.mark.parametrize(("name", "expected"), [("2.4.x", True), ("main", False), ("2.4", False), ("v2.4.x", False)])
    def test_service_release_branch(self, name: str, expected: bool) -> None:
        assert Branch(name).is_service_release_branch is expected

    def test_as_version_rejects_main(self) -> None:
        with pytest.raises(ValueError, match="not a service release branch"):
            MAIN.as_version()

    @pytest.mark.parametrize("name", ["123", "GH-123", "issue/GH-123-fix-build", "issue/42"])
    def test_issue_branch(self, name: str) -> None:
        assert Branch(name).is_issue_branch(Tracker.GITHUB)

    def test_main_is_not_an_issue_branch(self) -> None:
        assert not MAIN.is_issue_branch(Project("Commons").tracker)

    def test_ordering_is_case_insensitive(self) -> None:
        assert sorted([Branch("main"), Branch("2.4.x"), Branch("Feature")]) == [
            Branch("2.4.x"),
            Branch("Feature"),
            Branch("main"),
        ]
