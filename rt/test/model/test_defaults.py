"""Sanity checks over the built-in project family and trains."""

from __future__ import annotations

from rt.model.defaults import PARENT_PROJECT, default_projects, default_trains
from rt.model.iteration import GA
from rt.model.project import NamingStrategy, SupportStatus
from rt.model.version import Version

PROJECTS = default_projects()
TRAINS = default_trains(PROJECTS)


def test_parent_is_build():
    assert PROJECTS.parent is not None
    assert PROJECTS.parent.name == PARENT_PROJECT


def test_every_train_module_is_registered():
    for train in TRAINS:
        for module in train.modules:
            assert module.project in PROJECTS, f"{train.name}: {module.project.name}"


def test_every_train_uses_calver():
    assert all(train.uses_calver for train in TRAINS)


def test_solr_leaves_after_ockham():
    solr = PROJECTS.by_name("Solr").unwrap()
    assert TRAINS.by_name("Ockham").unwrap().contains(solr)
    assert not TRAINS.by_name("Pascal").unwrap().contains(solr)


def test_turing_is_a_major_generation():
    turing = TRAINS.by_name("Turing").unwrap()
    commons = PROJECTS.by_name("Commons").unwrap()
    relational = PROJECTS.by_name("Relational").unwrap()
    module = turing.find_module(commons)
    assert module is not None and module.version == Version(3, 0)
    assert turing.contains(relational)


def test_bom_follows_calver():
    bom = PROJECTS.by_name("BOM").unwrap()
    for train in TRAINS:
        module = train.find_module(bom)
        assert module is not None and module.version == train.calver


def test_support_status_timeline():
    statuses = {train.name: train.support_status for train in TRAINS}
    assert statuses["Ockham"] is SupportStatus.EOL
    assert statuses["Raj"] is SupportStatus.COMMERCIAL
    assert statuses["X"] is SupportStatus.COMMERCIAL
    assert statuses["A"] is SupportStatus.OSS


def test_latest_train_resolves_every_module():
    latest = TRAINS.latest()[0].at(GA)
    assert all(str(module.version).startswith(str(module.module.version.major)) for module in latest)


def test_custom_naming_changes_artifacts():
    projects = default_projects(NamingStrategy(group_id="com.example"))
    build = projects.by_name("Build").unwrap()
    assert all(str(coordinate).startswith("com.example") for coordinate in build.additional_artifacts)
