from __future__ import annotations

from rt.build.dispatch import Dispatcher, NoImplementation
from rt.core.result import Err, Ok
from rt.model.project import Project

BOM = Project("BOM")
COMMONS = Project("Commons")


def _dispatcher() -> Dispatcher[str]:
    return Dispatcher(
        [
            (lambda p: p.name == "BOM", "bom"),
            (lambda p: p.name != "Solr", "maven"),
            (lambda p: True, "fallback"),
        ],
        role="build system",
    )


def test_first_match_wins():
    assert _dispatcher().resolve(BOM) == Ok("bom")
    assert _dispatcher().resolve(COMMONS) == Ok("maven")


def test_later_candidates_are_reachable():
    assert _dispatcher().resolve(Project("Solr")) == Ok("fallback")


def test_no_match():
    dispatcher: Dispatcher[str] = Dispatcher([(lambda p: False, "never")], role="build system")
    result = dispatcher.resolve(COMMONS)
    assert result == Err(NoImplementation("Commons", "build system"))
    assert isinstance(result, Err)
    assert result.error.message == "No build system supports project Commons"


def test_iteration():
    assert list(_dispatcher()) == ["bom", "maven", "fallback"]
    assert len(_dispatcher()) == 3
