from __future__ import annotations

from rt.output.console import MockConsole, Style


def test_mock_console_records_styles() -> None:
    console = MockConsole()
    console.print("plain")
    console.success("done")
    console.error("broken")
    console.header("Section")

    assert console.messages == ["plain", "OK done", "error: broken", "Section"]
    assert [o.style for o in console.outputs] == [Style.DEFAULT, Style.SUCCESS, Style.ERROR, Style.HEADER]
    assert console.has_error()


def test_mock_console_table() -> None:
    console = MockConsole()
    console.table(["Project", "Version"], [["Commons", "2.4.0"], ["JPA", "2.4.0"]], title="Ockham GA")

    assert console.text == "Ockham GA\nProject | Version\nCommons | 2.4.0\nJPA | 2.4.0"
    assert console.outputs[0].style == Style.HEADER
    assert console.outputs[1].style == Style.DIM
    assert not console.has_error()


def test_find() -> None:
    console = MockConsole()
    console.print("wave 1: Build")
    console.print("wave 2: Commons")

    assert [o.message for o in console.find("Commons")] == ["wave 2: Commons"]
    assert console.find("REST") == []
