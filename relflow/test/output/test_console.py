"""Tests for relflow.output.console module."""

from __future__ import annotations

import pytest

from relflow.output.console import (
    ConsoleProtocol,
    MockConsole,
    OutputRecord,
    RichConsole,
    Style,
)


class TestStyle:
    def test_str_conversion(self) -> None:
        assert str(Style.SUCCESS) == "success"
        assert str(Style.DIM) == "dim"

    def test_all_styles_exist(self) -> None:
        expected = {"DEFAULT", "SUCCESS", "ERROR", "WARNING", "INFO", "DIM", "BOLD", "HEADER"}
        assert {s.name for s in Style} == expected


class TestMockConsole:
    """Test MockConsole for testing purposes."""

    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("hello")
        assert console.outputs == [OutputRecord("hello", Style.DEFAULT)]

    def test_prefixed_helpers(self) -> None:
        console = MockConsole()
        console.success("done")
        console.error("broken")
        console.warning("careful")
        console.info("fyi")
        assert console.messages == ["OK done", "error: broken", "warning: careful", "info: fyi"]

    def test_header_and_newline(self) -> None:
        console = MockConsole()
        console.header("Plan")
        console.newline()
        assert console.outputs[0].style == Style.HEADER
        assert console.outputs[1].message == ""

    def test_emit_is_kept_apart(self) -> None:
        console = MockConsole()
        console.print("diagnostic")
        console.emit("{}")
        console.emit("line")
        assert console.messages == ["diagnostic"]
        assert console.stdout == "{}\nline"

    def test_text_property(self) -> None:
        console = MockConsole()
        console.print("line1")
        console.print("line2")
        assert console.text == "line1\nline2"

    def test_has_error(self) -> None:
        console = MockConsole()
        assert console.has_error() is False
        console.error("oops")
        assert console.has_error() is True

    def test_find(self) -> None:
        console = MockConsole()
        console.print("a@1.0.0 depends on b@1.0.0")
        console.print("other")
        assert [m.message for m in console.find("depends on")] == ["a@1.0.0 depends on b@1.0.0"]

    def test_instances_do_not_share_state(self) -> None:
        first = MockConsole()
        first.print("x")
        first.emit("y")
        second = MockConsole()
        assert second.outputs == []
        assert second.emitted == []


class TestRichConsole:
    def test_diagnostics_go_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.print("scanning")
        console.error("broken")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "scanning" in captured.err
        assert "error: broken" in captured.err

    def test_emit_goes_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().emit('{"schema": 1}')

        captured = capsys.readouterr()
        assert captured.out == '{"schema": 1}\n'
        assert captured.err == ""

    def test_brackets_are_not_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.print("publishable packages in workspace: [a@1.0.0]")
        console.emit("[bold]literal[/bold]")

        captured = capsys.readouterr()
        assert "[a@1.0.0]" in captured.err
        assert "[bold]literal[/bold]" in captured.out


def test_mock_satisfies_protocol() -> None:
    def use_console(c: ConsoleProtocol) -> None:
        c.print("test")
        c.success("ok")
        c.error("err")
        c.warning("warn")
        c.info("info")
        c.header("hdr")
        c.newline()
        c.emit("out")

    mock = MockConsole()
    use_console(mock)
    assert len(mock.outputs) == 7
    assert mock.emitted == ["out"]
