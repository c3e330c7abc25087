"""Tests for output/console.py."""

from __future__ import annotations

import pytest

from knr.output.console import MockConsole, RichConsole, Style


class TestMockConsole:
    def test_records_styles(self) -> None:
        console = MockConsole()
        console.print("fakeroot debian/rules clean", Style.BOLD)
        console.error("packaging directory not clean")
        console.warning("ABI directory not found")
        console.success("done")

        assert console.messages == [
            "fakeroot debian/rules clean",
            "error: packaging directory not clean",
            "warning: ABI directory not found",
            "OK done",
        ]
        assert console.has_error()
        assert console.has_warning()
        assert console.outputs[0].style == Style.BOLD

    def test_find(self) -> None:
        console = MockConsole()
        console.info("debian.master/abi/5.4.0-100.113 already present")
        assert len(console.find("already present")) == 1
        assert console.find("git mv") == []


class TestRichConsole:
    def test_errors_go_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.error("identity not set")
        console.print("git add -- debian.master/changelog", Style.BOLD)

        captured = capsys.readouterr()
        assert "identity not set" in captured.err
        assert "git add -- debian.master/changelog" in captured.out

    def test_brackets_are_not_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.print("echo [bold]literal[/bold]")
        console.warning("missing [abi]")

        captured = capsys.readouterr()
        assert "[bold]literal[/bold]" in captured.out
        assert "[abi]" in captured.err

    def test_hint_goes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.hint("Install dpkg-dev.")

        captured = capsys.readouterr()
        assert "hint: Install dpkg-dev." in captured.err
        assert captured.out == ""
