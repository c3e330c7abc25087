from __future__ import annotations

import pytest

from knr.core.errors import ErrorCode
from knr.output.console import MockConsole, RichConsole, Style
from knr.output.errors import open_error_exit_code, print_open_error
from knr.services.newrelease.errors import OpenError


def test_prints_kind_message_and_hint() -> None:
    console = MockConsole()
    error = OpenError(kind="state", message="debian.master/changelog is not closed", hint="close it")

    print_open_error(error, console)

    assert console.messages == [
        "error: state error: debian.master/changelog is not closed",
        "hint: close it",
    ]
    assert console.outputs[1].style == Style.DIM


def test_error_and_hint_both_go_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    error = OpenError(
        kind="environment",
        message="dpkg-parsechangelog is not available",
        hint="Install dpkg-dev.",
    )

    print_open_error(error, RichConsole())

    captured = capsys.readouterr()
    assert "environment error: dpkg-parsechangelog is not available" in captured.err
    assert "hint: Install dpkg-dev." in captured.err
    assert captured.out == ""


def test_no_hint_line_without_hint() -> None:
    console = MockConsole()

    print_open_error(OpenError(kind="conflict", message="multiple ABI directories"), console)

    assert console.messages == ["error: conflict: multiple ABI directories"]


def test_every_kind_exits_with_failure() -> None:
    for kind in ("configuration", "environment", "state", "conflict", "build", "command"):
        error = OpenError(kind=kind, message="x")  # type: ignore[arg-type]
        assert open_error_exit_code(error) == int(ErrorCode.FAILURE)
