"""Smoke tests: verify package wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Every probe error carries its failure classification.
* Version is accessible.
* Exit codes are defined.
"""

from __future__ import annotations

import pytest

from yt_todo import __version__
from yt_todo.cli import exit_codes
from yt_todo.cli.app import main
from yt_todo.core.models import ProbeFailure
from yt_todo.exceptions import (
    BackendError,
    ConfigurationError,
    EnvironmentError,
    InputError,
    MalformedBodyError,
    NonSuccessStatusError,
    ProbeError,
    ProbeTimeoutError,
    SchemaMismatchError,
    TransportError,
    YtTodoError,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            InputError,
            BackendError,
            ProbeError,
            ConfigurationError,
            EnvironmentError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[YtTodoError]
    ) -> None:
        assert issubclass(exc_class, YtTodoError)

    def test_base_inherits_from_exception(self) -> None:
        assert issubclass(YtTodoError, Exception)

    def test_hint_is_stored(self) -> None:
        err = YtTodoError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        err = YtTodoError("boom")
        assert err.hint is None

    def test_backend_error_defaults(self) -> None:
        err = BackendError("down")
        assert err.status is None
        assert err.stage is None
        assert err.attempts == ()

    def test_backend_error_carries_status_and_stage(self) -> None:
        err = BackendError("gone", status=404, stage="playlists", hint="check id")
        assert err.status == 404
        assert err.stage == "playlists"
        assert err.hint == "check id"

    @pytest.mark.parametrize(
        ("exc_class", "failure"),
        [
            (ProbeTimeoutError, ProbeFailure.TIMEOUT),
            (TransportError, ProbeFailure.TRANSPORT_ERROR),
            (NonSuccessStatusError, ProbeFailure.NON_SUCCESS_STATUS),
            (MalformedBodyError, ProbeFailure.MALFORMED_BODY),
            (SchemaMismatchError, ProbeFailure.SCHEMA_MISMATCH),
        ],
    )
    def test_probe_errors_are_classified(
        self, exc_class: type[ProbeError], failure: ProbeFailure
    ) -> None:
        assert issubclass(exc_class, ProbeError)
        assert exc_class("x").failure is failure


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_returns_success(self, capsys: pytest.CaptureFixture[str]) -> None:
        """No arguments should print help and exit 0."""
        code = main([])
        assert code == exit_codes.SUCCESS
        assert "resolve" in capsys.readouterr().out

    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    @pytest.mark.parametrize(
        ("argv", "handler_name"),
        [
            (["resolve", "PL4cUxeGkcC9l0Jnx0_oMEa_J8v_z_yD5E"], "resolve"),
            (["demo"], "demo"),
            (["discover"], "discover"),
        ],
    )
    def test_subcommands_route_to_handlers(
        self,
        monkeypatch: pytest.MonkeyPatch,
        argv: list[str],
        handler_name: str,
    ) -> None:
        from yt_todo.cli import app as app_module

        seen: list[str] = []
        monkeypatch.setitem(
            app_module._HANDLERS,
            handler_name,
            lambda args: seen.append(args.command) or exit_codes.SUCCESS,
        )
        assert main(argv) == exit_codes.SUCCESS
        assert seen == [handler_name]

    def test_unknown_subcommand_exits_with_usage_error(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["download"])
        assert exc_info.value.code == 2
