"""Tests for the ServiceResult contract."""

from __future__ import annotations

import pytest

from neoarch.services.result import ServiceError, ServiceResult


class ServerError(Exception):
    def __init__(self, message: str, code: str) -> None:
        super().__init__(message)
        self.code = code


class TestServiceResult:
    def test_defaults(self) -> None:
        result = ServiceResult(ok=True, op="save_design")
        assert result.data == {}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="save_design")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]

    def test_json_round_trip(self) -> None:
        result = ServiceResult(ok=False, op="x", error=ServiceError(code="E", message="m"))
        assert ServiceResult.model_validate_json(result.model_dump_json()) == result


class TestFromException:
    def test_plain_exception(self) -> None:
        err = ServiceError.from_exception("STORE_ERROR", RuntimeError("connection refused"))
        assert err.code == "STORE_ERROR"
        assert err.message == "connection refused"
        assert err.detail == {"exception": "RuntimeError"}

    def test_server_code_kept(self) -> None:
        exc = ServerError("bad auth", "Neo.ClientError.Security.Unauthorized")
        err = ServiceError.from_exception("STORE_ERROR", exc)
        assert err.detail["server_code"] == "Neo.ClientError.Security.Unauthorized"

    def test_empty_message_falls_back_to_type(self) -> None:
        assert ServiceError.from_exception("X", KeyError()).message == "KeyError"


class TestFailed:
    def test_failed_result(self) -> None:
        result = ServiceResult.failed("delete_design", "STORE_ERROR", RuntimeError("down"))
        assert result.ok is False
        assert result.op == "delete_design"
        assert result.data == {}
        assert result.error is not None
        assert result.error.message == "down"
