"""Tests for the ServiceResult contract."""

import pytest
from pydantic import ValidationError

from micropress.domain.errors import FileConflict
from micropress.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_defaults(self) -> None:
        result = ServiceResult(ok=True, op="create")
        assert result.data == {}
        assert result.warnings == []
        assert result.error is None

    def test_failure_from_exception(self) -> None:
        exc = FileConflict("The specified file exists", path="/tmp/x.md")
        result = ServiceResult.failure("create", exc, ["earlier warning"])
        assert not result.ok
        assert result.error == ServiceError(
            code="file_conflict",
            message="The specified file exists",
            detail={"path": "/tmp/x.md"},
        )
        assert result.warnings == ["earlier warning"]

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="create")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]

    def test_json_serializable(self) -> None:
        result = ServiceResult(ok=True, op="update", data={"fields_changed": ["name"]})
        assert '"fields_changed":["name"]' in result.model_dump_json()
