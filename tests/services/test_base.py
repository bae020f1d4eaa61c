"""Tests for BaseService error translation."""

from __future__ import annotations

from gendocs.infrastructure.api import ApiError, GendocsApiError, NetworkError
from gendocs.services.base import BaseService, flatten_errors


def _service() -> BaseService:
    return BaseService(client=None)  # type: ignore[arg-type]


class TestApiError:
    def test_network_error(self) -> None:
        result = _service()._api_error("get_document", NetworkError("timed out"))
        assert result.error is not None
        assert result.error.code == "NETWORK_ERROR"
        assert result.error.message == "timed out"

    def test_unauthorized(self) -> None:
        result = _service()._api_error("list_documents", ApiError(401, {"errors": {}}))
        assert result.error is not None
        assert result.error.code == "UNAUTHORIZED"
        assert result.error.detail == {"status": 401}

    def test_errors_mapping(self) -> None:
        exc = ApiError(422, {"errors": {"name": ["can't be blank"]}})
        result = _service()._api_error("create_document", exc)
        assert result.error is not None
        assert result.error.code == "API_ERROR"
        assert result.error.message == "name can't be blank"
        assert result.error.detail == {"status": 422, "errors": ["name can't be blank"]}

    def test_without_errors_mapping(self) -> None:
        result = _service()._api_error("get_document", ApiError(500, "boom"))
        assert result.error is not None
        assert result.error.message == "Request failed with status code 500"
        assert result.error.detail == {"status": 500}

    def test_base_error(self) -> None:
        result = _service()._api_error("get_document", GendocsApiError("odd"))
        assert result.error is not None
        assert result.error.code == "API_ERROR"
        assert result.op == "get_document"


class TestFlattenErrors:
    def test_strings_and_lists(self) -> None:
        assert flatten_errors({"email": ["is invalid", "is taken"], "base": "Nope"}) == [
            "email is invalid",
            "email is taken",
            "Nope",
        ]

    def test_empty(self) -> None:
        assert flatten_errors({}) == []
