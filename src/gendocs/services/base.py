"""BaseService — shared foundation for gendocs services.

Every service receives a :class:`GendocsClient` at construction time and
converts remote failures into ``ServiceResult`` errors through
:meth:`BaseService._api_error`, so commands never see httpx exceptions.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from gendocs.infrastructure.api import ApiError, NetworkError
from gendocs.services.result import ServiceResult

if TYPE_CHECKING:
    from gendocs.infrastructure.api import GendocsApiError, GendocsClient

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class DocumentService(BaseService):
            def get(self, token: str) -> ServiceResult:
                try:
                    payload = self._client.single_document(token)
                except GendocsApiError as exc:
                    return self._api_error("get_document", exc)
                ...
    """

    def __init__(self, client: GendocsClient) -> None:
        self._client = client

    def _api_error(self, op: str, exc: GendocsApiError) -> ServiceResult:
        """Translate a remote failure into a failed ServiceResult.

        * 401 becomes ``UNAUTHORIZED``.
        * A body of the form ``{"errors": {key: str | [str]}}`` is
          flattened into one message per entry.
        * Transport failures become ``NETWORK_ERROR``.
        """
        logger.debug("%s failed: %s", op, exc)
        if isinstance(exc, NetworkError):
            return ServiceResult.failure(op, "NETWORK_ERROR", str(exc))
        if not isinstance(exc, ApiError):
            return ServiceResult.failure(op, "API_ERROR", str(exc))

        if exc.status_code == 401:
            return ServiceResult.failure(op, "UNAUTHORIZED", "Unauthorized", {"status": 401})

        messages = flatten_errors(exc.errors)
        detail: dict[str, Any] = {"status": exc.status_code}
        if messages:
            detail["errors"] = messages
            return ServiceResult.failure(op, "API_ERROR", "; ".join(messages), detail)
        return ServiceResult.failure(op, "API_ERROR", str(exc), detail)


def flatten_errors(errors: dict[str, Any]) -> list[str]:
    """Flatten an API ``errors`` mapping into display messages.

    String values are used as-is; list values become ``"<key> <message>"``.

    Examples:
        >>> flatten_errors({"email": ["has already been taken"], "base": "Nope"})
        ['email has already been taken', 'Nope']
    """
    messages: list[str] = []
    for key, value in errors.items():
        if isinstance(value, str):
            messages.append(value)
        else:
            messages.extend(f"{key} {message}" for message in value)
    return messages
