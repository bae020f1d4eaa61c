"""GendocsClient — thin httpx wrapper around the gendocs REST API.

Every method returns the decoded JSON body; ``domain_status`` is a
coroutine so the provisioning monitor can cancel it mid-request.
Non-2xx responses raise :class:`ApiError`; transport failures raise
:class:`NetworkError`.  Services translate both into ServiceResult errors.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://gendocs.io/api"
DEFAULT_TIMEOUT = 10.0


class GendocsApiError(Exception):
    """Base error for remote API calls."""


class NetworkError(GendocsApiError):
    """The API could not be reached."""


class ApiError(GendocsApiError):
    """The API answered with a non-2xx status."""

    def __init__(self, status_code: int, payload: Any = None, message: str | None = None) -> None:
        self.status_code = status_code
        self.payload = payload
        super().__init__(message or f"Request failed with status code {status_code}")

    @property
    def errors(self) -> dict[str, Any]:
        """The ``errors`` mapping from the response body, if any."""
        if isinstance(self.payload, dict):
            errors = self.payload.get("errors")
            if isinstance(errors, dict):
                return errors
        return {}


_HEADERS = {"Accept": "application/json"}


def _segment(value: str) -> str:
    return quote(value, safe="")


class GendocsClient:
    """Remote service used by the document and domain services.

    Parameters:
        base_url: API root, e.g. ``https://gendocs.io/api``.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        # MockTransport serves both clients; real transports are sync-only.
        self._async_transport = (
            transport if isinstance(transport, httpx.AsyncBaseTransport) else None
        )
        self._http = httpx.Client(
            base_url=self._base_url,
            timeout=timeout,
            transport=transport,
            headers=_HEADERS,
        )

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def create_document(self, name: str, email: str, password: str) -> dict[str, Any]:
        return self._request(
            "POST",
            "/v1/docs",
            json={"doc": {"name": name}, "credentials": {"email": email, "password": password}},
        )

    def list_documents(self, email: str, password: str) -> dict[str, Any]:
        return self._request(
            "POST",
            "/v1/docs/list",
            json={"credentials": {"email": email, "password": password}},
        )

    def single_document(self, token: str) -> dict[str, Any]:
        return self._request("GET", f"/v1/docs/{_segment(token)}")

    def update_document(self, token: str, updates: dict[str, Any]) -> dict[str, Any]:
        return self._request("PATCH", f"/v1/docs/{_segment(token)}", json={"doc": updates})

    def delete_document(self, token: str) -> dict[str, Any]:
        return self._request("DELETE", f"/v1/docs/{_segment(token)}")

    # ------------------------------------------------------------------
    # Domains
    # ------------------------------------------------------------------

    def add_domain(self, token: str, domain_name: str) -> dict[str, Any]:
        return self._request(
            "POST", f"/v1/docs/{_segment(token)}/domains", json={"domain": domain_name}
        )

    async def domain_status(self, domain_name: str) -> dict[str, Any]:
        """Return the provisioning status ``{status, context?}`` for a domain.

        Runs on a short-lived ``httpx.AsyncClient`` so that cancelling the
        awaiting task aborts the request on the wire.
        """
        path = f"/v1/domains/{_segment(domain_name)}"
        logger.debug("GET %s", path)
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._async_transport,
            headers=_HEADERS,
        ) as http:
            try:
                response = await http.get(path)
            except httpx.HTTPError as exc:
                raise NetworkError(f"Could not reach {http.base_url}: {exc}") from exc
        return _payload("GET", path, response)

    def try_adding_subdomain(self, token: str, subdomain: str) -> dict[str, Any]:
        return self._request(
            "POST", f"/v1/docs/{_segment(token)}/subdomain", json={"subdomain": subdomain}
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> GendocsClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        logger.debug("%s %s", method, path)
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise NetworkError(f"Could not reach {self._http.base_url}: {exc}") from exc
        return _payload(method, path, response)


def _payload(method: str, path: str, response: httpx.Response) -> dict[str, Any]:
    payload = _decode(response)
    if response.is_error:
        logger.debug("%s %s -> %d", method, path, response.status_code)
        raise ApiError(response.status_code, payload)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        return {"data": payload}
    return payload


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None
