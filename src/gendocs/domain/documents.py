"""Hosted document model as returned by the remote API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class Document(BaseModel):
    """A hosted documentation site.

    The remote payload carries more fields than the CLI needs; unknown
    keys are ignored.
    """

    model_config = {"frozen": True, "extra": "ignore"}

    name: str
    token: str = ""
    subdomain: str | None = None
    full_subdomain: str | None = None

    def summary(self) -> dict[str, Any]:
        """Flat dict used in ServiceResult payloads."""
        return {
            "name": self.name,
            "token": self.token,
            "subdomain": self.subdomain,
            "full_subdomain": self.full_subdomain,
        }


def document_from_payload(payload: dict[str, Any]) -> Document:
    """Extract the ``doc`` object from an API response body."""
    raw = payload.get("doc", payload)
    return Document.model_validate(raw)
