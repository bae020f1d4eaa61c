"""DocumentService — create, list, fetch, rename and remove hosted documents.

Also owns ``gendocs.json``: :meth:`DocumentService.init_project` writes it
for an existing document and :meth:`DocumentService.rename` keeps its
``name`` in sync.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gendocs.domain.documents import Document, document_from_payload
from gendocs.infrastructure.api import GendocsApiError
from gendocs.infrastructure.project_files import (
    PROJECT_FILENAME,
    ProjectConfig,
    ProjectFileError,
    project_path,
    update_project,
    write_project,
)
from gendocs.services.base import BaseService
from gendocs.services.result import ServiceResult
from gendocs.services.telemetry import traced

if TYPE_CHECKING:
    from pathlib import Path


class DocumentService(BaseService):
    """Document lifecycle operations against the remote API."""

    @traced
    def create(self, name: str, email: str, password: str) -> ServiceResult:
        op = "create_document"
        name = name.strip()
        if not name:
            return ServiceResult.failure(op, "VALIDATION_FAILED", "Document name is required")
        try:
            payload = self._client.create_document(name, email, password)
        except GendocsApiError as exc:
            return self._api_error(op, exc)
        return ServiceResult.success(op, document_from_payload(payload).summary())

    @traced
    def list(self, email: str, password: str) -> ServiceResult:
        op = "list_documents"
        try:
            payload = self._client.list_documents(email, password)
        except GendocsApiError as exc:
            return self._api_error(op, exc)

        docs = [Document.model_validate(raw) for raw in payload.get("docs", [])]
        items = [doc.summary() for doc in docs]
        return ServiceResult.success(op, {"items": items, "count": len(items)})

    @traced
    def get(self, token: str) -> ServiceResult:
        op = "get_document"
        try:
            payload = self._client.single_document(token)
        except GendocsApiError as exc:
            return self._api_error(op, exc)
        return ServiceResult.success(op, document_from_payload(payload).summary())

    @traced
    def rename(self, token: str, name: str, *, project_root: Path | None = None) -> ServiceResult:
        """Rename the document; also rewrites ``gendocs.json`` under *project_root*."""
        op = "rename_document"
        name = name.strip()
        if not name:
            return ServiceResult.failure(op, "VALIDATION_FAILED", "Document name is required")
        try:
            self._client.update_document(token, {"name": name})
        except GendocsApiError as exc:
            return self._api_error(op, exc)

        warnings: list[str] = []
        if project_root is not None:
            try:
                update_project(project_root, name=name)
            except ProjectFileError as exc:
                warnings.append(f"{PROJECT_FILENAME} was not updated: {exc}")
        return ServiceResult.success(op, {"token": token, "name": name}, warnings=warnings)

    @traced
    def remove(self, token: str) -> ServiceResult:
        op = "remove_document"
        try:
            payload = self._client.delete_document(token)
        except GendocsApiError as exc:
            return self._api_error(op, exc)
        # DELETE may answer with an empty body.
        name = str((payload.get("doc") or {}).get("name", ""))
        return ServiceResult.success(op, {"token": token, "name": name})

    @traced
    def init_project(self, root: Path, token: str, *, force: bool = False) -> ServiceResult:
        """Write ``gendocs.json`` in *root* for the document owning *token*."""
        op = "init_project"
        if project_path(root).exists() and not force:
            return ServiceResult.failure(
                op,
                "ALREADY_EXISTS",
                f"{PROJECT_FILENAME} already exists in {root}. Use --force to overwrite.",
                {"path": str(project_path(root))},
            )

        fetched = self.get(token)
        if not fetched.ok:
            return fetched.model_copy(update={"op": op, "meta": None})

        name = fetched.data["name"]
        path = write_project(root, ProjectConfig(name=name, token=token))
        return ServiceResult.success(op, {"name": name, "token": token, "path": str(path)})
