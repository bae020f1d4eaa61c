"""Project files in the working directory.

- ``gendocs.json`` binds a directory to a hosted document (name, token,
  page list).  Written by ``gendocs init``.
- ``gendocs-token`` optionally holds just the token, so that it can be
  kept out of version control.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

PROJECT_FILENAME = "gendocs.json"
TOKEN_FILENAME = "gendocs-token"


class ProjectFileError(ValueError):
    """``gendocs.json`` exists but cannot be parsed."""


class ProjectConfig(BaseModel):
    """Contents of ``gendocs.json``.  Unknown keys are preserved on rewrite."""

    model_config = {"frozen": True, "populate_by_name": True, "extra": "allow"}

    name: str
    token: str | None = None
    pages: list[str] = Field(default_factory=list)
    source_path: str | None = Field(default=None, alias="sourcePath")

    def to_json(self) -> str:
        data = self.model_dump(by_alias=True, exclude_none=True)
        return json.dumps(data, indent=2) + "\n"


def project_path(root: Path) -> Path:
    return root / PROJECT_FILENAME


def read_project(root: Path) -> ProjectConfig | None:
    """Load ``gendocs.json`` from *root*; None when the file is absent."""
    path = project_path(root)
    if not path.is_file():
        return None
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
        return ProjectConfig.model_validate(data)
    except (ValueError, ValidationError) as exc:
        raise ProjectFileError(f"Invalid {PROJECT_FILENAME} in {root}: {exc}") from exc


def write_project(root: Path, project: ProjectConfig) -> Path:
    path = project_path(root)
    path.write_text(project.to_json(), encoding="utf-8")
    return path


def update_project(root: Path, **changes: Any) -> ProjectConfig | None:
    """Apply *changes* to an existing ``gendocs.json``; no-op when absent."""
    project = read_project(root)
    if project is None:
        return None
    updated = project.model_copy(update=changes)
    write_project(root, updated)
    return updated


def read_token_file(root: Path) -> str | None:
    path = root / TOKEN_FILENAME
    if not path.is_file():
        return None
    token = path.read_text(encoding="utf-8").strip()
    return token or None


def find_token(root: Path, explicit: str | None = None) -> str | None:
    """Resolve the document token without prompting.

    Order: *explicit* value, ``gendocs-token``, ``token`` in ``gendocs.json``.
    """
    if explicit and explicit.strip():
        return explicit.strip()
    token = read_token_file(root)
    if token:
        return token
    project = read_project(root)
    if project is not None and project.token:
        return project.token
    return None
