"""Config file discovery and loading.

Walk-up finder locates gendocs.toml, similar to how git finds .git/.
Supports the GENDOCS_CONFIG env var and the --config CLI flag.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from gendocs.config.models import GendocsConfig

CONFIG_FILENAME = "gendocs.toml"
CONFIG_ENV_VAR = "GENDOCS_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for gendocs.toml.

    Returns the path to the config file, or None if not found.
    GENDOCS_CONFIG takes precedence over the walk-up.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for candidate_dir in (current, *current.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> GendocsConfig:
    """Load and validate config from a TOML file.

    Returns the default GendocsConfig if no file is found.
    """
    if path is None:
        path = find_config(cwd)
    if path is None:
        return GendocsConfig()

    data: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
    return GendocsConfig.model_validate(data)
