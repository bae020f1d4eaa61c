"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``gendocs.toml`` only holds
overrides.  An empty file (or none at all) talks to the hosted service.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, PositiveFloat


class ApiConfig(BaseModel):
    """[api] section."""

    model_config = {"frozen": True}

    base_url: str = "https://gendocs.io/api"
    timeout: PositiveFloat = 10.0


class DomainsConfig(BaseModel):
    """[domains] section — certificate provisioning monitor."""

    model_config = {"frozen": True}

    poll_interval: PositiveFloat = 0.5
    provision_timeout: PositiveFloat = 20.0


class GendocsConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    api: ApiConfig = Field(default_factory=ApiConfig)
    domains: DomainsConfig = Field(default_factory=DomainsConfig)
