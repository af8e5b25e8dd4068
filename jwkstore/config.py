from __future__ import annotations

import os
from typing import Literal, Optional

import yaml
from pydantic import BaseModel

from .constants import DEFAULT_CONFIG_FILE, DEFAULT_LOCATION

ProbeErrorPolicy = Literal["warn", "raise"]


class StoreConfig(BaseModel):
    """Key store settings."""

    location: str = DEFAULT_LOCATION
    probe_errors: ProbeErrorPolicy = "warn"
    cache: bool = False


class JwkStoreConfig(BaseModel):
    """Top-level configuration model."""

    store: StoreConfig = StoreConfig()


def load_config(path: Optional[str] = None) -> JwkStoreConfig:
    """Load configuration from YAML file.

    Args:
        path: Optional path to config file. Falls back to JWKSTORE_CONFIG env
            variable or 'jwkstore.yaml' in the current directory.
    """

    config_path = path or os.getenv("JWKSTORE_CONFIG", DEFAULT_CONFIG_FILE)
    if os.path.exists(config_path):
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        config = JwkStoreConfig(**data)
    else:
        config = JwkStoreConfig()

    overrides = {}
    env_location = os.getenv("JWKSTORE_LOCATION")
    if env_location:
        overrides["location"] = env_location
    env_probe = os.getenv("JWKSTORE_PROBE_ERRORS")
    if env_probe:
        overrides["probe_errors"] = env_probe.lower()
    if overrides:
        config.store = StoreConfig(**{**config.store.model_dump(), **overrides})
    return config
