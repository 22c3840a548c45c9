"""Configuration management for autobump."""

from __future__ import annotations

from autobump.config.loader import load_config
from autobump.config.models import AutobumpConfig, ChangelogConfig, VersionConfig

__all__ = [
    "AutobumpConfig",
    "ChangelogConfig",
    "VersionConfig",
    "load_config",
]
