"""Configuration module for granter."""

from __future__ import annotations

from granter.config._config import GranterConfig, configure, get_global_config

__all__ = ["GranterConfig", "configure", "get_global_config"]
