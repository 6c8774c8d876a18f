from __future__ import annotations

from dualvfs.config.schema import AppConfig


def default_config() -> AppConfig:
    return AppConfig()
