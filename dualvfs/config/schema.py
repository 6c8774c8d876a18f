from __future__ import annotations

from dataclasses import dataclass
from typing import Any

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_BOOL_STRINGS: dict[str, bool] = {"true": True, "false": False}


@dataclass(slots=True)
class AppConfig:
    storage_root: str = "~/dualvfs"
    create_root: bool = True
    log_level: str = "WARNING"

    def to_dict(self) -> dict[str, Any]:
        return {
            "storageRoot": self.storage_root,
            "createRoot": self.create_root,
            "logLevel": self.log_level,
        }


def _parse_log_level(value: Any, fallback: str) -> str:
    level = str(value).upper()
    return level if level in _LOG_LEVELS else fallback


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in _BOOL_STRINGS:
        return _BOOL_STRINGS[value.lower()]
    raise ValueError(f"{key} must be true or false, got {value!r}")


def _parse_storage_root(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"storageRoot must be a non-empty path, got {value!r}")
    return value.strip()


def from_dict(data: dict[str, Any], defaults: AppConfig) -> AppConfig:
    """Build a config from its JSON form; raises ``ValueError`` on bad values."""
    return AppConfig(
        storage_root=_parse_storage_root(data.get("storageRoot", defaults.storage_root)),
        create_root=_parse_bool("createRoot", data.get("createRoot", defaults.create_root)),
        log_level=_parse_log_level(data.get("logLevel", defaults.log_level), defaults.log_level),
    )
