from __future__ import annotations

import json

from result import Err, Ok, Result

from dualvfs.config.defaults import default_config
from dualvfs.config.schema import AppConfig, from_dict
from dualvfs.services.fs import DEFAULT_FS, FileSystem

CONFIG_PATH = "~/.config/dualvfs/config.json"


def load_config(path: str | None = None, fs: FileSystem = DEFAULT_FS) -> Result[AppConfig, str]:
    resolved = path or fs.expanduser(CONFIG_PATH)
    if not fs.exists(resolved):
        return Ok(default_config())

    try:
        payload = json.loads(fs.read_text(resolved))
    except (OSError, ValueError) as exc:
        return Err(f"Failed reading config at {resolved}: {exc}.")
    if not isinstance(payload, dict):
        return Err(f"Config at {resolved} must be a JSON object.")
    try:
        return Ok(from_dict(payload, default_config()))
    except ValueError as exc:
        return Err(f"Invalid config at {resolved}: {exc}.")


def resolve_storage_root(config: AppConfig, fs: FileSystem = DEFAULT_FS) -> str:
    """Expand ``~`` in the configured root; the result is the repository store root."""
    return fs.expanduser(config.storage_root).rstrip("/") or "/"


def sample_config_json() -> str:
    return json.dumps(default_config().to_dict(), indent=2)
