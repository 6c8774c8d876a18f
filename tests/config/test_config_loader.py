from __future__ import annotations

import json

from result import Err, Ok

from dualvfs.config.loader import load_config, resolve_storage_root, sample_config_json
from dualvfs.config.schema import AppConfig
from tests.fs_mock import MemoryFileSystem


def test_load_config_missing_uses_defaults() -> None:
    fs = MemoryFileSystem()
    result = load_config(path="/missing.json", fs=fs)
    assert isinstance(result, Ok)
    cfg = result.unwrap()
    assert cfg.storage_root == "~/dualvfs"
    assert cfg.create_root is True


def test_load_config_default_location_is_under_home() -> None:
    fs = MemoryFileSystem().add_file(
        "/mock/home/.config/dualvfs/config.json", json.dumps({"storageRoot": "/srv/vfs"})
    )
    result = load_config(fs=fs)
    assert isinstance(result, Ok)
    assert result.unwrap().storage_root == "/srv/vfs"


def test_load_config_overrides_and_falls_back() -> None:
    payload = {"createRoot": False, "logLevel": "verbose", "unknownKey": 1}
    fs = MemoryFileSystem().add_file("/config.json", json.dumps(payload))
    result = load_config(path="/config.json", fs=fs)
    assert isinstance(result, Ok)
    cfg = result.unwrap()
    assert cfg.create_root is False
    assert cfg.log_level == "WARNING"
    assert cfg.storage_root == "~/dualvfs"


def test_load_config_invalid_returns_warning() -> None:
    fs = MemoryFileSystem().add_file("/config.json", "not-json")
    result = load_config(path="/config.json", fs=fs)
    assert isinstance(result, Err)
    warning = result.unwrap_err()
    assert "failed reading config" in warning.lower()


def test_load_config_non_object_rejected() -> None:
    fs = MemoryFileSystem().add_file("/config.json", "[1, 2]")
    result = load_config(path="/config.json", fs=fs)
    assert isinstance(result, Err)
    assert "json object" in result.unwrap_err().lower()


def test_sample_config_round_trips() -> None:
    data = json.loads(sample_config_json())
    assert data == {"storageRoot": "~/dualvfs", "createRoot": True, "logLevel": "WARNING"}


def test_load_config_accepts_string_booleans() -> None:
    fs = MemoryFileSystem().add_file("/config.json", json.dumps({"createRoot": "false"}))
    result = load_config(path="/config.json", fs=fs)
    assert isinstance(result, Ok)
    assert result.unwrap().create_root is False


def test_load_config_rejects_bad_create_root() -> None:
    fs = MemoryFileSystem().add_file("/config.json", json.dumps({"createRoot": "sometimes"}))
    result = load_config(path="/config.json", fs=fs)
    assert isinstance(result, Err)
    message = result.unwrap_err()
    assert message.startswith("Invalid config at /config.json")
    assert "createRoot" in message


def test_load_config_rejects_empty_storage_root() -> None:
    fs = MemoryFileSystem().add_file("/config.json", json.dumps({"storageRoot": "  "}))
    result = load_config(path="/config.json", fs=fs)
    assert isinstance(result, Err)
    assert "storageRoot" in result.unwrap_err()


def test_resolve_storage_root_expands_home() -> None:
    fs = MemoryFileSystem()
    assert resolve_storage_root(AppConfig(storage_root="~/dualvfs/"), fs) == "/mock/home/dualvfs"
    assert resolve_storage_root(AppConfig(storage_root="/srv/vfs"), fs) == "/srv/vfs"
