from __future__ import annotations

from datetime import datetime

from dualvfs.models.stat import Stat

UNITS = ["B", "KB", "MB", "GB", "TB", "PB"]


def format_bytes(size: int) -> str:
    if size <= 0:
        return "0 B"
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(UNITS) - 1:
        value /= 1024.0
        unit += 1
    if unit == 0:
        return f"{int(value)} {UNITS[unit]}"
    return f"{value:.1f} {UNITS[unit]}"


def format_size(stat: Stat) -> str:
    if stat.is_dir:
        return f"{stat.size} {'entry' if stat.size == 1 else 'entries'}"
    return format_bytes(stat.size)


def format_timestamp(seconds: int) -> str:
    return datetime.fromtimestamp(seconds).strftime("%Y-%m-%d %H:%M:%S")
