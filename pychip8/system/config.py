"""JSON configuration file support.

Keys are matched case-insensitively. ``FILE_PATH`` and ``SHOW_KEYMAPPING``
keep the spelling used by existing configuration files.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional

from pychip8.video import PALETTES


class ConfigError(ValueError):
    """Raised when a configuration file is unreadable or has invalid values."""


@dataclass
class FileConfig:
    """Settings read from a configuration file; ``None`` means not specified."""

    file_path: Optional[Path] = None
    show_keymapping: Optional[bool] = None
    scale: Optional[int] = None
    fullscreen: Optional[bool] = None
    instructions_per_second: Optional[int] = None
    palette: Optional[str] = None
    timer_hz: Optional[float] = None
    wrap_sprites: Optional[bool] = None
    sound_frequency: Optional[float] = None


_EXPECTED_TYPES: Mapping[str, tuple[type, ...]] = {
    "file_path": (str,),
    "show_keymapping": (bool,),
    "scale": (int,),
    "fullscreen": (bool,),
    "instructions_per_second": (int,),
    "palette": (str,),
    "timer_hz": (int, float),
    "wrap_sprites": (bool,),
    "sound_frequency": (int, float),
}


def parse_config(data: Mapping[str, Any], *, base_dir: Path | None = None) -> FileConfig:
    """Validate a decoded JSON object and build a :class:`FileConfig`."""

    known = {item.name for item in fields(FileConfig)}
    values: dict[str, Any] = {}
    for raw_key, value in data.items():
        key = str(raw_key).lower()
        if key not in known:
            raise ConfigError(f"unknown configuration key '{raw_key}'")
        expected = _EXPECTED_TYPES[key]
        # bool is an int subclass; reject it for numeric settings.
        if not isinstance(value, expected) or (isinstance(value, bool) and bool not in expected):
            names = " or ".join(kind.__name__ for kind in expected)
            raise ConfigError(f"'{raw_key}' must be {names}, got {type(value).__name__}")
        values[key] = value

    path_value = values.get("file_path")
    if path_value is not None:
        path = Path(path_value)
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path
        values["file_path"] = path

    for key in ("scale", "instructions_per_second", "timer_hz", "sound_frequency"):
        if key in values and values[key] <= 0:
            raise ConfigError(f"'{key}' must be positive")

    palette = values.get("palette")
    if palette is not None:
        if palette.lower() not in PALETTES:
            known = ", ".join(sorted(PALETTES))
            raise ConfigError(f"unknown palette '{palette}' (expected one of: {known})")
        values["palette"] = palette.lower()

    return FileConfig(**values)


def load_config(path: Path) -> FileConfig:
    """Read and validate the JSON configuration at ``path``."""

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read configuration {path}: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"configuration {path} must contain a JSON object")
    return parse_config(data, base_dir=path.parent)
