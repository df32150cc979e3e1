# src/rig_correspondence/resolution/general/utils/load_config.py

"""Read the JSON tables under <data/> (synonym groups, name lists) with caching.

Modes:
- "raw"     -> parsed JSON as-is
- "names"   -> frozenset[str] of lowercased, stripped, non-empty names
- "groups"  -> dict[str, tuple[str, ...]]: {group: [variant, ...]}, lowercased,
               every group non-empty

The data directory is RIG_CORRESPONDENCE_DATA_DIR, then DATA_DIR, then the
first <data/> found walking up from this file. An explicit base_dir wins over all.
"""

from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from types import TracebackType
from typing import Any, Literal, overload

# ── Public surface ────────────────────────────────────────────────────────────
Mode = Literal["raw", "names", "groups"]
__all__ = [
    "Mode",
    "load_config",
    "clear_config_cache",
    "temp_data_dir",
    "DataDirNotFound",
    "ConfigFileNotFound",
    "ConfigParseError",
    "ConfigTypeError",
]

DATA_DIR_ENV_VARS = ("RIG_CORRESPONDENCE_DATA_DIR", "DATA_DIR")


# ── Exceptions ───────────────────────────────────────────────────────────────
class DataDirNotFound(FileNotFoundError):
    """No <data/> directory configured or discoverable."""


class ConfigFileNotFound(FileNotFoundError):
    """The table does not exist, cannot be read, or lies outside the data dir."""


class ConfigParseError(ValueError):
    """The table is not valid JSON."""


class ConfigTypeError(TypeError):
    """The JSON parsed but does not have the shape the mode requires."""


# ── Logging & cache ──────────────────────────────────────────────────────────
log = logging.getLogger(__name__)
_CACHE_LOCK = threading.RLock()
# (path, mtime, mode): an edited file gets a fresh key
_CONFIG_CACHE: dict[tuple[Path, float, str], Any] = {}


def clear_config_cache() -> None:
    """Forget every cached table."""
    with _CACHE_LOCK:
        _CONFIG_CACHE.clear()
    log.debug("Config cache cleared")


# ── Locating the data directory ──────────────────────────────────────────────
def _candidate_data_dirs(start: Path | None = None) -> list[Path]:
    start = (start or Path(__file__)).resolve()
    return [(p / "data").resolve() for p in [start, *start.parents]]


def _default_data_dir(start: Path | None = None) -> Path:
    candidates = _candidate_data_dirs(start)
    for cand in candidates:
        if cand.is_dir():
            return cand
    raise DataDirNotFound(
        "No 'data' directory found. Tried:\n  " + "\n  ".join(str(p) for p in candidates)
    )


def _env_data_dir() -> Path | None:
    for var in DATA_DIR_ENV_VARS:
        value = os.environ.get(var)
        if value:
            return Path(os.path.expanduser(value)).resolve()
    return None


def _resolve_table_path(name: str | os.PathLike[str], base_dir: Path | None) -> Path:
    data_dir = Path(base_dir or _env_data_dir() or _default_data_dir()).resolve()
    file_name = os.fspath(name)
    if not file_name.endswith(".json"):
        file_name += ".json"

    path = (data_dir / file_name).resolve()
    try:
        path.relative_to(data_dir)
    except ValueError as e:
        raise ConfigFileNotFound(f"{path} is outside the data dir {data_dir}") from e
    if not path.is_file():
        raise ConfigFileNotFound(f"Config file not found: {path}")
    return path


# ── Shape coercions ──────────────────────────────────────────────────────────
def _as_names(data: Any, label: str) -> frozenset[str]:
    if not isinstance(data, list):
        raise ConfigTypeError(f"{label}: expected a list of names, got {type(data).__name__}")
    bad = [x for x in data if not isinstance(x, (str, int))]
    if bad:
        raise ConfigTypeError(f"{label}: names must be strings or integers, got {type(bad[0]).__name__}")
    return frozenset(n for n in (str(x).strip().lower() for x in data) if n)


def _as_groups(data: Any, label: str) -> dict[str, tuple[str, ...]]:
    if not isinstance(data, dict):
        raise ConfigTypeError(f"{label}: expected {{group: [variant, ...]}}, got {type(data).__name__}")
    groups: dict[str, tuple[str, ...]] = {}
    for group, variants in data.items():
        if not isinstance(variants, list) or not variants:
            raise ConfigTypeError(f"{label}: group {group!r} must map to a non-empty list")
        if not all(isinstance(v, str) and v.strip() for v in variants):
            raise ConfigTypeError(f"{label}: group {group!r} has empty or non-string variants")
        groups[str(group).lower()] = tuple(v.strip().lower() for v in variants)
    return groups


_COERCIONS = {
    "raw": lambda data, label: data,
    "names": _as_names,
    "groups": _as_groups,
}


# ── Loader ───────────────────────────────────────────────────────────────────
@overload
def load_config(
    name: str | os.PathLike[str], mode: Literal["raw"] = "raw", *, base_dir: Path | None = None
) -> Any: ...
@overload
def load_config(
    name: str | os.PathLike[str], mode: Literal["names"], *, base_dir: Path | None = None
) -> frozenset[str]: ...
@overload
def load_config(
    name: str | os.PathLike[str], mode: Literal["groups"], *, base_dir: Path | None = None
) -> dict[str, tuple[str, ...]]: ...


def load_config(
    name: str | os.PathLike[str],
    mode: Mode = "raw",
    *,
    base_dir: Path | None = None,
) -> Any:
    """Load <data>/<name>.json, coerce it to `mode` and cache the result."""
    if mode not in _COERCIONS:
        raise ValueError(f"Unknown mode {mode!r}")

    path = _resolve_table_path(name, base_dir)
    try:
        key = (path, path.stat().st_mtime, mode)
    except OSError as e:
        raise ConfigFileNotFound(f"Cannot stat {path}: {e}") from e

    with _CACHE_LOCK:
        if key in _CONFIG_CACHE:
            return _CONFIG_CACHE[key]

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise ConfigFileNotFound(f"Cannot read {path}: {e}") from e

    result = _COERCIONS[mode](data, path.name)
    with _CACHE_LOCK:
        _CONFIG_CACHE[key] = result
    log.debug("Loaded %s as %s", path.name, mode)
    return result


# ── Temporary override ───────────────────────────────────────────────────────
class temp_data_dir:
    """Point the loader at another data directory for the duration of a block."""

    def __init__(self, path: os.PathLike[str] | str):
        self._new = str(path)
        self._old: str | None = None

    def __enter__(self) -> temp_data_dir:
        self._old = os.environ.get(DATA_DIR_ENV_VARS[0])
        os.environ[DATA_DIR_ENV_VARS[0]] = self._new
        clear_config_cache()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._old is None:
            os.environ.pop(DATA_DIR_ENV_VARS[0], None)
        else:
            os.environ[DATA_DIR_ENV_VARS[0]] = self._old
        clear_config_cache()
