"""Loading of compiler configuration snapshots from YAML files."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .models import CompilerConfig, FileKind, GeneratedFile


class ConfigError(RuntimeError):
    """Raised when a snapshot file cannot be parsed."""


_FLAG_KEYS = ("systemc", "dpi", "vpi", "savable", "coverage", "probdist", "timing", "profiler")
_TRACE_FORMATS = {"vcd", "fst"}


def load_snapshot(path: Path) -> Tuple[CompilerConfig, Tuple[GeneratedFile, ...]]:
    """Load the compiler configuration and generated file list from ``path``.

    Relative ``make_dir`` values resolve against the snapshot file's directory.
    """
    path = Path(path).expanduser()
    if not path.is_file():
        raise FileNotFoundError(f"Snapshot file not found: {path}")

    data = _read_snapshot(path)
    if not isinstance(data, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")

    make_dir_value = _as_str(data.get("make_dir"))
    if not make_dir_value:
        raise ConfigError(f"{path.name} is missing 'make_dir'")
    make_dir = Path(make_dir_value).expanduser()
    if not make_dir.is_absolute():
        make_dir = path.resolve().parent / make_dir

    threads = _as_int(data.get("threads"), "threads")
    if threads is None:
        threads = 0
    if threads < 0:
        raise ConfigError(f"'threads' must be non-negative, got {threads}")

    flags = {key: _flag(data.get(key), key) for key in _FLAG_KEYS}
    trace, trace_fst, source_base = _parse_trace(data.get("trace"))

    config = CompilerConfig(
        make_dir=make_dir,
        prefix=_as_str(data.get("prefix")) or "Vtop",
        verilator_root=_as_str(data.get("verilator_root")) or "",
        threads=threads,
        trace=trace,
        trace_fst=trace_fst,
        trace_source_base=source_base,
        **flags,
    )
    files = tuple(_parse_files(data.get("files")))
    return config, files


def _read_snapshot(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _parse_trace(value: Any) -> Tuple[bool, bool, Optional[str]]:
    if value is None:
        return False, False, None
    if not isinstance(value, dict):
        enabled = _as_bool(value)
        if enabled is None:
            raise ConfigError(f"'trace' must be a boolean or mapping, got {value!r}")
        return enabled, False, None

    # A trace mapping without 'enabled' means tracing is on.
    enabled = _flag(value.get("enabled", True), "trace.enabled")
    fmt = (_as_str(value.get("format")) or "vcd").lower()
    if fmt not in _TRACE_FORMATS:
        raise ConfigError(f"Unknown trace format '{fmt}' (expected fst or vcd)")
    source_base = _as_str(value.get("source_base"))
    return enabled, fmt == "fst", source_base


def _parse_files(value: Any) -> List[GeneratedFile]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError("'files' must be a list")
    files: List[GeneratedFile] = []
    for index, raw in enumerate(value):
        if isinstance(raw, str):
            files.append(GeneratedFile(name=raw))
            continue
        entry = _as_dict(raw)
        name = _as_str(entry.get("name"))
        if not name:
            raise ConfigError(f"files[{index}] is missing 'name'")
        kind_name = (_as_str(entry.get("kind")) or FileKind.OTHER.value).lower()
        try:
            kind = FileKind(kind_name)
        except ValueError as exc:
            raise ConfigError(f"files[{index}] has unknown kind '{kind_name}'") from exc
        files.append(
            GeneratedFile(
                name=name,
                kind=kind,
                source=_flag(entry.get("source"), f"files[{index}].source"),
            )
        )
    return files


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any, key: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
    raise ConfigError(f"'{key}' must be an integer, got {value!r}")


def _flag(value: Any, key: str) -> bool:
    if value is None:
        return False
    flag = _as_bool(value)
    if flag is None:
        raise ConfigError(f"'{key}' must be a boolean, got {value!r}")
    return flag


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "on", "1"}:
            return True
        if lowered in {"false", "no", "off", "0"}:
            return False
    return None


__all__ = ["ConfigError", "load_snapshot"]
