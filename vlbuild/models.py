"""Core data models shared across vlbuild components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple


class FileKind(str, Enum):
    """Kind of a compiler-emitted support file."""

    OTHER = "other"
    CFILE = "cfile"


@dataclass(frozen=True)
class GeneratedFile:
    """A file registered by the compiler during code generation."""

    name: str
    kind: FileKind = FileKind.OTHER
    # Only meaningful for C files: True for compiled sources, False for headers.
    source: bool = False

    @property
    def base_name(self) -> str:
        return Path(self.name).name


@dataclass(frozen=True)
class CompilerConfig:
    """Point-in-time view of the compiler options the build plan depends on."""

    make_dir: Path
    prefix: str = "Vtop"
    verilator_root: str = ""
    systemc: bool = False
    dpi: bool = False
    vpi: bool = False
    savable: bool = False
    coverage: bool = False
    trace: bool = False
    trace_fst: bool = False
    probdist: bool = False
    timing: bool = False
    profiler: bool = False
    threads: int = 0
    trace_source_base: Optional[str] = None

    def __post_init__(self) -> None:
        if self.threads < 0:
            raise ValueError(f"threads must be non-negative, got {self.threads}")
        object.__setattr__(self, "make_dir", Path(self.make_dir))
        if self.trace_source_base is None:
            base = "verilated_fst" if self.trace_fst else "verilated_vcd"
            object.__setattr__(self, "trace_source_base", base)


@dataclass(frozen=True)
class BuildPlan:
    """Gathered contents of the build plan document, in schema order."""

    version: str
    verilator_root: str
    mode: str
    features: Tuple[str, ...]
    lib_sources: Tuple[str, ...]
    macros: Tuple[str, ...]
    threads: int
    trace: Optional[str]
    timing: int
    coverage: int
    prefix: str
    model_sources: Tuple[str, ...] = field(default_factory=tuple)
    model_headers: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Return the nested document mapping with keys in schema order."""
        return {
            "version": self.version,
            "config": {"VERILATOR_ROOT": self.verilator_root},
            "libverilated": {
                "mode": self.mode,
                "features": list(self.features),
                "compile_sources": list(self.lib_sources),
                "compile_macros": list(self.macros),
            },
            "model": {
                "config": {
                    "threads": self.threads,
                    "trace": self.trace,
                    "timing": self.timing,
                    "coverage": self.coverage,
                },
                "prefix": self.prefix,
                "compile_sources": list(self.model_sources),
                "compile_headers": list(self.model_headers),
                "compile_macros": list(self.macros),
            },
        }
