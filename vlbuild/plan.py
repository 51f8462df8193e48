"""Derivation of build plan contents from a compiler configuration snapshot."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from .models import BuildPlan, CompilerConfig, FileKind, GeneratedFile

PLAN_VERSION = "1.0"

SYSTEMC_MACRO = "VM_SC=1"

_BASE_LIB_SOURCES = ("verilated.cpp", "verilated_threads.cpp")


def derive_features(config: CompilerConfig) -> List[str]:
    """Return enabled feature tags in their fixed priority order."""
    features: List[str] = []
    if config.dpi:
        features.append("dpi")
    if config.vpi:
        features.append("vpi")
    if config.savable:
        features.append("save")
    if config.coverage:
        features.append("cov")
    if config.trace:
        features.append("fst_c" if config.trace_fst else "vcd_c")
    if config.probdist:
        features.append("probdist")
    if config.timing:
        features.append("timing")
    if config.profiler:
        features.append("profiler")
    return features


def derive_lib_sources(config: CompilerConfig) -> List[str]:
    """Return the support library sources to compile alongside the model."""
    sources = list(_BASE_LIB_SOURCES)
    if config.dpi:
        sources.append("verilated_dpi.cpp")
    if config.vpi:
        sources.append("verilated_vpi.cpp")
    if config.savable:
        sources.append("verilated_save.cpp")
    if config.coverage:
        sources.append("verilated_cov.cpp")
    if config.trace:
        sources.append(f"{config.trace_source_base}_c.cpp")
    if config.probdist:
        sources.append("verilated_probdist.cpp")
    if config.timing:
        sources.append("verilated_timing.cpp")
    if config.profiler:
        sources.append("verilated_profiler.cpp")
    return sources


def derive_macros(config: CompilerConfig) -> List[str]:
    if config.systemc:
        return [SYSTEMC_MACRO]
    return []


def classify_model_files(files: Iterable[GeneratedFile]) -> Tuple[List[str], List[str]]:
    """Split C files into (sources, headers), keeping registration order.

    Names are reduced to their final path component. Files of any other kind
    are skipped, and duplicates are kept as-is.
    """
    sources: List[str] = []
    headers: List[str] = []
    for entry in files:
        if entry.kind is not FileKind.CFILE:
            continue
        if entry.source:
            sources.append(entry.base_name)
        else:
            headers.append(entry.base_name)
    return sources, headers


def _trace_format(config: CompilerConfig) -> str | None:
    if not config.trace:
        return None
    return "fst" if config.trace_fst else "vcd"


def build_plan(config: CompilerConfig, files: Iterable[GeneratedFile]) -> BuildPlan:
    """Gather every value the build plan document needs."""
    model_sources, model_headers = classify_model_files(files)
    return BuildPlan(
        version=PLAN_VERSION,
        verilator_root=config.verilator_root,
        mode="systemc" if config.systemc else "cpp",
        features=tuple(derive_features(config)),
        lib_sources=tuple(derive_lib_sources(config)),
        macros=tuple(derive_macros(config)),
        threads=config.threads,
        trace=_trace_format(config),
        timing=int(config.timing),
        coverage=int(config.coverage),
        prefix=config.prefix,
        model_sources=tuple(model_sources),
        model_headers=tuple(model_headers),
    )


__all__ = [
    "PLAN_VERSION",
    "SYSTEMC_MACRO",
    "build_plan",
    "classify_model_files",
    "derive_features",
    "derive_lib_sources",
    "derive_macros",
]
