"""Build plan document generation for Verilator compilations."""

from .emitter import BUILD_PLAN_FILENAME, BuildPlanEmitter, OutputUnavailableError, emit_build_plan
from .models import BuildPlan, CompilerConfig, FileKind, GeneratedFile

__all__ = [
    "BUILD_PLAN_FILENAME",
    "BuildPlan",
    "BuildPlanEmitter",
    "CompilerConfig",
    "FileKind",
    "GeneratedFile",
    "OutputUnavailableError",
    "emit_build_plan",
]
