"""Build plan emission: gather compiler state, render it and write it out."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Tuple

from .logging import get_logger
from .models import BuildPlan, CompilerConfig, GeneratedFile
from .plan import build_plan
from .render import PlanRenderer

BUILD_PLAN_FILENAME = "vl_build.json"


class OutputUnavailableError(RuntimeError):
    """Raised when the build plan file cannot be created."""

    def __init__(self, path: Path, reason: OSError) -> None:
        detail = reason.strerror or str(reason)
        super().__init__(f"Cannot write build plan {path}: {detail}")
        self.path = path


class BuildPlanEmitter:
    """Writes ``<make_dir>/vl_build.json`` for a finished compilation.

    The configuration snapshot and the generated file list are borrowed for a
    single :meth:`emit` call and never modified.
    """

    def __init__(
        self,
        config: CompilerConfig,
        files: Iterable[GeneratedFile] = (),
        renderer: PlanRenderer | None = None,
    ) -> None:
        self.config = config
        self.files: Tuple[GeneratedFile, ...] = tuple(files)
        self.renderer = renderer or PlanRenderer()
        self.logger = get_logger("emitter")

    @property
    def output_path(self) -> Path:
        return self.config.make_dir / BUILD_PLAN_FILENAME

    def gather(self) -> BuildPlan:
        plan = build_plan(self.config, self.files)
        self.logger.debug(
            "Build plan has %d features, %d library sources, %d model sources, %d model headers",
            len(plan.features),
            len(plan.lib_sources),
            len(plan.model_sources),
            len(plan.model_headers),
        )
        return plan

    def render(self) -> str:
        return self.renderer.render(self.gather())

    def emit(self) -> Path:
        """Create or truncate the build plan file and write the document."""
        path = self.output_path
        self.logger.debug("Emitting build plan to %s", path)
        document = self.render()

        try:
            handle = path.open("w", encoding="utf-8", newline="\n")
        except OSError as exc:
            raise OutputUnavailableError(path, exc) from exc

        # Failures after the file was opened are reported but not fatal.
        try:
            with handle:
                handle.write(document)
        except OSError as exc:
            self.logger.warning("Incomplete write of build plan %s: %s", path, exc)
        else:
            self.logger.info("Wrote build plan to %s", path)
        return path


def emit_build_plan(config: CompilerConfig, files: Iterable[GeneratedFile] = ()) -> Path:
    """Emit the build plan for ``config`` and ``files``; return the written path."""
    return BuildPlanEmitter(config, files).emit()


__all__ = [
    "BUILD_PLAN_FILENAME",
    "BuildPlanEmitter",
    "OutputUnavailableError",
    "emit_build_plan",
]
