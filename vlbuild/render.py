"""Rendering of build plans into the fixed-layout JSON document."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from jinja2 import Environment, FileSystemLoader

from .models import BuildPlan

DOCUMENT_TEMPLATE = "vl_build.json.j2"


def json_array(items: Iterable[str]) -> str:
    """Render an ordered string list as a single-line JSON array.

    Empty input renders as ``[]``; otherwise ``["a", "b"]``.
    """
    return json.dumps(list(items))


def json_value(value: object) -> str:
    """Render a scalar (string, integer or ``None``) as a JSON literal."""
    return json.dumps(value)


def create_environment(templates_dir: Path | None = None) -> Environment:
    directories = []
    if templates_dir:
        directories.append(str(templates_dir))
    directories.append(str(Path(__file__).with_name("templates")))
    env = Environment(
        loader=FileSystemLoader(directories),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["json_array"] = json_array
    env.filters["json_value"] = json_value
    return env


class PlanRenderer:
    """Renders a :class:`BuildPlan` using the document template."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        self._env = create_environment(templates_dir)

    def render(self, plan: BuildPlan) -> str:
        template = self._env.get_template(DOCUMENT_TEMPLATE)
        return template.render(plan=plan).rstrip("\n") + "\n"


def render_plan(plan: BuildPlan) -> str:
    """Render ``plan`` with the bundled template."""
    return PlanRenderer().render(plan)


__all__ = ["PlanRenderer", "create_environment", "json_array", "json_value", "render_plan"]
