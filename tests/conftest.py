from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from vlbuild.models import CompilerConfig


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[..., CompilerConfig]:
    """Return a factory for snapshots whose make_dir is an existing tmp directory."""
    make_dir = tmp_path / "obj_dir"
    make_dir.mkdir()

    def _factory(**overrides: object) -> CompilerConfig:
        values: dict[str, object] = {
            "make_dir": make_dir,
            "prefix": "Vtop",
            "verilator_root": "/usr/local/share/verilator",
        }
        values.update(overrides)
        return CompilerConfig(**values)  # type: ignore[arg-type]

    return _factory
