"""Custom build hook for Hatchling to embed the git commit in the package."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from hatchling.builders.hooks.plugin.interface import BuildHookInterface


class CustomBuildHook(BuildHookInterface):
    """Writes linepad/_build_info.py before the wheel is assembled."""

    def initialize(self, version: str, build_data: dict[str, Any]) -> None:
        root = Path(self.root)
        sys.path.insert(0, str(root / "build_tools"))
        try:
            from write_build_info import write_build_info
        finally:
            sys.path.pop(0)
        write_build_info(root)
        build_data.setdefault("artifacts", []).append("linepad/_build_info.py")
