"""Generate linepad/_build_info.py from the current git checkout."""

from __future__ import annotations

import subprocess
from pathlib import Path


def _run_git(args: list[str], cwd: Path) -> str | None:
    try:
        out = subprocess.check_output(["git", *args], cwd=str(cwd),
                                      stderr=subprocess.DEVNULL)
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        # Builds outside a checkout have no commit to record
        return None
    return out.decode().strip() or None


def write_build_info(project_root: Path) -> Path:
    target_path = project_root / "linepad" / "_build_info.py"
    commit = _run_git(["rev-parse", "HEAD"], cwd=project_root)
    date = _run_git(["show", "-s", "--format=%cI", "HEAD"], cwd=project_root)
    target_path.write_text(
        "# Auto-generated at build time.\n"
        f"COMMIT = {commit!r}\n"
        f"DATE = {date!r}\n",
        encoding="utf-8",
    )
    return target_path


if __name__ == "__main__":
    write_build_info(Path(__file__).resolve().parents[1])
