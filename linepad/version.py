"""Build identification shown by ``linepad --version``."""

from __future__ import annotations

import importlib.metadata
import json
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional

from .constants import EditorConstants


class BuildInfo(NamedTuple):
    commit: Optional[str]
    date: Optional[str]
    dirty: bool


def _git(args: list[str], cwd: Path) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=str(cwd),
                                      stderr=subprocess.DEVNULL)
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None
    return out.decode().strip() or None


def _from_git_checkout() -> Optional[BuildInfo]:
    root = _git(["rev-parse", "--show-toplevel"], Path(__file__).resolve().parent)
    if not root:
        return None
    root_path = Path(root)
    commit = _git(["rev-parse", "HEAD"], root_path)
    date = _git(["show", "-s", "--format=%cI", "HEAD"], root_path)
    status = _git(["status", "--porcelain"], root_path)
    return BuildInfo(commit=commit, date=date, dirty=bool(status))


def _from_build_file() -> Optional[BuildInfo]:
    # Written by the hatch build hook
    try:
        from . import _build_info  # type: ignore
    except ImportError:
        return None
    commit = getattr(_build_info, "COMMIT", None)
    date = getattr(_build_info, "DATE", None)
    if commit or date:
        return BuildInfo(commit=commit, date=date, dirty=False)
    return None


def _from_install_metadata() -> Optional[BuildInfo]:
    # PEP 610 direct_url.json carries the commit of VCS installs
    try:
        dist = importlib.metadata.distribution(EditorConstants.APP_NAME)
    except importlib.metadata.PackageNotFoundError:
        return None
    text = dist.read_text("direct_url.json")
    if not text:
        return None
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    commit = (data.get("vcs_info") or {}).get("commit_id")
    if commit:
        return BuildInfo(commit=commit, date=None, dirty=False)
    return None


def get_build_info() -> BuildInfo:
    for getter in (_from_git_checkout, _from_build_file, _from_install_metadata):
        info = getter()
        if info and (info.commit or info.date):
            return info
    return BuildInfo(commit=None, date=None, dirty=False)


def get_version_string() -> str:
    info = get_build_info()
    commit = info.commit[:7] if info.commit else "unknown"
    dirty_suffix = "-dirty" if info.dirty else ""
    return f"{EditorConstants.APP_NAME} {commit}{dirty_suffix} {info.date or 'unknown'}"
