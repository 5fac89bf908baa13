from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path
from typing import Optional

FALLBACK_VERSION = "0.1.0"


def _run_git(args: list[str], cwd: Path) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL)
        return out.decode().strip() or None
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None


def get_version() -> str:
    try:
        return importlib.metadata.version("tilde")
    except importlib.metadata.PackageNotFoundError:
        return FALLBACK_VERSION


def get_commit() -> Optional[str]:
    """Short commit hash when running from a git checkout."""
    commit = _run_git(["rev-parse", "HEAD"], cwd=Path(__file__).resolve().parent)
    return commit[:7] if commit else None


def get_version_string() -> str:
    commit = get_commit()
    version = get_version()
    return f"{version} ({commit})" if commit else version
