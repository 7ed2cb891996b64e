"""Infer which package manager owns a package from lockfile presence."""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_PACKAGE_MANAGER = "npm"

# Checked in this order inside one directory.
LOCKFILES: dict[str, str] = {
    "pnpm-lock.yaml": "pnpm",
    "yarn.lock": "yarn",
    "bun.lock": "bun",
    "bun.lockb": "bun",
    "package-lock.json": "npm",
}


def detect_in(directory: Path) -> str | None:
    """Return the package manager whose lockfile sits directly in ``directory``."""
    for lockfile, manager in LOCKFILES.items():
        if os.path.isfile(directory / lockfile):
            return manager
    return None


def infer_package_manager(manifest_path: Path) -> str:
    """Walk up from the manifest's directory to the filesystem root.

    The nearest directory holding a known lockfile decides; npm is the
    fallback when none is found.
    """
    directory = Path(manifest_path).resolve().parent
    for candidate in (directory, *directory.parents):
        manager = detect_in(candidate)
        if manager is not None:
            return manager
    return DEFAULT_PACKAGE_MANAGER
