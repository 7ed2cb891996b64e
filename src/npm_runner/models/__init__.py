"""Data models for script discovery."""

from __future__ import annotations

from .catalog import Catalog
from .package_manifest import UNKNOWN_PACKAGE, PackageManifest
from .script_entry import ScriptEntry

__all__ = [
    "Catalog",
    "PackageManifest",
    "ScriptEntry",
    "UNKNOWN_PACKAGE",
]
