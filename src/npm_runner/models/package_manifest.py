"""Loosely-typed view over a parsed package.json."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

UNKNOWN_PACKAGE = "unknown"


@dataclass(frozen=True)
class PackageManifest:
    """The fields of a package.json that discovery cares about.

    Every field is coerced independently: a field with an unexpected shape is
    treated as absent rather than failing the whole manifest.
    """

    path: Path
    name: str = UNKNOWN_PACKAGE
    scripts: dict[str, str] = field(default_factory=dict)
    workspaces: tuple[str, ...] = ()

    @property
    def directory(self) -> Path:
        return self.path.parent
