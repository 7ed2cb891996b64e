"""Catalog of discovered scripts."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from .script_entry import ScriptEntry


@dataclass(frozen=True)
class Catalog:
    """Scripts in arrival order plus the number of manifests the walk located."""

    root: Path
    entries: tuple[ScriptEntry, ...]
    manifest_count: int

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[ScriptEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> ScriptEntry:
        return self.entries[index]

    @property
    def labels(self) -> list[str]:
        return [entry.label for entry in self.entries]

    def to_dict(self) -> dict[str, object]:
        return {
            "root": str(self.root),
            "manifests": self.manifest_count,
            "scripts": [entry.to_dict() for entry in self.entries],
        }
