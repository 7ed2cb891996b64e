"""Script entry model."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ScriptEntry:
    """A single runnable script declared by one package.json."""

    package_name: str
    script_name: str
    command: str
    manifest_path: Path

    def __post_init__(self) -> None:
        if not self.manifest_path.is_absolute():
            raise ValueError(f"manifest_path must be absolute: {self.manifest_path}")

    @property
    def directory(self) -> Path:
        """Directory the script has to run in."""
        return self.manifest_path.parent

    @property
    def label(self) -> str:
        return f"{self.package_name} > ({self.script_name})"

    def to_dict(self) -> dict[str, str]:
        return {
            "package": self.package_name,
            "script": self.script_name,
            "command": self.command,
            "manifestPath": str(self.manifest_path),
        }
