"""Parse package.json and extract name, scripts and workspace patterns."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..errors import ManifestParseError
from ..models.package_manifest import UNKNOWN_PACKAGE, PackageManifest


def _coerce_scripts(raw: Any) -> dict[str, str]:
    if not isinstance(raw, dict):
        return {}
    return {str(name): command for name, command in raw.items() if isinstance(command, str)}


def _coerce_workspaces(raw: Any) -> tuple[str, ...]:
    """Normalise the array and object (``{"packages": [...]}``) forms."""
    if isinstance(raw, dict):
        raw = raw.get("packages")
    if not isinstance(raw, list):
        return ()
    return tuple(pattern for pattern in raw if isinstance(pattern, str))


def parse(path: Path) -> PackageManifest:
    """Return the discovery-relevant view of a package.json.

    Raises:
        ManifestParseError: If the file cannot be read, is not valid JSON or
            its top level is not an object.
    """
    import json

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestParseError(f"Failed to read {path}: {exc}") from exc
    except (ValueError, RecursionError) as exc:
        raise ManifestParseError(f"Failed to parse {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ManifestParseError(f"Failed to parse {path}: top level is not an object")

    name = data.get("name")
    return PackageManifest(
        path=path,
        name=name if isinstance(name, str) else UNKNOWN_PACKAGE,
        scripts=_coerce_scripts(data.get("scripts")),
        workspaces=_coerce_workspaces(data.get("workspaces")),
    )
