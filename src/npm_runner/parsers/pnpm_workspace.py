"""Parse pnpm-workspace.yaml to capture workspace package patterns."""

from __future__ import annotations

from pathlib import Path

from ..errors import WorkspaceFileError


def parse(path: Path) -> tuple[str, ...]:
    """Return the ``packages`` patterns declared by a workspace file.

    Patterns keep their leading ``!`` (exclusion marker); non-string entries
    are dropped. A file without ``packages`` yields no patterns.
    """
    import yaml

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, UnicodeDecodeError) as exc:
        raise WorkspaceFileError(f"Failed to read {path}: {exc}") from exc
    except (yaml.YAMLError, ValueError, RecursionError) as exc:
        raise WorkspaceFileError(f"Failed to parse {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise WorkspaceFileError(f"Failed to parse {path}: top level is not a mapping")

    packages = data.get("packages") or []
    if not isinstance(packages, list):
        return ()
    return tuple(pattern for pattern in packages if isinstance(pattern, str))
