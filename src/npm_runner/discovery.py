"""Repository and manifest discovery utilities."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from .tasks import TaskTree

logger = logging.getLogger(__name__)

MANIFEST_NAME = "package.json"
WORKSPACE_FILE_NAME = "pnpm-workspace.yaml"

IGNORED_DIRS = frozenset(
    {
        # version control
        ".git",
        ".hg",
        ".svn",
        # CI
        ".github",
        ".circleci",
        ".gitlab",
        # editors
        ".vscode",
        ".idea",
        # installed dependencies
        "node_modules",
        "bower_components",
        ".yarn",
        ".pnpm-store",
        # test fixtures
        "__fixtures__",
        "__snapshots__",
        "__mocks__",
    }
)


def manifest_in(directory: Path) -> Path | None:
    """Return the package.json directly inside ``directory``, if any."""
    candidate = directory / MANIFEST_NAME
    # unreadable parent directories count as "no manifest"
    return candidate if os.path.isfile(candidate) else None


def _walk(tree: TaskTree, directory: Path, ignored: frozenset[str]) -> None:
    manifest = manifest_in(directory)
    if manifest is not None:
        # package boundary: nothing below a manifest is searched
        tree.emit(manifest)
        return

    try:
        with os.scandir(directory) as entries:
            subdirs = [
                Path(entry.path)
                for entry in entries
                if entry.name not in ignored and entry.is_dir(follow_symlinks=False)
            ]
    except OSError as exc:
        logger.debug("Skipping unreadable directory %s: %s", directory, exc)
        return

    for subdir in subdirs:
        tree.spawn(_walk, tree, subdir, ignored)


def locate(
    root: Path,
    ignored: Iterable[str] = IGNORED_DIRS,
    max_workers: int | None = None,
) -> Iterator[Path]:
    """Find package root manifests under ``root`` concurrently.

    Yields absolute paths in no particular order. A directory holding a
    package.json is treated as a package root and is not descended into;
    directories named in ``ignored`` are pruned. Unreadable directories are
    skipped, so the result may be partial.
    """
    root = Path(root).resolve()
    with TaskTree(max_workers=max_workers, name="locate") as tree:
        tree.spawn(_walk, tree, root, frozenset(ignored))
        yield from tree.drain()
