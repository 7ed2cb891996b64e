"""Core discovery entrypoints.

This module MUST NOT depend on the terminal (selection, process execution) so
it can be reused by the CLI and by anything that only needs the catalog.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .config import Settings
from .discovery import locate
from .errors import NoManifestsError
from .extractor import ScriptExtractor, VisitedSet
from .models import Catalog, ScriptEntry
from .tasks import TaskTree

logger = logging.getLogger(__name__)


def build_catalog(root: Path, settings: Settings | None = None) -> Catalog:
    """Discover every script declared under ``root``.

    Params:
        root: directory to search
        settings: discovery settings; defaults when None

    Returns: Catalog of ScriptEntry values in arrival order, with the number
        of manifests located by the directory walk

    Raises:
        NoManifestsError: if no package.json exists under ``root``
    """
    settings = settings or Settings()
    root = Path(root).resolve()

    manifest_paths = sorted(
        set(locate(root, ignored=settings.all_ignored_dirs, max_workers=settings.max_workers))
    )
    if not manifest_paths:
        raise NoManifestsError(f"No package.json files found under {root}")
    logger.debug("Located %d manifests under %s", len(manifest_paths), root)

    entries: list[ScriptEntry] = []
    with TaskTree(max_workers=settings.max_workers, name="extract") as tree:
        extractor = ScriptExtractor(
            tree,
            VisitedSet(),
            ignored=settings.all_ignored_dirs,
            roots=frozenset(manifest_paths),
        )
        for path in manifest_paths:
            extractor.dispatch(path, is_leaf=False)
        entries.extend(tree.drain())

    logger.debug(
        "Collected %d scripts from %d manifests", len(entries), len(extractor.visited)
    )
    return Catalog(root=root, entries=tuple(entries), manifest_count=len(manifest_paths))
