"""Script extraction from manifests and the workspaces they declare."""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

from . import workspaces
from .discovery import IGNORED_DIRS, WORKSPACE_FILE_NAME, manifest_in
from .errors import ManifestParseError, PatternError, WorkspaceFileError
from .models import PackageManifest, ScriptEntry
from .parsers.package_json import parse as parse_package_json
from .parsers.pnpm_workspace import parse as parse_pnpm_workspace
from .tasks import TaskTree

logger = logging.getLogger(__name__)


class VisitedSet:
    """Manifest paths already claimed during one discovery run."""

    def __init__(self) -> None:
        self._paths: set[Path] = set()
        self._lock = threading.Lock()

    def claim(self, path: Path) -> bool:
        """Record ``path``; return False if another task got there first."""
        with self._lock:
            if path in self._paths:
                return False
            self._paths.add(path)
            return True

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._paths

    def __len__(self) -> int:
        with self._lock:
            return len(self._paths)


class ScriptExtractor:
    """Turn manifests into ScriptEntry values on a shared TaskTree.

    Every manifest contributes at most once per run, however many workspace
    declarations reach it. Data problems (unreadable files, malformed JSON or
    YAML, invalid patterns) are logged and contribute nothing.
    """

    def __init__(
        self,
        tree: TaskTree,
        visited: VisitedSet | None = None,
        ignored: frozenset[str] = IGNORED_DIRS,
        roots: frozenset[Path] = frozenset(),
    ) -> None:
        self.tree = tree
        self.visited = visited if visited is not None else VisitedSet()
        self.ignored = ignored
        # top-level manifests get their own non-leaf task
        self.roots = roots

    def dispatch(self, manifest_path: Path, is_leaf: bool = False) -> None:
        """Schedule extraction of ``manifest_path`` as its own task."""
        self.tree.spawn(self.extract, manifest_path, is_leaf)

    def extract(self, manifest_path: Path, is_leaf: bool = False) -> None:
        """Emit the scripts of one manifest and dispatch its workspace members.

        ``is_leaf`` is set for workspace members, whose own workspace
        declarations are not followed.
        """
        if is_leaf and manifest_path in self.roots:
            return
        if not self.visited.claim(manifest_path):
            return

        try:
            manifest = parse_package_json(manifest_path)
        except ManifestParseError as exc:
            logger.debug("Skipping manifest: %s", exc)
            return

        for script_name, command in manifest.scripts.items():
            self.tree.emit(
                ScriptEntry(
                    package_name=manifest.name,
                    script_name=script_name,
                    command=command,
                    manifest_path=manifest_path,
                )
            )

        if is_leaf:
            return

        self._dispatch_declared_members(manifest)
        self._dispatch_workspace_file_members(manifest)

    def _dispatch_declared_members(self, manifest: PackageManifest) -> None:
        seen: set[Path] = set()
        for pattern in manifest.workspaces:
            try:
                candidates = workspaces.member_dirs(manifest.directory, pattern, self.ignored)
            except PatternError as exc:
                logger.debug("Skipping workspace pattern in %s: %s", manifest.path, exc)
                continue

            for directory in candidates:
                member = manifest_in(directory)
                if member is None or member in seen:
                    continue
                seen.add(member)
                self.dispatch(member, is_leaf=True)

    def _dispatch_workspace_file_members(self, manifest: PackageManifest) -> None:
        workspace_file = manifest.directory / WORKSPACE_FILE_NAME
        if not os.path.isfile(workspace_file):
            return

        try:
            patterns = parse_pnpm_workspace(workspace_file)
        except WorkspaceFileError as exc:
            logger.debug("Skipping workspace file: %s", exc)
            return

        members = workspaces.resolve(manifest.directory, patterns, ignored=self.ignored)
        for directory in members:
            member = manifest_in(directory)
            if member is None or member == manifest.path:
                continue
            self.dispatch(member, is_leaf=True)
