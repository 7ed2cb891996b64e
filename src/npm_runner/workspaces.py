"""Workspace pattern expansion.

Two mechanisms declare workspace members: the ``workspaces`` field of a
package.json and a sibling pnpm-workspace.yaml. Both resolve patterns relative
to the directory that declares them; only the workspace file knows exclusion
patterns (a leading ``!``).
"""

from __future__ import annotations

import fnmatch
import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from .discovery import IGNORED_DIRS
from .errors import PatternError

logger = logging.getLogger(__name__)

GLOB_CHARS = frozenset("*?[")
EXCLUDE_PREFIX = "!"


def is_glob(pattern: str) -> bool:
    return any(char in GLOB_CHARS for char in pattern)


def check_pattern(pattern: str) -> None:
    """Raise PatternError if ``pattern`` cannot be expanded."""
    if not pattern.strip():
        raise PatternError("Empty workspace pattern")
    if os.path.isabs(pattern):
        raise PatternError(f"Workspace pattern must be relative: {pattern!r}")

    index = 0
    while index < len(pattern):
        if pattern[index] == "[":
            end = pattern.find("]", index + 1)
            if end == -1:
                raise PatternError(f"Unterminated character class in {pattern!r}")
            if end == index + 1:
                raise PatternError(f"Empty character class in {pattern!r}")
            index = end
        index += 1


def _normalise(base_dir: Path, relative: str) -> Path:
    return Path(os.path.normpath(base_dir / relative))


def _subdirs(directory: Path, ignored: frozenset[str]) -> list[str]:
    try:
        with os.scandir(directory) as entries:
            return [
                entry.name
                for entry in entries
                if entry.name not in ignored and entry.is_dir(follow_symlinks=False)
            ]
    except OSError as exc:
        logger.debug("Skipping unreadable directory %s: %s", directory, exc)
        return []


def _names(directory: Path, ignored: frozenset[str]) -> list[str]:
    try:
        with os.scandir(directory) as entries:
            return [entry.name for entry in entries if entry.name not in ignored]
    except OSError as exc:
        logger.debug("Skipping unreadable directory %s: %s", directory, exc)
        return []


def _expand(directory: Path, segments: tuple[str, ...], ignored: frozenset[str]) -> Iterator[Path]:
    if not segments:
        yield directory
        return

    head, rest = segments[0], segments[1:]
    if head == "**":
        # zero or more directories; hidden and symlinked ones are not entered
        yield from _expand(directory, rest, ignored)
        for name in _subdirs(directory, ignored):
            if not name.startswith("."):
                yield from _expand(directory / name, segments, ignored)
    elif is_glob(head):
        for name in _names(directory, ignored):
            if name.startswith(".") and not head.startswith("."):
                continue
            if not fnmatch.fnmatchcase(name, head):
                continue
            child = directory / name
            if not rest or os.path.isdir(child):
                yield from _expand(child, rest, ignored)
    elif head in ignored:
        return
    else:
        child = directory / head
        if rest:
            if os.path.isdir(child):
                yield from _expand(child, rest, ignored)
        elif os.path.lexists(child):
            yield child


def glob_paths(
    base_dir: Path, pattern: str, ignored: frozenset[str] = IGNORED_DIRS
) -> set[Path]:
    """Expand ``pattern`` against the filesystem below ``base_dir``.

    Supports ``*``, ``?``, ``[...]`` within one path segment and ``**`` for
    any number of directories. Matches may be files or directories. Ignored
    directories (``node_modules`` and friends) are never entered.
    """
    check_pattern(pattern)
    segments = tuple(segment for segment in pattern.split("/") if segment)
    dirs_only = pattern.endswith("/")
    matches: set[Path] = set()
    for match in _expand(Path(base_dir), segments, ignored):
        if dirs_only and not os.path.isdir(match):
            continue
        matches.add(Path(os.path.normpath(match)))
    return matches


def member_dirs(
    base_dir: Path, pattern: str, ignored: frozenset[str] = IGNORED_DIRS
) -> set[Path]:
    """Candidate member directories for one ``workspaces`` field entry.

    Glob patterns expand through the filesystem; literal patterns resolve to
    the single joined path whether or not it exists.
    """
    if is_glob(pattern):
        return glob_paths(base_dir, pattern, ignored)
    check_pattern(pattern)
    return {_normalise(base_dir, pattern)}


def split_patterns(patterns: Iterable[str]) -> tuple[list[str], list[str]]:
    """Split workspace-file patterns into (includes, excludes)."""
    includes: list[str] = []
    excludes: list[str] = []
    for pattern in patterns:
        if pattern.startswith(EXCLUDE_PREFIX):
            excludes.append(pattern[len(EXCLUDE_PREFIX) :])
        else:
            includes.append(pattern)
    return includes, excludes


def resolve(
    base_dir: Path,
    patterns: Iterable[str],
    strict: bool = False,
    ignored: frozenset[str] = IGNORED_DIRS,
) -> set[Path]:
    """Resolve workspace-file patterns into the set of matching paths.

    Every include pattern is expanded first, then every exclude pattern is
    expanded the same way and its exact matches are removed.

    Raises:
        PatternError: In strict mode, on the first invalid pattern. Otherwise
            invalid patterns are logged and skipped.
    """
    base_dir = Path(base_dir)
    includes, excludes = split_patterns(patterns)

    def expand(pattern_list: list[str]) -> set[Path]:
        found: set[Path] = set()
        for pattern in pattern_list:
            try:
                found |= glob_paths(base_dir, pattern, ignored)
            except PatternError as exc:
                if strict:
                    raise
                logger.debug("Skipping workspace pattern in %s: %s", base_dir, exc)
        return found

    included = expand(includes)
    return included - expand(excludes)
