"""Run a selected script in the foreground with its package manager."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from .models import ScriptEntry
from .package_manager import infer_package_manager

logger = logging.getLogger(__name__)

LAUNCH_FAILURE_EXIT_CODE = 1


def build_command(entry: ScriptEntry, package_manager: str, extra_args: Sequence[str] = ()) -> list[str]:
    command = [package_manager, "run", entry.script_name]
    if extra_args:
        # npm needs the separator to forward arguments to the script
        command.append("--")
        command.extend(extra_args)
    return command


def run_script(entry: ScriptEntry, extra_args: Sequence[str] = ()) -> int:
    """Run ``entry`` attached to the current terminal and return its exit code.

    Returns 1 when the package manager cannot be launched.
    """
    package_manager = infer_package_manager(entry.manifest_path)
    command = build_command(entry, package_manager, extra_args)
    logger.info("Running %s in %s", " ".join(command), entry.directory)

    try:
        completed = subprocess.run(command, cwd=entry.directory, check=False)
    except OSError as exc:
        logger.error("Failed to launch %s: %s", package_manager, exc)
        return LAUNCH_FAILURE_EXIT_CODE

    if completed.returncode < 0:
        # killed by a signal; report it the way a shell would
        return 128 - completed.returncode
    return completed.returncode
