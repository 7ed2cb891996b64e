"""npm-runner core package.

Discovers the scripts declared across a tree of ``package.json`` manifests
(workspaces included) and runs the selected one with the package manager
that owns it.
"""

__all__ = [
    "core",
]
