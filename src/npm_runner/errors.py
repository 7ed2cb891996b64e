"""Exception hierarchy shared by discovery, configuration and the CLI."""

from __future__ import annotations


class NpmRunnerError(RuntimeError):
    """Base error for npm-runner failures."""


class ManifestParseError(NpmRunnerError):
    """Raised when a package.json cannot be read or is not a JSON object."""


class WorkspaceFileError(NpmRunnerError):
    """Raised when a pnpm-workspace.yaml cannot be read or parsed."""


class PatternError(NpmRunnerError, ValueError):
    """Raised when a workspace pattern is syntactically invalid."""


class NoManifestsError(NpmRunnerError):
    """Raised when no package.json exists anywhere under the search root."""


class ConfigError(NpmRunnerError):
    """Raised when the configuration file cannot be loaded or is invalid."""
