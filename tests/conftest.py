"""Pytest configuration and fixtures."""

import json
import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the caller's npm-runner environment out of the tests."""
    for var in ("NPM_RUNNER_CONFIG", "NPM_RUNNER_MAX_WORKERS", "NPM_RUNNER_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def root(tmp_path):
    """Return a resolved, empty search root."""
    return tmp_path.resolve()


@pytest.fixture
def write_package(root):
    """Return a factory writing a package.json below the search root."""

    def _write(relative="", name=None, scripts=None, workspaces=None, **extra):
        directory = root / relative
        directory.mkdir(parents=True, exist_ok=True)
        data = dict(extra)
        if name is not None:
            data["name"] = name
        if scripts is not None:
            data["scripts"] = scripts
        if workspaces is not None:
            data["workspaces"] = workspaces
        path = directory / "package.json"
        with open(path, "w") as f:
            json.dump(data, f)
        return path

    return _write


@pytest.fixture
def write_pnpm_workspace(root):
    """Return a factory writing a pnpm-workspace.yaml below the search root."""

    def _write(packages, relative=""):
        directory = root / relative
        directory.mkdir(parents=True, exist_ok=True)
        lines = ["packages:"] + [f"  - '{pattern}'" for pattern in packages]
        path = directory / "pnpm-workspace.yaml"
        path.write_text("\n".join(lines) + "\n")
        return path

    return _write


@pytest.fixture
def monorepo(write_package):
    """A workspace root without scripts and two members that have some."""
    write_package(name="root", workspaces=["pkgs/*"])
    foo = write_package("pkgs/foo", name="foo", scripts={"build": "tsc"})
    bar = write_package("pkgs/bar", name="bar", scripts={"test": "jest"})
    return {"foo": foo, "bar": bar}


@pytest.fixture
def as_tuples():
    """Return a helper turning ScriptEntry values into comparable tuples."""

    def _as_tuples(entries):
        return {(e.package_name, e.script_name, e.command, e.manifest_path) for e in entries}

    return _as_tuples
