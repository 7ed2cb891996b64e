"""Tests for the package.json and pnpm-workspace.yaml parsers."""

import json
import sys

import pytest

from npm_runner.errors import ManifestParseError, WorkspaceFileError
from npm_runner.parsers.package_json import parse as parse_package_json
from npm_runner.parsers.pnpm_workspace import parse as parse_pnpm_workspace


class TestPackageJson:
    """Tests for the package.json parser."""

    def test_full_manifest(self, write_package):
        path = write_package(
            name="@acme/web",
            scripts={"build": "vite build", "test": "vitest"},
            workspaces=["packages/*", "tools/cli"],
        )

        manifest = parse_package_json(path)

        assert manifest.name == "@acme/web"
        assert manifest.scripts == {"build": "vite build", "test": "vitest"}
        assert manifest.workspaces == ("packages/*", "tools/cli")
        assert manifest.directory == path.parent

    def test_object_workspaces_form(self, write_package):
        path = write_package(workspaces={"packages": ["apps/*"], "nohoist": ["**/react"]})
        assert parse_package_json(path).workspaces == ("apps/*",)

    @pytest.mark.parametrize("name", [None, 42, ["x"], {"a": 1}])
    def test_missing_or_invalid_name_defaults_to_unknown(self, write_package, name):
        path = write_package(**({} if name is None else {"name": name}))
        assert parse_package_json(path).name == "unknown"

    def test_shape_mismatches_are_treated_as_absent(self, write_package):
        """Test wrongly-typed fields do not fail the manifest."""
        path = write_package(name="x", scripts=["build"], workspaces="packages/*")

        manifest = parse_package_json(path)

        assert manifest.scripts == {}
        assert manifest.workspaces == ()

    def test_non_string_script_commands_are_dropped(self, write_package):
        path = write_package(scripts={"build": "tsc", "weird": 1, "none": None})
        assert parse_package_json(path).scripts == {"build": "tsc"}

    def test_non_string_workspace_patterns_are_dropped(self, write_package):
        path = write_package(workspaces=["a", 3, None, "b/*"])
        assert parse_package_json(path).workspaces == ("a", "b/*")

    def test_invalid_json(self, root):
        bad = root / "package.json"
        bad.write_text("{ not json")
        with pytest.raises(ManifestParseError, match="Failed to parse"):
            parse_package_json(bad)

    def test_non_object_top_level(self, root):
        bad = root / "package.json"
        bad.write_text(json.dumps(["name"]))
        with pytest.raises(ManifestParseError, match="not an object"):
            parse_package_json(bad)

    def test_missing_file(self, root):
        with pytest.raises(ManifestParseError, match="Failed to read"):
            parse_package_json(root / "package.json")

    @pytest.mark.skipif(not hasattr(sys, "set_int_max_str_digits"), reason="no int digit limit")
    def test_oversized_integer(self, root):
        bad = root / "package.json"
        bad.write_text('{"version": ' + "1" * 5000 + "}")
        with pytest.raises(ManifestParseError, match="Failed to parse"):
            parse_package_json(bad)

    def test_deeply_nested_document(self, root):
        bad = root / "package.json"
        bad.write_text("[" * 100000 + "]" * 100000)
        with pytest.raises(ManifestParseError, match="Failed to parse"):
            parse_package_json(bad)


class TestPnpmWorkspace:
    """Tests for the pnpm-workspace.yaml parser."""

    def test_packages_with_exclusions(self, write_pnpm_workspace):
        path = write_pnpm_workspace(["apps/*", "packages/**", "!apps/legacy"])
        assert parse_pnpm_workspace(path) == ("apps/*", "packages/**", "!apps/legacy")

    def test_missing_packages_key(self, root):
        path = root / "pnpm-workspace.yaml"
        path.write_text("catalog:\n  react: ^18\n")
        assert parse_pnpm_workspace(path) == ()

    def test_empty_file(self, root):
        path = root / "pnpm-workspace.yaml"
        path.write_text("")
        assert parse_pnpm_workspace(path) == ()

    def test_invalid_yaml(self, root):
        path = root / "pnpm-workspace.yaml"
        path.write_text("packages: [unclosed\n")
        with pytest.raises(WorkspaceFileError, match="Failed to parse"):
            parse_pnpm_workspace(path)

    def test_non_mapping_top_level(self, root):
        path = root / "pnpm-workspace.yaml"
        path.write_text("- apps/*\n")
        with pytest.raises(WorkspaceFileError, match="not a mapping"):
            parse_pnpm_workspace(path)

    @pytest.mark.skipif(not hasattr(sys, "set_int_max_str_digits"), reason="no int digit limit")
    def test_oversized_integer(self, root):
        path = root / "pnpm-workspace.yaml"
        path.write_text("packages:\n  - apps/*\nversion: " + "1" * 5000 + "\n")
        with pytest.raises(WorkspaceFileError, match="Failed to parse"):
            parse_pnpm_workspace(path)
