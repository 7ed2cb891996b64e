"""Tests for the command-line entrypoint."""

import json

import pytest

from npm_runner import cli


@pytest.fixture
def interaction(monkeypatch):
    """Stub selection and execution; record what the CLI asked for."""
    state = {"choice": None, "labels": None, "ran": [], "exit_code": 0}

    def fake_select(labels):
        state["labels"] = list(labels)
        if state["choice"] is None:
            return None
        return state["labels"].index(state["choice"])

    def fake_run(entry, extra_args=()):
        state["ran"].append((entry, list(extra_args)))
        return state["exit_code"]

    monkeypatch.setattr(cli, "select_script", fake_select)
    monkeypatch.setattr(cli, "run_script", fake_run)
    return state


class TestMain:
    """Tests for main()."""

    def test_json_output(self, root, monorepo, capsys):
        assert cli.main([str(root), "--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["manifests"] == 1
        assert sorted((s["package"], s["script"], s["command"]) for s in data["scripts"]) == [
            ("bar", "test", "jest"),
            ("foo", "build", "tsc"),
        ]

    def test_not_a_directory(self, root, capsys):
        assert cli.main([str(root / "missing")]) == 2
        assert "Not a directory" in capsys.readouterr().err

    def test_no_manifests(self, root, capsys):
        assert cli.main([str(root)]) == 1
        assert "No package.json files found." in capsys.readouterr().out

    def test_cancelled_selection(self, root, monorepo, interaction, capsys):
        assert cli.main([str(root)]) == 0

        assert sorted(interaction["labels"]) == ["bar > (test)", "foo > (build)"]
        assert interaction["ran"] == []
        assert "Found 1 projects in" in capsys.readouterr().err

    def test_selected_script_runs(self, root, monorepo, interaction):
        interaction["choice"] = "foo > (build)"
        interaction["exit_code"] = 7

        assert cli.main([str(root), "--", "--watch"]) == 7

        [(entry, extra_args)] = interaction["ran"]
        assert entry.manifest_path == monorepo["foo"]
        assert extra_args == ["--watch"]

    def test_no_scripts(self, root, write_package, interaction, capsys):
        write_package("a", name="a")

        assert cli.main([str(root)]) == 0
        assert interaction["labels"] is None
        assert "No scripts found" in capsys.readouterr().err

    def test_invalid_config(self, root, monorepo, capsys):
        (root / ".npm-runner.json").write_text('{"maxWorkers": "many"}')

        assert cli.main([str(root)]) == 2
        assert "maxWorkers" in capsys.readouterr().err

    def test_invalid_workers(self, root, monorepo, capsys):
        assert cli.main([str(root), "--workers", "0"]) == 2
        assert "--workers" in capsys.readouterr().err

    def test_workers_flag(self, root, monorepo, capsys):
        assert cli.main([str(root), "--workers", "1", "--json"]) == 0
        assert len(json.loads(capsys.readouterr().out)["scripts"]) == 2


class TestParseArgs:
    """Tests for parse_args()."""

    def test_defaults(self):
        args, forwarded = cli.parse_args([])
        assert str(args.path) == "."
        assert args.json is False
        assert forwarded == []

    def test_forwarded_arguments_are_split(self):
        args, forwarded = cli.parse_args(["web", "-v", "--", "--port", "3000", "--"])
        assert str(args.path) == "web"
        assert args.verbose is True
        assert forwarded == ["--port", "3000", "--"]
