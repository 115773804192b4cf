"""Tests for the zonetrack CLI."""

import json

import pytest
from click.testing import CliRunner

from zonetrack.app import Tracker
from zonetrack.cli import cli, parse_command
from zonetrack.model.entities import Target
from zonetrack.model.store import MatrixKey
from zonetrack.persistence import hash_path_for, load_state, save_state
from zonetrack.serializer.canonical import compute_hash


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def saved_state(tmp_path):
    t = Tracker.create(title="Saved")
    for key, arg in [("q", "Overworld"), ("w", "North"), ("e", "Jump"), ("r", "Double")]:
        t.handle_key(key, arg)
    t.handle_key("y")
    path = tmp_path / "state.json"
    save_state(t, path)
    return path


class TestParseCommand:
    def test_key_only(self):
        assert parse_command("j") == ("j", "")

    def test_key_with_argument(self):
        assert parse_command("q  Lost Woods ") == ("q", "Lost Woods")

    def test_key_glued_to_argument(self):
        assert parse_command("s0") == ("s", "0")

    def test_blank(self):
        assert parse_command("   ") == ("", "")


class TestRun:
    def test_build_and_save(self, runner, tmp_path):
        state = tmp_path / "run.json"
        session = "\n".join([
            "q Overworld", "w North", "w South", "e Jump", "r Double", "y", "Q",
        ]) + "\n"
        result = runner.invoke(cli, ["run", "--state", str(state)], input=session)

        assert result.exit_code == 0, result.output
        assert "Saved" in result.output
        tracker, _ = load_state(state)
        assert tracker.current_target().progress == 1
        assert len(tracker.store.targets) == 2

    def test_argument_prompted_when_missing(self, runner, tmp_path):
        state = tmp_path / "run.json"
        result = runner.invoke(cli, ["run", "--state", str(state)], input="q\nCaves\nQ\n")
        assert result.exit_code == 0, result.output
        tracker, _ = load_state(state)
        assert [m.name for m in tracker.store.maps] == ["Caves"]

    def test_quit_without_saving(self, runner, tmp_path):
        state = tmp_path / "run.json"
        result = runner.invoke(cli, ["run", "--state", str(state)], input="q Overworld\n!\n")
        assert result.exit_code == 0
        assert "Quit without saving" in result.output
        assert not state.exists()

    def test_eof_quits_without_saving(self, runner, tmp_path):
        state = tmp_path / "run.json"
        result = runner.invoke(cli, ["run", "--state", str(state)], input="q Overworld\n")
        assert result.exit_code == 0
        assert not state.exists()

    def test_resumes_existing_state(self, runner, saved_state):
        result = runner.invoke(cli, ["run", "--state", str(saved_state)], input="y\nQ\n")
        assert result.exit_code == 0, result.output
        tracker, _ = load_state(saved_state)
        assert tracker.current_target().progress == 2

    def test_autosave_disabled(self, runner, tmp_path):
        config = tmp_path / "config.yaml"
        state = tmp_path / "run.json"
        config.write_text(f"autosave: false\nstate_path: {state}\n", encoding="utf-8")
        result = runner.invoke(cli, ["run", "--config", str(config)], input="q A\nQ\n")
        assert result.exit_code == 0
        assert not state.exists()

    def test_invalid_state_aborts(self, runner, saved_state):
        hash_path_for(saved_state).write_text("0" * 64, encoding="utf-8")
        result = runner.invoke(cli, ["run", "--state", str(saved_state)], input="Q\n")
        assert result.exit_code == 1
        assert "State Invalid" in result.output

    def test_help_key(self, runner, tmp_path):
        result = runner.invoke(cli, ["run", "--state", str(tmp_path / "x.json")], input="?\n!\n")
        assert "save and quit" in result.output


class TestShow:
    def test_prints_grid(self, runner, saved_state):
        result = runner.invoke(cli, ["show", str(saved_state), "--no-color"])
        assert result.exit_code == 0
        assert result.output.splitlines()[0] == "Saved"
        assert "[1/2]" in result.output


class TestCheck:
    def test_consistent_matrix(self, runner, saved_state):
        result = runner.invoke(cli, ["check", str(saved_state)])
        assert result.exit_code == 0, result.output
        assert "Matrix OK" in result.output
        assert "targets: 1" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["check", str(tmp_path / "none.json")])
        assert result.exit_code == 1
        assert "State Invalid" in result.output

    def test_file_with_missing_entry_rejected(self, runner, saved_state):
        data = json.loads(saved_state.read_text(encoding="utf-8"))
        data["targets"] = []
        content = json.dumps(data, indent=2, sort_keys=True) + "\n"
        saved_state.write_text(content, encoding="utf-8")
        hash_path_for(saved_state).write_text(compute_hash(content), encoding="utf-8")

        result = runner.invoke(cli, ["check", str(saved_state)])
        assert result.exit_code == 1
        assert "no target entry" in result.output

    def test_orphaned_and_missing_entries_reported(self, runner, saved_state, monkeypatch):
        tracker, manifest = load_state(saved_state)
        tracker.store.targets.clear()
        tracker.store.targets[MatrixKey("Gone", "North", "Jump", "Double")] = Target()
        monkeypatch.setattr("zonetrack.cli.load_state", lambda path: (tracker, manifest))

        result = runner.invoke(cli, ["check", str(saved_state)])
        assert result.exit_code == 1
        assert "Matrix Inconsistent" in result.output
        assert "orphaned: Gone / North / Jump / Double" in result.output
        assert "missing:  Overworld / North / Jump / Double" in result.output


class TestLoad:
    def test_dry_run(self, runner, saved_state):
        result = runner.invoke(cli, ["load", str(saved_state), "--dry-run"])
        assert result.exit_code == 0
        assert "State OK" in result.output

    def test_summary(self, runner, saved_state):
        result = runner.invoke(cli, ["load", str(saved_state)])
        assert result.exit_code == 0
        assert "targets:        1 (0 complete)" in result.output

    def test_missing(self, runner, tmp_path):
        result = runner.invoke(cli, ["load", str(tmp_path / "none.json")])
        assert result.exit_code == 1
        assert "File not found" in result.output


class TestConfigValidate:
    def test_ok(self, runner, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("default_target: 3\n", encoding="utf-8")
        result = runner.invoke(cli, ["config", "validate", str(path)])
        assert result.exit_code == 0
        assert "Config OK" in result.output
        assert "default_target: 3" in result.output

    def test_invalid(self, runner, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("default_target: nope\n", encoding="utf-8")
        result = runner.invoke(cli, ["config", "validate", str(path)])
        assert result.exit_code == 1
        assert "Config Invalid" in result.output
