"""
Unit tests for CLI commands.

Tests cover:
- generate / show
- stats (including change against the previous run)
- export-samples / export-tree
- settings and invalid input handling
"""

from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from branching.cli.app import app

runner = CliRunner()

DETERMINISTIC = ["--n", "0", "--m", "10"]


@pytest.fixture(autouse=True)
def _work_in_tmp(in_tmp_dir):
    return in_tmp_dir


class TestGenerateCommand:
    def test_generate_saves_current_tree(self, in_tmp_dir):
        result = runner.invoke(app, ["generate", *DETERMINISTIC])

        assert result.exit_code == 0
        assert "Tree generated" in result.stdout
        assert "Rolls: 0000" in result.stdout
        saved = in_tmp_dir / "outputs" / "trees" / "current.yaml"
        assert saved.exists()
        assert yaml.safe_load(saved.read_text())["leaves"] == 4

    def test_generate_prints_generation_rows(self):
        result = runner.invoke(app, ["generate", *DETERMINISTIC])

        assert "Gen 0: 1" in result.stdout
        assert "Gen 1: 11" in result.stdout
        assert "Gen 2: 0000" in result.stdout

    def test_generate_with_show_renders_tree(self):
        result = runner.invoke(app, ["generate", *DETERMINISTIC, "--show"])

        assert result.exit_code == 0
        assert "Root" in result.stdout
        assert "Branch" in result.stdout
        assert result.stdout.count("Leaf") == 4

    def test_generate_named_tree(self, in_tmp_dir):
        result = runner.invoke(app, ["generate", *DETERMINISTIC, "--name", "small"])

        assert result.exit_code == 0
        assert (in_tmp_dir / "outputs" / "trees" / "small.yaml").exists()

    def test_generate_zero_m_rejected(self):
        result = runner.invoke(app, ["generate", "--m", "0"])

        assert result.exit_code == 2
        assert "Invalid m" in result.stdout

    def test_generate_depth_ceiling_exceeded(self):
        result = runner.invoke(app, ["generate", "--n", "5", "--m", "5", "--max-depth", "4"])

        assert result.exit_code == 1
        assert "depth ceiling" in result.stdout

    def test_high_probability_advisory(self):
        result = runner.invoke(app, ["generate", "--n", "5", "--m", "5", "--max-depth", "3"])

        assert "high P" in result.stdout


class TestShowCommand:
    def test_show_after_generate(self):
        runner.invoke(app, ["generate", *DETERMINISTIC])

        result = runner.invoke(app, ["show"])

        assert result.exit_code == 0
        assert "n=0 m=10" in result.stdout
        assert "Root" in result.stdout
        assert "Rolls: 0000" in result.stdout

    def test_show_without_tree_rendering(self):
        runner.invoke(app, ["generate", *DETERMINISTIC])

        result = runner.invoke(app, ["show", "--no-tree"])

        assert result.exit_code == 0
        assert "Root" not in result.stdout

    def test_show_missing_tree(self):
        result = runner.invoke(app, ["show", "nothing"])

        assert result.exit_code == 1
        assert "Tree file not found" in result.stdout

    def test_show_corrupt_tree(self, in_tmp_dir):
        path = in_tmp_dir / "broken.yaml"
        path.write_text("n: 1\n")

        result = runner.invoke(app, ["show", str(path)])

        assert result.exit_code == 1
        assert "Failed to load data" in result.stdout


class TestStatsCommand:
    def test_stats_deterministic(self, in_tmp_dir):
        result = runner.invoke(app, ["stats", *DETERMINISTIC, "--sample-size", "5"])

        assert result.exit_code == 0
        assert "Median" in result.stdout
        assert "σ" in result.stdout
        saved = yaml.safe_load((in_tmp_dir / "outputs" / "stats" / "last.yaml").read_text())
        assert saved["median"] == 4
        assert saved["stddev"] == 0.0

    def test_stats_reports_change_against_previous_run(self):
        runner.invoke(app, ["stats", *DETERMINISTIC, "--sample-size", "5"])

        result = runner.invoke(app, ["stats", *DETERMINISTIC, "--sample-size", "5"])

        assert result.exit_code == 0
        assert "=0" in result.stdout
        assert "↑" not in result.stdout

    def test_stats_zero_sample_size_rejected(self):
        result = runner.invoke(app, ["stats", "--sample-size", "0"])

        assert result.exit_code == 2
        assert "Invalid sample_size" in result.stdout


class TestExportCommands:
    def test_export_samples_default_name(self, in_tmp_dir):
        result = runner.invoke(app, ["export-samples", *DETERMINISTIC, "--sample-size", "2"])

        assert result.exit_code == 0
        path = in_tmp_dir / "outputs" / "exports" / "0-10-x2.csv"
        assert path.read_text() == (
            "0,leaves,branches,nodes,generations,rolls\n" "1,4,3,7,2,0000\n" "2,4,3,7,2,0000\n"
        )

    def test_export_samples_custom_name(self, in_tmp_dir):
        result = runner.invoke(app, ["export-samples", *DETERMINISTIC, "-s", "1", "--output", "mine"])

        assert result.exit_code == 0
        assert (in_tmp_dir / "outputs" / "exports" / "mine.csv").exists()

    def test_export_tree(self, in_tmp_dir):
        runner.invoke(app, ["generate", *DETERMINISTIC])

        result = runner.invoke(app, ["export-tree"])

        assert result.exit_code == 0
        path = in_tmp_dir / "outputs" / "exports" / "4-3-7-2.csv"
        assert path.read_text() == "4,3,7,2,0000\n"

    def test_export_tree_without_generated_tree(self):
        result = runner.invoke(app, ["export-tree"])

        assert result.exit_code == 1


class TestSettingsAndConfig:
    def test_settings_shows_defaults(self):
        result = runner.invoke(app, ["settings"])

        assert result.exit_code == 0
        assert "0.5 (50/100)" in result.stdout
        assert "Fast" in result.stdout

    def test_config_file_is_used(self, in_tmp_dir):
        Path("branching.yaml").write_text("n: 0\nm: 10\nsample_size: 3\n")

        result = runner.invoke(app, ["export-samples"])

        assert result.exit_code == 0
        assert (in_tmp_dir / "outputs" / "exports" / "0-10-x3.csv").exists()

    def test_explicit_config_missing(self):
        result = runner.invoke(app, ["--config", "absent.yaml", "settings"])

        assert result.exit_code == 1
        assert "Config file not found" in result.stdout

    def test_invalid_config_file(self):
        Path("branching.yaml").write_text("m: 0\n")

        result = runner.invoke(app, ["settings"])

        assert result.exit_code == 1
        assert "Invalid settings" in result.stdout

    def test_no_colour_flag(self):
        result = runner.invoke(app, ["--no-colour", "settings"])

        assert result.exit_code == 0
        assert "disabled" in result.stdout

    def test_unknown_log_level(self):
        result = runner.invoke(app, ["--log-level", "chatty", "settings"])

        assert result.exit_code == 2
