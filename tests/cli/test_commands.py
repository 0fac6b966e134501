"""End-to-end tests for the sf-metadata-counter CLI."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from sf_metadata_counter import __version__
from sf_metadata_counter.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    monkeypatch.chdir(home)
    monkeypatch.setenv("COLUMNS", "200")
    for key in (
        "SFMC_AUTO_REFRESH",
        "SFMC_SHOW_SUMMARY_INDICATOR",
        "SFMC_WORKERS",
        "SFMC_VERBOSITY",
    ):
        monkeypatch.delenv(key, raising=False)


def invoke(*args, **kwargs):
    return runner.invoke(app, list(args), **kwargs)


class TestCount:
    def test_default_command_counts(self, sfdx_project):
        result = invoke("-C", str(sfdx_project))
        assert result.exit_code == 0, result.output
        assert "SF Components: 13" in result.output

    def test_count_subcommand(self, legacy_project):
        result = invoke("-C", str(legacy_project), "count")
        assert result.exit_code == 0, result.output
        assert "SF Components: 2" in result.output

    def test_first_matching_candidate_wins(self, tmp_path, sfdx_project, legacy_project):
        empty = tmp_path / "empty"
        empty.mkdir()
        result = invoke("-C", str(empty), "-C", str(legacy_project), "-C", str(sfdx_project))
        assert result.exit_code == 0, result.output
        assert "SF Components: 2" in result.output

    def test_with_workers(self, sfdx_project):
        result = invoke("-C", str(sfdx_project), "-w", "4", "count")
        assert result.exit_code == 0, result.output
        assert "SF Components: 13" in result.output

    def test_bare_total_without_indicator(self, sfdx_project):
        result = invoke("-C", str(sfdx_project), env={"SFMC_SHOW_SUMMARY_INDICATOR": "false"})
        assert result.exit_code == 0, result.output
        assert result.stdout.strip() == "13"

    def test_not_a_project(self, tmp_path):
        empty = tmp_path / "empty"
        empty.mkdir()
        result = invoke("-C", str(empty))
        assert result.exit_code == 2
        assert "Not a Salesforce project" in result.output

    def test_project_without_source(self, tmp_path):
        project = tmp_path / "bare"
        project.mkdir()
        (project / ".forceignore").write_text("**/jsconfig.json\n", encoding="utf-8")
        result = invoke("-C", str(project))
        assert result.exit_code == 2
        assert "No source directory" in result.output

    def test_version(self):
        result = invoke("--version")
        assert result.exit_code == 0
        assert __version__ in result.output


class TestConfigOption:
    def test_log_file_and_verbosity_from_env(self, tmp_path, sfdx_project):
        log_file = tmp_path / "run.log"
        result = invoke(
            "-C",
            str(sfdx_project),
            "--log-file",
            str(log_file),
            "count",
            env={"SFMC_VERBOSITY": "verbose"},
        )
        assert result.exit_code == 0, result.output
        assert "Counted 13 component(s)" in log_file.read_text(encoding="utf-8")

    def test_invalid_config_file(self, tmp_path, sfdx_project):
        config = tmp_path / "bad.toml"
        config.write_text("debounce_seconds = -1\n", encoding="utf-8")
        result = invoke("-C", str(sfdx_project), "-c", str(config))
        assert result.exit_code == 1
        assert "Configuration error" in result.output

    def test_type_overrides_from_config(self, tmp_path, sfdx_project):
        config = tmp_path / "types.toml"
        config.write_text('[types]\npermissionset = "PermSet"\n', encoding="utf-8")
        result = invoke("-C", str(sfdx_project), "-c", str(config), "report", "-f", "json")
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["report"]["PermSet"] == 1
        assert "PermissionSet" not in data["report"]


class TestReport:
    def test_json(self, sfdx_project, sample_expected):
        result = invoke("-C", str(sfdx_project), "report", "--format", "json")
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["report"] == sample_expected
        assert data["total"] == 13
        assert data["layout"] == "modern"

    def test_csv(self, legacy_project):
        result = invoke("-C", str(legacy_project), "report", "-f", "csv")
        assert result.exit_code == 0, result.output
        lines = result.stdout.strip().splitlines()
        assert lines == ["type,count", "ApexClass,1", "CustomTab,1", "TOTAL,2"]

    def test_quiet(self, sfdx_project):
        result = invoke("-C", str(sfdx_project), "report", "-f", "quiet")
        assert result.exit_code == 0, result.output
        assert result.stdout.strip() == "13"

    def test_rich(self, sfdx_project):
        result = invoke("-C", str(sfdx_project), "report")
        assert result.exit_code == 0, result.output
        assert "Total metadata members: 13" in result.output
        assert "LightningComponentBundle" in result.output

    def test_unknown_format(self, sfdx_project):
        result = invoke("-C", str(sfdx_project), "report", "-f", "xml")
        assert result.exit_code == 1
        assert "Unknown formatter" in result.output

    def test_output_file(self, tmp_path, sfdx_project, sample_expected):
        target = tmp_path / "out" / "counts.json"
        result = invoke("-C", str(sfdx_project), "report", "-f", "json", "-o", str(target))
        assert result.exit_code == 0, result.output
        assert "Report written to" in result.output
        assert json.loads(target.read_text(encoding="utf-8"))["report"] == sample_expected

    def test_rich_output_file_rejected(self, tmp_path, sfdx_project):
        result = invoke("-C", str(sfdx_project), "report", "-o", str(tmp_path / "x.txt"))
        assert result.exit_code == 1
        assert not (tmp_path / "x.txt").exists()


class TestLocate:
    def test_modern(self, sfdx_project):
        result = invoke("-C", str(sfdx_project), "locate")
        assert result.exit_code == 0, result.output
        assert "Layout:" in result.output
        assert "modern" in result.output

    def test_legacy(self, legacy_project):
        result = invoke("-C", str(legacy_project), "locate")
        assert result.exit_code == 0, result.output
        assert "legacy" in result.output


class TestWatch:
    def test_auto_refresh_disabled_counts_once(self, sfdx_project):
        result = invoke("-C", str(sfdx_project), "watch", env={"SFMC_AUTO_REFRESH": "false"})
        assert result.exit_code == 0, result.output
        assert "SF Components: 13" in result.output
        assert "Auto refresh is disabled" in result.output

    def test_summary_indicator_hidden(self, sfdx_project):
        result = invoke(
            "-C",
            str(sfdx_project),
            "watch",
            env={"SFMC_AUTO_REFRESH": "0", "SFMC_SHOW_SUMMARY_INDICATOR": "false"},
        )
        assert result.exit_code == 0, result.output
        assert "SF Components:" not in result.output
        assert "Total metadata members: 13" in result.output
