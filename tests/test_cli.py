"""Tests for the command-line interface."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from typer.testing import CliRunner

from vaultcheck.cli import app

runner = CliRunner()


class TestAnalyzeCommand:
    """Tests for vaultcheck analyze."""

    def test_compliant_export(
        self, compliant_export: dict[str, Any], export_file: Callable[..., Path]
    ) -> None:
        """Test a clean export exits 0 and lists the checks."""
        result = runner.invoke(app, ["analyze", str(export_file(compliant_export))])

        assert result.exit_code == 0, result.output
        assert "vbr-version" in result.output
        assert "Passed: 11" in result.output

    def test_failing_export_exits_1(
        self, make_export: Callable[..., dict[str, Any]], export_file: Callable[..., Path]
    ) -> None:
        """Test a failing rule sets the exit code."""
        path = export_file(make_export(backupServer=[{"Version": "11.0", "Name": "old"}]))

        result = runner.invoke(app, ["analyze", str(path)])

        assert result.exit_code == 1
        assert "Failed: 1" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing export is reported."""
        result = runner.invoke(app, ["analyze", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_not_an_export(self, export_file: Callable[..., Path]) -> None:
        """Test non-export JSON is reported."""
        result = runner.invoke(app, ["analyze", str(export_file("[1, 2]"))])

        assert result.exit_code == 1
        assert "Sections" in result.output

    def test_show_data_errors(
        self, make_export: Callable[..., dict[str, Any]], export_file: Callable[..., Path]
    ) -> None:
        """Test dropped rows can be listed."""
        root = make_export(
            backupServer=[{"Version": "12.3", "Name": "vbr"}],
            jobInfo=[{"JobName": "Job A", "JobType": "", "RepoName": "R", "Encrypted": "True"}],
        )
        path = export_file(root)

        result = runner.invoke(app, ["analyze", str(path), "--show-data-errors"])

        assert result.exit_code == 0, result.output
        assert "Data Errors" in result.output
        assert "JobType" in result.output

    def test_data_error_with_bracket_text(
        self, compliant_export: dict[str, Any], export_file: Callable[..., Path]
    ) -> None:
        """Test cell text that looks like markup is listed verbatim."""
        job_info = compliant_export["Sections"]["jobInfo"]
        job_info["Rows"][0][job_info["Headers"].index("RetainDays")] = "[/bold]"

        result = runner.invoke(
            app, ["analyze", str(export_file(compliant_export)), "--show-data-errors"]
        )

        assert result.exit_code == 0, result.output
        assert "[/bold]" in result.output

    def test_show_jobs(
        self, compliant_export: dict[str, Any], export_file: Callable[..., Path]
    ) -> None:
        """Test the job listing is printed on request."""
        result = runner.invoke(
            app, ["analyze", str(export_file(compliant_export)), "--show-jobs"]
        )

        assert result.exit_code == 0, result.output
        assert "Jobs (1)" in result.output

    def test_jobs_csv(
        self,
        compliant_export: dict[str, Any],
        export_file: Callable[..., Path],
        tmp_path: Path,
    ) -> None:
        """Test the job table can be written to CSV."""
        csv_path = tmp_path / "jobs.csv"

        result = runner.invoke(
            app,
            ["analyze", str(export_file(compliant_export)), "--jobs-csv", str(csv_path)],
        )

        assert result.exit_code == 0, result.output
        header = csv_path.read_text(encoding="utf-8").splitlines()[0]
        assert header.startswith("job_name,job_type,repo_name")

    def test_jobs_csv_with_negative_retention(
        self,
        compliant_export: dict[str, Any],
        export_file: Callable[..., Path],
        tmp_path: Path,
    ) -> None:
        """Test odd but parsable job values still produce a CSV."""
        job_info = compliant_export["Sections"]["jobInfo"]
        job_info["Rows"][0][job_info["Headers"].index("RetainDays")] = "-1"
        csv_path = tmp_path / "jobs.csv"

        result = runner.invoke(
            app,
            ["analyze", str(export_file(compliant_export)), "--jobs-csv", str(csv_path)],
        )

        assert result.exit_code == 0, result.output
        assert "Daily VMs" in csv_path.read_text(encoding="utf-8")

    def test_config_override(
        self,
        compliant_export: dict[str, Any],
        export_file: Callable[..., Path],
        tmp_path: Path,
    ) -> None:
        """Test thresholds from a config file are applied."""
        config_path = tmp_path / "vaultcheck.yaml"
        config_path.write_text("minimum_version: '13.0'\n", encoding="utf-8")

        result = runner.invoke(
            app,
            ["analyze", str(export_file(compliant_export)), "--config", str(config_path)],
        )

        assert result.exit_code == 1

    def test_invalid_config(
        self,
        compliant_export: dict[str, Any],
        export_file: Callable[..., Path],
        tmp_path: Path,
    ) -> None:
        """Test a bad config file is reported."""
        config_path = tmp_path / "vaultcheck.yaml"
        config_path.write_text("retention_floor_days: lots\n", encoding="utf-8")

        result = runner.invoke(
            app,
            ["analyze", str(export_file(compliant_export)), "--config", str(config_path)],
        )

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestSizingCommand:
    """Tests for vaultcheck sizing."""

    def test_summary(
        self, compliant_export: dict[str, Any], export_file: Callable[..., Path]
    ) -> None:
        """Test the calculator summary is printed."""
        result = runner.invoke(app, ["sizing", str(export_file(compliant_export))])

        assert result.exit_code == 0, result.output
        assert "Calculator Summary" in result.output
        assert "1.00 TB" in result.output

    def test_request_payload(
        self, compliant_export: dict[str, Any], export_file: Callable[..., Path]
    ) -> None:
        """Test the request payload is printed as JSON."""
        result = runner.invoke(
            app, ["sizing", str(export_file(compliant_export)), "--request"]
        )

        assert result.exit_code == 0, result.output
        start = result.output.index("{")
        payload = json.loads(result.output[start:])
        assert payload["instanceCount"] == 1
        assert payload["sourceTB"] == 1.0


def test_version() -> None:
    """Test the version command."""
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert "vaultcheck version" in result.output
