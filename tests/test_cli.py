"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from exacodis.cli import main

PASSING_SCRIPT = """
pilot.run(lambda: pilot.get_resource("year"), "year", run_id="001")
pilot.assert_equal(2021)
"""

FAILING_SCRIPT = """
pilot.run(lambda: pilot.get_resource("year"), "year", run_id="001")
pilot.assert_equal(2000)
"""

BROKEN_SCRIPT = """
pilot.run(lambda: None, run_id="001")
pilot.run(lambda: None, run_id="001")
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def project(tmp_path):
    """Create a project directory with a configuration file."""
    config = {
        "project": {"title": "CLI project"},
        "report": {"output_dir": "out", "filename": "report.html"},
        "resources": {"year": 2021},
    }
    (tmp_path / "exacodis.json").write_text(json.dumps(config))
    return tmp_path


def write_script(project, source: str):
    script = project / "script.py"
    script.write_text(source)
    return script


class TestInit:
    """Tests for the init command."""

    def test_creates_config(self, runner, tmp_path):
        """Test creating a configuration file."""
        output = tmp_path / "exacodis.json"

        result = runner.invoke(main, ["init", "-o", str(output)])

        assert result.exit_code == 0
        assert json.loads(output.read_text())["project"]["title"] == "my-project"

    def test_refuses_overwrite(self, runner, project):
        """Test that an existing configuration is kept without --force."""
        result = runner.invoke(main, ["init", "-o", str(project / "exacodis.json")])

        assert result.exit_code == 1
        assert "already exists" in result.output


class TestRun:
    """Tests for the run command."""

    def test_passing_script(self, runner, project):
        """Test running a passing script and writing the report."""
        script = write_script(project, PASSING_SCRIPT)

        result = runner.invoke(
            main, ["--config", str(project / "exacodis.json"), "run", str(script)]
        )

        assert result.exit_code == 0, result.output
        assert "All runs passed" in result.output
        assert "CLI project" in (project / "out" / "report.html").read_text()

    def test_failing_script(self, runner, project):
        """Test that a failed run sets the exit code."""
        script = write_script(project, FAILING_SCRIPT)

        result = runner.invoke(
            main, ["--config", str(project / "exacodis.json"), "run", str(script), "--no-report"]
        )

        assert result.exit_code == 1
        assert "Some runs failed" in result.output
        assert "(100%)" in result.output
        assert not (project / "out").exists()

    def test_json_results(self, runner, project):
        """Test writing the results as JSON."""
        script = write_script(project, FAILING_SCRIPT)
        output = project / "results" / "results.json"

        result = runner.invoke(
            main,
            [
                "--config",
                str(project / "exacodis.json"),
                "run",
                str(script),
                "--no-report",
                "--json",
                str(output),
            ],
        )

        assert result.exit_code == 1
        data = json.loads(output.read_text())
        assert data["project"] == "CLI project"
        assert data["stats"]["nb_runs"] == 1
        assert data["stats"]["failed_runs"] == 1
        assert data["runs"][0]["id"] == "001"
        assert data["runs"][0]["assert_results"] == [
            {"result": False, "expected": "Equal to: 2000", "test_name": "equal"}
        ]

    def test_harness_error(self, runner, project):
        """Test that a harness error aborts the script."""
        script = write_script(project, BROKEN_SCRIPT)

        result = runner.invoke(
            main, ["--config", str(project / "exacodis.json"), "run", str(script)]
        )

        assert result.exit_code == 1
        assert "already defined and locked" in result.output

    def test_missing_config(self, runner, tmp_path):
        """Test running without a configuration file."""
        script = write_script(tmp_path, PASSING_SCRIPT)

        result = runner.invoke(
            main, ["--config", str(tmp_path / "missing.json"), "run", str(script)]
        )

        assert result.exit_code == 1
        assert "exacodis init" in result.output


class TestHelpers:
    """Tests for the helpers command."""

    def test_lists_standard_helpers(self, runner, project):
        """Test listing the loaded helpers."""
        result = runner.invoke(main, ["--config", str(project / "exacodis.json"), "helpers"])

        assert result.exit_code == 0
        assert "assert_equal" in result.output

    def test_missing_helper_file(self, runner, project):
        """Test that a configured helper file must exist."""
        config = json.loads((project / "exacodis.json").read_text())
        config["helpers"] = {"files": ["missing_helpers.py"]}
        (project / "exacodis.json").write_text(json.dumps(config))

        result = runner.invoke(main, ["--config", str(project / "exacodis.json"), "helpers"])

        assert result.exit_code == 1
        assert "Helper file not found" in result.output
