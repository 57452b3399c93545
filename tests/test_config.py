"""Tests for the configuration module."""

import json

import pytest

from exacodis.config import (
    ExacodisConfig,
    HelpersConfig,
    ProjectConfig,
    ReportConfig,
    create_example_config,
    get_default_config,
)


class TestProjectConfig:
    """Tests for ProjectConfig."""

    def test_default_values(self):
        """Test default values are set correctly."""
        config = ProjectConfig(title="test")
        assert config.title == "test"
        assert config.description == ""

    def test_empty_title(self):
        """Test that the title cannot be blank."""
        with pytest.raises(ValueError):
            ProjectConfig(title="   ")


class TestHelpersConfig:
    """Tests for HelpersConfig."""

    def test_default_values(self):
        """Test default values are set correctly."""
        config = HelpersConfig()
        assert config.standard is True
        assert config.files == []


class TestReportConfig:
    """Tests for ReportConfig."""

    def test_default_values(self):
        """Test default values are set correctly."""
        config = ReportConfig()
        assert config.output_dir == "./reports"
        assert config.filename == "exacodis_report.html"
        assert config.max_str_length == 500

    def test_max_str_length_validation(self):
        """Test that the truncation length must be positive."""
        with pytest.raises(ValueError):
            ReportConfig(max_str_length=0)


class TestExacodisConfig:
    """Tests for the main ExacodisConfig."""

    def test_default_config(self):
        """Test getting default configuration."""
        config = get_default_config()
        assert config.project.title == "my-project"
        assert config.helpers.standard is True
        assert config.resources == {}

    def test_project_is_required(self):
        """Test that a configuration needs a project."""
        with pytest.raises(ValueError):
            ExacodisConfig.model_validate({})

    def test_save_and_load(self, tmp_path):
        """Test saving and loading configuration."""
        config_path = tmp_path / "exacodis.json"

        config = get_default_config()
        config.project.title = "test-project"
        config.resources = {"year": 2021, "months": ["august", "september"]}
        config.to_file(config_path)

        loaded = ExacodisConfig.from_file(config_path)
        assert loaded.project.title == "test-project"
        assert loaded.resources == {"year": 2021, "months": ["august", "september"]}

    def test_load_nonexistent_file(self):
        """Test loading a non-existent file raises error."""
        with pytest.raises(FileNotFoundError):
            ExacodisConfig.from_file("/nonexistent/path/exacodis.json")

    def test_find_and_load(self, tmp_path):
        """Test finding configuration in a parent directory."""
        (tmp_path / "exacodis.json").write_text(json.dumps({"project": {"title": "found"}}))
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        config = ExacodisConfig.find_and_load(nested)
        assert config.project.title == "found"

    def test_find_and_load_hidden_file(self, tmp_path):
        """Test finding a hidden configuration file."""
        (tmp_path / ".exacodis.json").write_text(json.dumps({"project": {"title": "hidden"}}))

        config = ExacodisConfig.find_and_load(tmp_path)
        assert config.project.title == "hidden"

    def test_get_absolute_paths(self, tmp_path):
        """Test resolving configured paths against a base directory."""
        config = ExacodisConfig(
            project=ProjectConfig(title="paths"),
            helpers=HelpersConfig(files=["helpers/custom.py"]),
        )

        paths = config.get_absolute_paths(tmp_path)

        assert paths["report_file"] == (tmp_path / "reports" / "exacodis_report.html").resolve()
        assert paths["helper_files"] == [(tmp_path / "helpers" / "custom.py").resolve()]

    def test_create_example_config(self, tmp_path):
        """Test creating an example configuration file."""
        config_path = tmp_path / "exacodis.json"

        result = create_example_config(config_path)

        assert result == config_path
        assert config_path.exists()

        with open(config_path) as f:
            data = json.load(f)

        assert data["project"]["title"] == "my-project"
        assert data["resources"] == {"year": 2021}
