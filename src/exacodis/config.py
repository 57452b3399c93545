"""Configuration management for Exacodis."""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator


class ProjectConfig(BaseModel):
    """Project identification shown in the report."""

    title: str = Field(description="Project title for the report header")
    description: str = Field(default="", description="Brief description of the tested project")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Project title cannot be empty")
        return v


class HelpersConfig(BaseModel):
    """Assertion helper catalogs to load."""

    standard: bool = Field(default=True, description="Load the bundled standard helpers")
    files: list[str] = Field(
        default_factory=list, description="Additional helper catalog files (Python sources)"
    )


class ReportConfig(BaseModel):
    """Report generation configuration."""

    output_dir: str = Field(default="./reports", description="Directory for report output")
    filename: str = Field(default="exacodis_report.html", description="Report filename")
    max_str_length: int = Field(default=500, description="Longest rendered value before truncation")

    @field_validator("max_str_length")
    @classmethod
    def validate_max_str_length(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_str_length must be at least 1")
        return v


class ExacodisConfig(BaseModel):
    """Main configuration for Exacodis."""

    project: ProjectConfig
    helpers: HelpersConfig = Field(default_factory=HelpersConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    resources: dict[str, Any] = Field(
        default_factory=dict, description="Resources staged before the test script runs"
    )

    @classmethod
    def from_file(cls, path: Path | str) -> "ExacodisConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "r") as f:
            data = json.load(f)

        return cls.model_validate(data)

    @classmethod
    def find_and_load(cls, start_dir: Path | str | None = None) -> "ExacodisConfig":
        """Find and load configuration file, searching up the directory tree."""
        start_dir = Path.cwd() if start_dir is None else Path(start_dir)

        config_names = ["exacodis.json", ".exacodis.json"]

        current = start_dir.resolve()
        for directory in [current, *current.parents]:
            for name in config_names:
                config_path = directory / name
                if config_path.exists():
                    return cls.from_file(config_path)

        raise FileNotFoundError(
            "No configuration file found. Create exacodis.json or run 'exacodis init'"
        )

    def to_file(self, path: Path | str) -> None:
        """Save configuration to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)

    def get_absolute_paths(self, base_dir: Path | str | None = None) -> dict[str, Any]:
        """Get absolute paths for the report and the helper catalogs."""
        base_dir = Path.cwd() if base_dir is None else Path(base_dir)

        return {
            "report_output_dir": (base_dir / self.report.output_dir).resolve(),
            "report_file": (base_dir / self.report.output_dir / self.report.filename).resolve(),
            "helper_files": [(base_dir / f).resolve() for f in self.helpers.files],
        }


def get_default_config() -> ExacodisConfig:
    """Return a default configuration."""
    return ExacodisConfig(project=ProjectConfig(title="my-project"))


def create_example_config(output_path: Path | str) -> Path:
    """Create an example configuration file."""
    output_path = Path(output_path)
    config = get_default_config()
    config.project.description = "Brief description of the tested project"
    config.resources = {"year": 2021}
    config.to_file(output_path)
    return output_path
