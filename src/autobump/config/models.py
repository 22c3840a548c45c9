"""Configuration models for autobump.

Values come from the ``[tool.autobump]`` table of pyproject.toml.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from autobump.core.dedup import DEFAULT_SIMILARITY_THRESHOLD
from autobump.core.version import Version
from autobump.exceptions import InvalidVersionError


class ChangelogConfig(BaseModel):
    """How the changelog is processed."""

    model_config = ConfigDict(extra="forbid")

    similarity_threshold: float = Field(
        default=DEFAULT_SIMILARITY_THRESHOLD,
        gt=0.0,
        le=1.0,
        description="Minimum word overlap for two entries to count as duplicates",
    )
    initial_version: str = Field(
        default="1.0.0",
        description="Version of the first release of a changelog without history",
    )

    @field_validator("initial_version")
    @classmethod
    def _validate_initial_version(cls, value: str) -> str:
        try:
            Version.parse(value)
        except InvalidVersionError as e:
            raise ValueError(str(e)) from e
        return value

    @property
    def initial(self) -> Version:
        return Version.parse(self.initial_version)


class VersionConfig(BaseModel):
    """Where the computed version is written."""

    model_config = ConfigDict(extra="forbid")

    update_pyproject: bool = Field(
        default=True,
        description="Update [project].version in pyproject.toml",
    )
    version_files: list[str] = Field(
        default_factory=list,
        description="Extra files holding __version__, {project_name} is expanded",
    )


class AutobumpConfig(BaseModel):
    """Root configuration."""

    model_config = ConfigDict(extra="forbid")

    changelog_path: Path = Path("CHANGELOG.md")
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)
    version: VersionConfig = Field(default_factory=VersionConfig)

    def version_file_paths(self, project_name: str) -> list[str]:
        """Expand ``{project_name}`` in configured version files."""
        module_name = project_name.replace("-", "_")
        return [path.replace("{project_name}", module_name) for path in self.version.version_files]
