# Sharelink Configuration Schema
# Pydantic models for YAML configuration validation

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from sharelink.utils.paths import DEFAULT_MARKER


class AccountConfig(BaseModel):
    """Account context for a reconciliation run."""

    id: str | None = Field(default=None, description="Account identifier used to look up subscriptions")
    home: str | None = Field(default=None, description="Account home directory")

    @field_validator("home")
    @classmethod
    def expand_home(cls, v: str | None) -> str | None:
        """Expand ~ in home path."""
        if v is None:
            return None
        return str(Path(v).expanduser())


class MetadataConfig(BaseModel):
    """Location of subscription and application metadata."""

    path: str = Field(
        default="~/.config/sharelink/metadata.yaml",
        validate_default=True,
        description="YAML file listing applications and subscriptions",
    )

    @field_validator("path")
    @classmethod
    def expand_path(cls, v: str) -> str:
        """Expand ~ in path."""
        return str(Path(v).expanduser())


class OutputConfig(BaseModel):
    """Output and logging configuration."""

    verbose: bool = Field(default=False, description="Enable verbose output")
    colored: bool = Field(default=True, description="Enable colored output")
    log_file: str | None = Field(default=None, description="Path to event log file")

    @field_validator("log_file")
    @classmethod
    def expand_optional_paths(cls, v: str | None) -> str | None:
        """Expand ~ in optional paths."""
        if v is None:
            return None
        return str(Path(v).expanduser())


class SharelinkConfig(BaseModel):
    """Root configuration model for sharelink."""

    account: AccountConfig = Field(default_factory=AccountConfig, description="Account context")
    metadata: MetadataConfig = Field(default_factory=MetadataConfig, description="Metadata source")
    marker: str = Field(
        default=DEFAULT_MARKER,
        description="Marker entry that makes a directory count as empty",
    )
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")

    @field_validator("marker")
    @classmethod
    def check_marker(cls, v: str) -> str:
        """Marker must be a plain entry name."""
        if not v or "/" in v or v in (".", ".."):
            raise ValueError("marker must be a single file or directory name")
        return v
