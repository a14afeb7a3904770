"""Configuration models."""

from typing import Optional
from pydantic import BaseModel, Field, field_validator


class RunnerConfig(BaseModel):
    """Persisted runner configuration.

    Known settings are typed; any other key is kept as-is so the document
    can carry arbitrary user state.
    """
    templates_dir: Optional[str] = Field(
        default=None, description="Directory holding Dockerfile templates"
    )
    docker_host: Optional[str] = Field(
        default=None, description="Docker engine URL, environment if unset"
    )
    shell: str = Field(default="mongo", description="Mongo shell run inside the primary")
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @field_validator("shell")
    @classmethod
    def validate_shell(cls, v):
        """Shell must be a non-empty command name."""
        if not v.strip():
            raise ValueError("shell must not be empty")
        return v.strip()

    class Config:
        """Pydantic config."""
        extra = "allow"
