"""Server configuration."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "https://api.rollbar.com/api/1"


class RollbarSettings(BaseSettings):
    """Settings for the Rollbar MCP server.

    These settings are loaded from environment variables with the
    ROLLBAR_ prefix, or from a .env file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="ROLLBAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Access tokens
    project_token: str = Field(
        default="",
        description="Project access token (items, occurrences, environments, deploys)",
    )
    account_token: str = Field(
        default="",
        description="Account access token (projects, users)",
    )

    # Default project for project-scoped tools
    project_id: int | None = Field(default=None, description="Default project ID")
    project_name: str = Field(
        default="",
        description="Default project name, looked up in the account's project list",
    )

    # HTTP
    api_base_url: str = Field(default=DEFAULT_API_BASE_URL, description="Rollbar API base URL")
    request_timeout: float = Field(default=30.0, description="HTTP timeout in seconds")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("project_id", mode="before")
    @classmethod
    def _blank_project_id(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def has_project_token(self) -> bool:
        """Check if the project access token is configured."""
        return bool(self.project_token)

    @property
    def has_account_token(self) -> bool:
        """Check if the account access token is configured."""
        return bool(self.account_token)

    @property
    def has_any_token(self) -> bool:
        return self.has_project_token or self.has_account_token


def get_settings() -> RollbarSettings:
    """Get the server settings.

    Settings are loaded from environment variables with the ROLLBAR_ prefix.
    """
    return RollbarSettings()
