"""Command bot configuration settings."""

from typing import Any, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CommandsSettings(BaseSettings):
    """Command dispatch configuration settings.

    Environment Variables:
        COMMAND_PREFIX: Text a message must start with to be treated as a command
        COMMAND_ADMINS: Comma separated list of platform user ids allowed past
            the admin guard
        COMMAND_CASE_SENSITIVE: Match command and subcommand names case-sensitively

    Example:
        ```python
        from core.config import settings

        if ctx.user_id in settings.commands.admin_ids:
            ...
        ```
    """

    PREFIX: str = Field(default="!", alias="COMMAND_PREFIX")
    ADMINS: str = Field(default="", alias="COMMAND_ADMINS")
    CASE_SENSITIVE: bool = Field(default=False, alias="COMMAND_CASE_SENSITIVE")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("PREFIX", mode="before")
    @classmethod
    def _validate_prefix(cls, v: Optional[Any]) -> Any:
        """Reject a blank prefix, every message would otherwise be a command."""
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("COMMAND_PREFIX must not be empty")
        return v.strip() if isinstance(v, str) else v

    @property
    def admin_ids(self) -> List[str]:
        """Configured admin user ids, blanks removed."""
        return [part.strip() for part in self.ADMINS.split(",") if part.strip()]


class Settings(BaseSettings):
    """Command bot configuration settings."""

    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    commands: CommandsSettings

    @property
    def is_production(self) -> bool:
        """Check if the application is running in production."""
        return self.ENVIRONMENT.strip().lower() == "production"

    def __init__(self, **kwargs):
        settings_map = {
            "commands": CommandsSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the settings instance
settings = Settings()
