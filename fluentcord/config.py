"""Discord configuration settings."""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .rest.errors import ErrorPolicy
from .rest.route import BASE_URL

__all__ = ("DiscordSettings",)


class DiscordSettings(BaseSettings):
    """Discord configuration settings, read from ``DISCORD_*``
    environment variables or a ``.env`` file.
    """

    TOKEN: str = ""
    GUILD_ID: Optional[str] = None
    API_URL: str = Field(default=BASE_URL)
    ERROR_POLICY: ErrorPolicy = ErrorPolicy.ABORT

    model_config = SettingsConfigDict(
        env_prefix="DISCORD_",
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("GUILD_ID", mode="before")
    @classmethod
    def empty_guild_is_unset(cls, value):
        if value == "":
            return None
        return value
