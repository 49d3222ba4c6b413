"""Shared base class for logfacade settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class LogFacadeSettings(BaseSettings):
    """Base class for logfacade settings.

    Values come from keyword arguments (by field name or alias), the
    environment and a ``.env`` file, in that order of precedence.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )
