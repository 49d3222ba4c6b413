"""Root logger configuration settings."""

import re
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from logfacade.configuration.base import LogFacadeSettings

LEVEL_NAMES = ("debug", "info", "warn", "warning", "error")

Renderer = Literal["json", "console"]


class TransportSpec(BaseModel):
    """One sink adapter to construct.

    Attributes:
        type: Adapter name, e.g. ``Console`` or ``File``.
        params: Adapter parameters, validated by the adapter.
    """

    type: str
    params: Dict[str, Any] = Field(default_factory=dict)


def _default_transports() -> List[TransportSpec]:
    return [TransportSpec(type="Console")]


class LoggerSettings(LogFacadeSettings):
    """Configuration consumed once to build the root logger.

    Environment Variables:
        LOG_LEVEL: Minimum level (debug, info, warn, warning, error)
        LOG_TRANSPORTS: JSON list of {"type": ..., "params": {...}}
        LOG_CONTEXT: JSON object with the root default context
        LOG_HIDE_KEYS: JSON list of keys masked on exact match
        LOG_HIDE_REGEX: JSON list of regular expressions searched in keys
        LOG_MAX_DEPTH: Mapping levels kept structured (default: 2)
        LOG_LOGGER_NAME: Standard library logger used by the transports
        LOG_RENDERER: Default renderer, 'json' or 'console'
        APP_NAME / APP_VERSION: Stamped on every record when APP_NAME is set
        ENVIRONMENT: Stamped on every record when set
        LOG_MAX_VALUE_LENGTH: Truncate longer string values when rendering
        LOG_HANDLE_EXCEPTIONS: Log uncaught exceptions (default: True)

    Example:
        ```python
        settings = LoggerSettings(
            level="info",
            transports=[{"type": "Console", "params": {"stream": "stderr"}}],
            add_to_context={"service": "billing"},
            hide_keys=["password"],
            hide_regex=["^secret"],
        )
        ```
    """

    level: str = Field(
        default="debug",
        alias="LOG_LEVEL",
        description="Minimum severity forwarded to the transports",
    )
    transports: List[TransportSpec] = Field(
        default_factory=_default_transports,
        alias="LOG_TRANSPORTS",
        description="Ordered sink adapters to construct",
    )
    add_to_context: Dict[str, Any] = Field(
        default_factory=dict,
        alias="LOG_CONTEXT",
        description="Default context of the root logger",
    )
    hide_keys: List[str] = Field(
        default_factory=list,
        alias="LOG_HIDE_KEYS",
        description="Keys whose values are masked on exact match",
    )
    hide_regex: List[str] = Field(
        default_factory=list,
        alias="LOG_HIDE_REGEX",
        description="Regular expressions; matching keys have their values masked",
    )
    max_depth: int = Field(
        default=2,
        ge=0,
        alias="LOG_MAX_DEPTH",
        description="Mapping levels kept structured before collapsing to JSON",
    )
    logger_name: str = Field(
        default="logfacade",
        alias="LOG_LOGGER_NAME",
        description="Standard library logger the transports are attached to",
    )
    renderer: Renderer = Field(
        default="json",
        alias="LOG_RENDERER",
        description="Renderer used by transports that do not set their own",
    )
    app_name: Optional[str] = Field(default=None, alias="APP_NAME")
    app_version: str = Field(default="unknown", alias="APP_VERSION")
    environment: Optional[str] = Field(default=None, alias="ENVIRONMENT")
    max_value_length: Optional[int] = Field(
        default=None,
        gt=0,
        alias="LOG_MAX_VALUE_LENGTH",
        description="Truncate rendered string values longer than this",
    )
    handle_exceptions: bool = Field(
        default=True,
        alias="LOG_HANDLE_EXCEPTIONS",
        description="Report uncaught exceptions through the root logger",
    )

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.lower()
        if level not in LEVEL_NAMES:
            raise ValueError(f"level must be one of {', '.join(LEVEL_NAMES)}")
        return level

    @field_validator("hide_regex")
    @classmethod
    def _check_patterns(cls, value: List[str]) -> List[str]:
        for pattern in value:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"invalid pattern {pattern!r}: {e}") from e
        return value
