"""Logfacade configuration - public API.

Typed configuration for the root logger using Pydantic BaseSettings.

Exports:
    LoggerSettings: Root logger settings (level, transports, context, redaction)
    TransportSpec: One transport entry of LoggerSettings.transports

Example:
    ```python
    from logfacade.configuration import LoggerSettings

    settings = LoggerSettings(level="info", hide_keys=["password"])

    # Or from the environment:
    #   LOG_LEVEL=info
    #   LOG_HIDE_KEYS='["password"]'
    #   LOG_TRANSPORTS='[{"type": "File", "params": {"filename": "app.log"}}]'
    settings = LoggerSettings()
    ```
"""

from logfacade.configuration.settings import LoggerSettings, TransportSpec

__all__ = ["LoggerSettings", "TransportSpec"]
