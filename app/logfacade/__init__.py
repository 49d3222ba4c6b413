"""Structured logging facade.

Attaches inheritable context to every log record, masks sensitive fields,
bounds the nesting depth of record data, bridges event emitters into the
log stream and traces method calls on existing objects.

Public API:
    - init_logger(): Initialize the root logger at application startup
    - get_logger(): Get a child of the root logger for the calling module
    - LoggerFacade: Logger handle (info, warn, error, debug, alert, ...)
    - LoggerSettings: Typed configuration
    - RedactionPolicy / redact(): Masking of sensitive fields
    - bound() / deep_clone(): Depth-limited serialization
    - ContextStore: Default plus instance context

Example:
    from logfacade import init_logger, get_logger

    # At application startup
    init_logger(level="info", hide_keys=["password"], add_to_context={"service": "billing"})

    # In a module
    logger = get_logger()
    logger.info("user_login", {"user": "jane", "password": "hunter2"})

    # Per request
    request_logger = logger.get_logger_with_context({"request_id": "req-123"})
    request_logger.alert_error(exc)
"""

from logfacade.configuration import LoggerSettings, TransportSpec
from logfacade.context import ContextStore
from logfacade.events import bind_events, encode_event_args, format_event_message
from logfacade.exceptions import (
    InvalidLevelError,
    LogFacadeError,
    LoggerNotInitializedError,
    ReportedError,
    SerializationError,
    TransportConfigurationError,
)
from logfacade.instrumentation import InstrumentedProxy, wrap_object
from logfacade.logger import LEVELS, LoggerFacade, Sink
from logfacade.logging import get_logger, get_root_logger, init_logger
from logfacade.redaction import RedactionPolicy, redact
from logfacade.serialization import bound, deep_clone, normalize_key

__all__ = [
    # Setup
    "init_logger",
    "get_logger",
    "get_root_logger",
    "LoggerSettings",
    "TransportSpec",
    # Facade
    "LEVELS",
    "LoggerFacade",
    "Sink",
    "ContextStore",
    # Data pipeline
    "RedactionPolicy",
    "redact",
    "bound",
    "deep_clone",
    "normalize_key",
    # Bridges
    "bind_events",
    "encode_event_args",
    "format_event_message",
    "InstrumentedProxy",
    "wrap_object",
    # Errors
    "LogFacadeError",
    "SerializationError",
    "InvalidLevelError",
    "TransportConfigurationError",
    "LoggerNotInitializedError",
    "ReportedError",
]
