"""Root logger initialization.

This module builds the process-wide root LoggerFacade from LoggerSettings:
it attaches one handler per configured transport to a dedicated standard
library logger, wraps it with structlog, and seeds the redaction policy
and default context.

Usage:
    from logfacade import init_logger, get_logger

    # At application startup
    init_logger(level="info", hide_keys=["password"])

    # In a module
    logger = get_logger()
    logger.info("module_initialized")

Dependencies:
    - logfacade.configuration.LoggerSettings
"""

import inspect
import logging
import sys
from typing import Any, Callable, List, Optional

import structlog

from logfacade.configuration import LoggerSettings
from logfacade.context import ContextStore
from logfacade.diagnostics import report_transport_error
from logfacade.exceptions import LoggerNotInitializedError
from logfacade.logger import LoggerFacade
from logfacade.logging.formatters import (
    add_app_info,
    add_environment_info,
    truncate_large_values,
)
from logfacade.logging.transports import STDLIB_LEVELS, StructlogSink, create_transport
from logfacade.redaction import RedactionPolicy

_root_logger: Optional[LoggerFacade] = None


def build_processors(settings: LoggerSettings) -> List[Callable[..., Any]]:
    """Build the structlog processor chain for ``settings``."""
    processors: List[Callable[..., Any]] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if settings.app_name:
        processors.append(add_app_info(settings.app_name, settings.app_version))
    if settings.environment:
        processors.append(add_environment_info(settings.environment))
    if settings.max_value_length:
        processors.append(truncate_large_values(settings.max_value_length))
    processors.append(structlog.stdlib.ProcessorFormatter.wrap_for_formatter)
    return processors


def configure_transports(settings: LoggerSettings) -> logging.Logger:
    """Attach the configured transports to the transport logger.

    Handlers from a previous call are removed and closed, so calling this
    again replaces the transports instead of duplicating them.

    Raises:
        TransportConfigurationError: If a transport spec is invalid.
    """
    handlers = [
        create_transport(spec, settings.renderer) for spec in settings.transports
    ]

    std_logger = logging.getLogger(settings.logger_name)
    for handler in list(std_logger.handlers):
        std_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        std_logger.addHandler(handler)
    std_logger.setLevel(STDLIB_LEVELS[settings.level])
    std_logger.propagate = False
    return std_logger


def install_exception_hook(logger: LoggerFacade) -> Callable[..., None]:
    """Report uncaught exceptions through ``logger``.

    The previous ``sys.excepthook`` still runs afterwards. KeyboardInterrupt
    is passed straight to it. Installing again replaces the earlier hook
    instead of chaining a second one.

    Returns:
        The installed hook.
    """
    previous = sys.excepthook
    previous = getattr(previous, "_logfacade_previous", previous)

    def hook(exc_type, exc_value, exc_traceback) -> None:
        if not issubclass(exc_type, KeyboardInterrupt):
            try:
                logger.send_error(exc_value)
            except Exception as e:
                report_transport_error(e, sink=logger.sink)
        previous(exc_type, exc_value, exc_traceback)

    hook._logfacade_previous = previous  # type: ignore[attr-defined]
    sys.excepthook = hook
    return hook


def init_logger(
    settings: Optional[LoggerSettings] = None, **overrides: Any
) -> LoggerFacade:
    """Create the root logger and make it available to get_logger().

    Args:
        settings: Complete settings. When omitted, settings are loaded from
            the environment with ``overrides`` applied (field names or
            environment aliases).
        **overrides: Settings values, e.g. ``level="info"``.

    Returns:
        The root LoggerFacade.

    Raises:
        TransportConfigurationError: If a transport spec is invalid.
        pydantic.ValidationError: If the settings are invalid.

    Example:
        logger = init_logger(
            level="info",
            transports=[{"type": "File", "params": {"filename": "app.log"}}],
            add_to_context={"service": "billing"},
            hide_keys=["password"],
            hide_regex=["^secret"],
        )
    """
    global _root_logger

    if settings is None:
        settings = LoggerSettings(**overrides)
    elif overrides:
        settings = LoggerSettings(**{**settings.model_dump(), **overrides})

    policy = RedactionPolicy.from_config(settings.hide_keys, settings.hide_regex)
    std_logger = configure_transports(settings)
    sink = StructlogSink(
        std_logger,
        build_processors(settings),
        wrapper_class=structlog.stdlib.BoundLogger,
    )

    _root_logger = LoggerFacade(
        sink,
        policy,
        ContextStore(settings.add_to_context),
        settings.max_depth,
    )
    if settings.handle_exceptions:
        install_exception_hook(_root_logger)
    return _root_logger


def get_root_logger() -> LoggerFacade:
    """Return the root logger created by init_logger().

    Raises:
        LoggerNotInitializedError: If init_logger() has not been called.
    """
    if _root_logger is None:
        raise LoggerNotInitializedError(
            "init_logger() must be called before requesting the root logger"
        )
    return _root_logger


def get_logger(name: Optional[str] = None) -> LoggerFacade:
    """Get a child of the root logger with ``logger_name`` in its context.

    If name is omitted, the calling module's name is used.

    Args:
        name: Optional logger name (typically __name__ in calling module)

    Returns:
        A LoggerFacade derived from the root logger.

    Raises:
        LoggerNotInitializedError: If init_logger() has not been called.

    Example:
        # With explicit name
        logger = get_logger("billing.invoices")

        # With auto-detection
        logger = get_logger()
    """
    root = get_root_logger()
    if name:
        return root.get_logger_with_context({"logger_name": name})

    # Auto-detect calling module
    current_frame = inspect.currentframe()
    frame = current_frame.f_back if current_frame is not None else None
    module = inspect.getmodule(frame) if frame is not None else None
    if module:
        return root.get_logger_with_context({"logger_name": module.__name__})

    return root.get_logger_with_context({"logger_name": "unknown"})
