"""Structlog-backed transports and root logger initialization.

Public API:
    - init_logger(): Build the root logger from LoggerSettings
    - get_root_logger(): Get the root logger
    - get_logger(): Get a child logger named after the calling module
    - install_exception_hook(): Report uncaught exceptions through a logger

Transports:
    - create_transport(): Build a handler from a TransportSpec
    - StructlogSink: Sink writing prepared records through structlog

Formatters:
    - add_app_info(): Processor to add app name/version
    - add_environment_info(): Processor to add environment name
    - truncate_large_values(): Processor to limit string lengths
"""

from logfacade.logging.setup import (
    init_logger,
    get_root_logger,
    get_logger,
    install_exception_hook,
)

from logfacade.logging.transports import (
    create_transport,
    StructlogSink,
    TRANSPORT_FACTORIES,
)

from logfacade.logging.formatters import (
    add_app_info,
    add_environment_info,
    truncate_large_values,
)

__all__ = [
    # Setup
    "init_logger",
    "get_root_logger",
    "get_logger",
    "install_exception_hook",
    # Transports
    "create_transport",
    "StructlogSink",
    "TRANSPORT_FACTORIES",
    # Formatters
    "add_app_info",
    "add_environment_info",
    "truncate_large_values",
]
