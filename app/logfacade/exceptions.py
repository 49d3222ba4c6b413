"""Custom exceptions for the logging facade.

Provides the error taxonomy raised by the data preparation pipeline,
binding tables and process-wide initialization.
"""


class LogFacadeError(Exception):
    """Base exception for all logging facade errors.

    Example:
        try:
            logger.info("order_created", {"order": order})
        except LogFacadeError as e:
            print(f"log call failed: {e}", file=sys.stderr)
    """

    pass


class SerializationError(LogFacadeError, TypeError):
    """Raised when log data cannot be cloned or JSON-encoded.

    Cyclic references, non-finite floats and unsupported value kinds
    (sets, bytes, sockets, arbitrary objects) all end up here. The error
    propagates out of the log call that triggered it.

    Example:
        >>> data = {}
        >>> data["self"] = data
        >>> logger.info("cyclic", data)
        Traceback (most recent call last):
        ...
        SerializationError: Circular reference detected at 'self'
    """

    pass


class InvalidLevelError(LogFacadeError, ValueError):
    """Raised when a binding table or wrap table names an unknown severity.

    Example:
        >>> logger.log_event(emitter, {"open": "verbose"})
        Traceback (most recent call last):
        ...
        InvalidLevelError: Unknown log level 'verbose'
    """

    pass


class TransportConfigurationError(LogFacadeError, ValueError):
    """Raised when a transport spec names an unknown type or has bad params."""

    pass


class LoggerNotInitializedError(LogFacadeError, RuntimeError):
    """Raised when the root logger is requested before init_logger() ran."""

    pass


class ReportedError(LogFacadeError):
    """Error value a non-exception is coerced into by send_error().

    Example:
        >>> logger.send_error("boom")  # logged as ReportedError("boom")
    """

    pass
