"""Logger facade combining context, redaction and depth limiting.

Every leveled call merges the effective context with the call data,
clones it, masks sensitive fields, bounds its depth and hands the result
to the sink.

Usage:
    from logfacade import init_logger

    logger = init_logger(hide_keys=["password"], add_to_context={"service": "billing"})
    logger.info("user_login", {"user": "jane", "password": "hunter2"})
    # data sent to the sink: {"service": "billing", "user": "jane",
    #                         "password": "**********string**********"}

    request_logger = logger.get_logger_with_context({"request_id": "req-123"})
    request_logger.alert("payment_declined", {"order_id": 42})
"""

import traceback
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, runtime_checkable

from logfacade.context import ContextStore
from logfacade.diagnostics import report_transport_error
from logfacade.events import ArgsEncoder, EventEmitter, bind_events, encode_event_args
from logfacade.exceptions import InvalidLevelError, ReportedError
from logfacade.instrumentation import InstrumentedProxy, wrap_object
from logfacade.redaction import EMPTY_POLICY, RedactionPolicy, redact
from logfacade.serialization import DEFAULT_MAX_DEPTH, bound, deep_clone

LEVELS = ("debug", "info", "warn", "error")

# Names accepted in binding tables and wrap tables, mapped to facade methods
_LEVEL_METHODS = {
    "debug": "debug",
    "info": "info",
    "warn": "warn",
    "warning": "warn",
    "error": "error",
    "alert": "alert",
}

STACK_LINE_LIMIT = 100


@runtime_checkable
class Sink(Protocol):
    """Destination for prepared log records."""

    def write(
        self, level: str, message: str, data: Mapping[str, Any]
    ) -> None:  # pragma: no cover - typing helper
        ...


def format_stack(error: BaseException) -> List[str]:
    """Return the stack trace lines of ``error`` without the header line.

    Errors that were never raised get the stack of the current call site.
    Traces longer than STACK_LINE_LIMIT - 1 lines keep their innermost tail.
    """
    if error.__traceback__ is not None:
        lines = traceback.format_exception(type(error), error, error.__traceback__)
    else:
        lines = [
            "Traceback (most recent call last):\n",
            *traceback.format_stack()[:-1],
            *traceback.format_exception_only(type(error), error),
        ]
    return "".join(lines).splitlines()[1:][-(STACK_LINE_LIMIT - 1):]


class LoggerFacade:
    """Structured logger handle.

    Handles derived with get_logger_with_context() share the sink, the
    redaction policy and the depth limit of their parent, and own an
    independent copy of its context.
    """

    def __init__(
        self,
        sink: Sink,
        policy: RedactionPolicy = EMPTY_POLICY,
        context: Optional[ContextStore] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self._sink = sink
        self._policy = policy
        self._context = context if context is not None else ContextStore()
        self._max_depth = max_depth

    @property
    def sink(self) -> Sink:
        return self._sink

    @property
    def policy(self) -> RedactionPolicy:
        return self._policy

    @property
    def context_store(self) -> ContextStore:
        return self._context

    @property
    def max_depth(self) -> int:
        return self._max_depth

    # Context

    def get_context(self) -> Dict[str, Any]:
        """Return the effective context of this handle."""
        return self._context.effective_context()

    def add_to_context(self, data: Mapping[str, Any]) -> "LoggerFacade":
        """Add entries to this handle's context in place."""
        self._context.add(data)
        return self

    def get_logger_with_context(
        self, context: Optional[Mapping[str, Any]] = None
    ) -> "LoggerFacade":
        """Derive a child handle whose context overlays this one.

        The parent's context is left untouched.
        """
        return LoggerFacade(
            self._sink,
            self._policy,
            self._context.derive_child(context),
            self._max_depth,
        )

    # Data preparation

    def prepare_data(self, data: Mapping[str, Any]) -> Any:
        """Clone, redact and depth-limit ``data`` for the sink.

        Raises:
            SerializationError: If the data cannot be represented as JSON.
        """
        return bound(redact(deep_clone(data), self._policy), self._max_depth)

    def _write(
        self,
        level: str,
        message: str,
        data: Optional[Mapping[str, Any]],
        extra: Optional[Mapping[str, Any]] = None,
    ) -> "LoggerFacade":
        merged = {**self.get_context(), **(data or {}), **(extra or {})}
        prepared = self.prepare_data(merged)
        try:
            self._sink.write(level, message, prepared)
        except Exception as e:
            report_transport_error(e, sink=self._sink)
        return self

    def log_method(self, level: str) -> Callable[..., "LoggerFacade"]:
        """Return the bound log method for a level name.

        Raises:
            InvalidLevelError: If ``level`` is not a known level.
        """
        try:
            return getattr(self, _LEVEL_METHODS[level])
        except (KeyError, TypeError):
            raise InvalidLevelError(f"Unknown log level {level!r}") from None

    # Leveled operations

    def debug(self, message: str, data: Optional[Mapping[str, Any]] = None) -> "LoggerFacade":
        return self._write("debug", message, data)

    def info(self, message: str, data: Optional[Mapping[str, Any]] = None) -> "LoggerFacade":
        return self._write("info", message, data)

    def warn(self, message: str, data: Optional[Mapping[str, Any]] = None) -> "LoggerFacade":
        return self._write("warn", message, data)

    warning = warn

    def error(self, message: str, data: Optional[Mapping[str, Any]] = None) -> "LoggerFacade":
        return self._write("error", message, data)

    def alert(self, message: str, data: Optional[Mapping[str, Any]] = None) -> "LoggerFacade":
        """Log at error level with ``alert: true`` for downstream alerting."""
        return self._write("error", message, data, {"alert": True})

    def send_error(
        self, error: Any, data: Optional[Mapping[str, Any]] = None
    ) -> "LoggerFacade":
        """Log an error with its stack trace.

        Values that are not exceptions are coerced into a ReportedError
        whose message is the value.

        Args:
            error: Exception, or any value describing the failure.
            data: Extra fields for the record.
        """
        if not isinstance(error, BaseException):
            error = ReportedError(error)
        return self.error(str(error), {**(data or {}), "stack": format_stack(error)})

    def alert_error(
        self, error: Any, data: Optional[Mapping[str, Any]] = None
    ) -> "LoggerFacade":
        """send_error() flagged with ``alert: true``."""
        return self.send_error(error, {**(data or {}), "alert": True})

    # Bridges

    def log_event(
        self,
        emitter: EventEmitter,
        bindings: Mapping[str, str],
        encoder: ArgsEncoder = encode_event_args,
    ) -> Dict[str, Callable[..., None]]:
        """Log emissions of the bound events of ``emitter``.

        Returns:
            The registered listeners by event name.
        """
        return bind_events(emitter, bindings, self, encoder)

    def wrap_object(
        self, target: Any, methods: Mapping[str, str], label: str
    ) -> InstrumentedProxy:
        """Return a proxy of ``target`` logging calls to ``methods``."""
        return wrap_object(target, methods, label, self)

    def __repr__(self) -> str:
        return f"<LoggerFacade context={self.get_context()!r}>"
