"""Bridge between event emitters and the log stream.

Any object exposing ``on(event, listener)`` (pyee-style emitters, custom
clients, ...) can have selected events turned into log records.

Usage:
    logger.log_event(connection, {"open": "info", "error": "error"})

    connection.emit("open", 42, {"ignored": True})
    # logs "(open: [42]" at info level

The message keeps the ``(<event>: <args>`` shape without a closing
parenthesis; downstream consumers parse it as is.
"""

from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    Mapping,
    Protocol,
    Sequence,
    runtime_checkable,
)

from logfacade.serialization import encode_json

if TYPE_CHECKING:
    from logfacade.logger import LoggerFacade

ArgsEncoder = Callable[[Sequence[Any]], str]

# Only primitive scalars survive the default encoder.
_ENCODED_KINDS = (str, int, float, bool)


@runtime_checkable
class EventEmitter(Protocol):
    """Anything that accepts listeners for named events."""

    def on(self, event: str, listener: Callable[..., Any]) -> Any:  # pragma: no cover
        ...


def encode_event_args(args: Sequence[Any]) -> str:
    """Encode emitted arguments, dropping objects and callables.

    None, containers, arbitrary objects and callables are discarded; the
    remaining scalars are JSON-encoded in order.

    Raises:
        SerializationError: If a remaining value cannot be encoded.
    """
    return encode_json([arg for arg in args if isinstance(arg, _ENCODED_KINDS)])


def format_event_message(
    event: str, args: Sequence[Any], encoder: ArgsEncoder = encode_event_args
) -> str:
    """Build the log message for one emission of ``event``."""
    return f"({event}: {encoder(args)}"


def _make_listener(
    event: str, log: Callable[..., Any], encoder: ArgsEncoder
) -> Callable[..., None]:
    def listener(*args: Any) -> None:
        log(format_event_message(event, args, encoder))

    return listener


def bind_events(
    emitter: EventEmitter,
    bindings: Mapping[str, str],
    logger: "LoggerFacade",
    encoder: ArgsEncoder = encode_event_args,
) -> Dict[str, Callable[..., None]]:
    """Subscribe to each bound event and log its emissions.

    Event names are not checked against the emitter; a binding for an
    event that is never emitted simply never fires.

    Args:
        emitter: Object exposing ``on(event, listener)``.
        bindings: Event name to log level.
        logger: Logger receiving the records.
        encoder: Turns the emitted positional arguments into a string.

    Returns:
        The registered listeners by event name, for later unsubscription.

    Raises:
        InvalidLevelError: If a binding names an unknown level.
    """
    listeners: Dict[str, Callable[..., None]] = {}
    for event, level in bindings.items():
        listener = _make_listener(event, logger.log_method(level), encoder)
        emitter.on(event, listener)
        listeners[event] = listener
    return listeners
