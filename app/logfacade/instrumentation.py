"""Call-level tracing for existing objects.

wrap_object() returns a proxy that logs selected method calls before
forwarding them to the wrapped object. Every other attribute read, write
or delete goes straight to the wrapped object.

Usage:
    client = logger.wrap_object(http_client, {"get": "debug", "post": "info"}, "http")
    client.get("/health")
    # logs "Call http.get" with {"args": ["/health"]}, then returns http_client.get(...)

Notes:
    - Only the call site is observed. A coroutine or future returned by the
      wrapped method is handed back as is and never awaited.
    - Special methods (``len()``, iteration, operators) are looked up on the
      type and are not forwarded.
    - Call arguments go through the normal data preparation, so arguments
      that cannot be serialized make the call fail with SerializationError.
      Callbacks are logged as None in ``args`` and left out of ``kwargs``.
"""

from typing import TYPE_CHECKING, Any, Callable, Dict, Mapping

if TYPE_CHECKING:
    from logfacade.logger import LoggerFacade


def _instrument(
    target: Any, name: str, label: str, log: Callable[..., Any]
) -> Callable[..., Any]:
    message = f"Call {label}.{name}"

    def call(*args: Any, **kwargs: Any) -> Any:
        data: Dict[str, Any] = {"args": list(args)}
        if kwargs:
            data["kwargs"] = kwargs
        log(message, data)
        return getattr(target, name)(*args, **kwargs)

    call.__name__ = name
    call.__qualname__ = f"{label}.{name}"
    return call


class InstrumentedProxy:
    """Delegating proxy with a per-method dispatch table.

    The dispatch table is built once at construction. The proxy keeps its
    own state under name-mangled attributes, so target attributes such as
    ``_target`` stay reachable through it. Wrapped methods are
    resolved on the target at call time, so a table naming a missing method
    only fails when that method is invoked.
    """

    def __init__(
        self,
        target: Any,
        methods: Mapping[str, str],
        label: str,
        logger: "LoggerFacade",
    ):
        dispatch = {
            name: _instrument(target, name, label, logger.log_method(level))
            for name, level in methods.items()
        }
        object.__setattr__(self, "_InstrumentedProxy__target", target)
        object.__setattr__(self, "_InstrumentedProxy__label", label)
        object.__setattr__(self, "_InstrumentedProxy__dispatch", dispatch)

    def __getattr__(self, name: str) -> Any:
        dispatch = object.__getattribute__(self, "_InstrumentedProxy__dispatch")
        if name in dispatch:
            return dispatch[name]
        return getattr(object.__getattribute__(self, "_InstrumentedProxy__target"), name)

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(self.__target, name, value)

    def __delattr__(self, name: str) -> None:
        delattr(self.__target, name)

    def __dir__(self):
        return sorted(set(dir(self.__target)) | set(self.__dispatch))

    def __repr__(self) -> str:
        return f"<InstrumentedProxy {self.__label} of {self.__target!r}>"


def wrap_object(
    target: Any,
    methods: Mapping[str, str],
    label: str,
    logger: "LoggerFacade",
) -> InstrumentedProxy:
    """Wrap ``target`` so that the listed methods are logged when called.

    Args:
        target: Object to wrap.
        methods: Method name to log level.
        label: Name used in the ``Call <label>.<method>`` message.
        logger: Logger receiving the call records.

    Returns:
        A proxy usable in place of ``target``.

    Raises:
        InvalidLevelError: If a method is mapped to an unknown level.
    """
    return InstrumentedProxy(target, methods, label, logger)
