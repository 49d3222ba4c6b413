"""Sink adapters backed by structlog and standard library handlers.

Each configured transport becomes a ``logging.Handler`` rendering records
with a structlog ProcessorFormatter. The facade writes to a single
StructlogSink that feeds the stdlib logger holding those handlers.

Transport failures never reach the caller of a log operation: handlers
report them on ``sys.stderr`` through report_transport_error().

Supported transports:
    Console: {"stream": "stdout" | "stderr", "level": ..., "renderer": ...}
    File:    {"filename": ..., "mode": "a", "encoding": "utf-8",
              "level": ..., "renderer": ...}
"""

import logging
import sys
from typing import Any, Callable, Dict, Literal, Mapping, Optional, Sequence, Tuple, Type

import structlog
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from logfacade.configuration.settings import LEVEL_NAMES, Renderer, TransportSpec
from logfacade.diagnostics import report_transport_error
from logfacade.exceptions import TransportConfigurationError

STDLIB_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

# Facade level -> structlog stdlib BoundLogger method
_SINK_METHODS = {
    "debug": "debug",
    "info": "info",
    "warn": "warning",
    "warning": "warning",
    "error": "error",
}


class DiagnosticHandlerMixin:
    """Route handler write failures to report_transport_error()."""

    def handleError(self, record: logging.LogRecord) -> None:  # noqa: N802
        report_transport_error(sys.exc_info()[1], sink=self)


class ConsoleHandler(DiagnosticHandlerMixin, logging.StreamHandler):
    pass


class FileHandler(DiagnosticHandlerMixin, logging.FileHandler):
    pass


class TransportParams(BaseModel):
    """Params shared by every transport."""

    model_config = ConfigDict(extra="ignore")

    level: Optional[str] = None
    renderer: Optional[Renderer] = None

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if value.lower() not in LEVEL_NAMES:
            raise ValueError(f"level must be one of {', '.join(LEVEL_NAMES)}")
        return value.lower()


class ConsoleParams(TransportParams):
    stream: Literal["stdout", "stderr"] = "stdout"


class FileParams(TransportParams):
    filename: str
    mode: str = "a"
    encoding: str = "utf-8"


def _create_console(params: ConsoleParams) -> logging.Handler:
    return ConsoleHandler(sys.stderr if params.stream == "stderr" else sys.stdout)


def _create_file(params: FileParams) -> logging.Handler:
    return FileHandler(
        params.filename, mode=params.mode, encoding=params.encoding, delay=True
    )


TRANSPORT_FACTORIES: Dict[
    str, Tuple[Type[TransportParams], Callable[[Any], logging.Handler]]
] = {
    "Console": (ConsoleParams, _create_console),
    "File": (FileParams, _create_file),
}


def build_formatter(renderer: Renderer) -> structlog.stdlib.ProcessorFormatter:
    """Create the formatter rendering records as JSON or console text."""
    if renderer == "console":
        final = structlog.dev.ConsoleRenderer(colors=False)
    else:
        final = structlog.processors.JSONRenderer()
    return structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            final,
        ],
    )


def create_transport(
    spec: TransportSpec, default_renderer: Renderer = "json"
) -> logging.Handler:
    """Construct the handler described by ``spec``.

    Args:
        spec: Transport type and params.
        default_renderer: Renderer used when the params do not set one.

    Returns:
        A configured logging.Handler.

    Raises:
        TransportConfigurationError: On unknown type or invalid params.
    """
    try:
        params_model, factory = TRANSPORT_FACTORIES[spec.type]
    except KeyError:
        raise TransportConfigurationError(
            f"Unknown transport type {spec.type!r}; "
            f"expected one of {', '.join(TRANSPORT_FACTORIES)}"
        ) from None
    try:
        params = params_model.model_validate(spec.params)
    except ValidationError as e:
        raise TransportConfigurationError(
            f"Invalid params for transport {spec.type!r}: {e}"
        ) from e

    handler = factory(params)
    handler.set_name(spec.type)
    if params.level:
        handler.setLevel(STDLIB_LEVELS[params.level])
    handler.setFormatter(build_formatter(params.renderer or default_renderer))
    return handler


class StructlogSink:
    """Sink writing prepared records through structlog.

    Each record gets a fresh bound logger whose context is the prepared
    data, so data keys are never passed as keyword arguments and names such
    as ``self`` or ``logger`` are delivered like any other key. Data that
    collapsed to a string is bound under ``data``.

    The ``event``, ``level``, ``logger`` and ``timestamp`` keys are filled
    by the processor chain and override data keys of the same name.

    Args:
        logger: Standard library logger holding the transport handlers.
        processors: structlog processor chain run for every record.
        wrapper_class: Bound logger class built for every record.
    """

    def __init__(
        self,
        logger: logging.Logger,
        processors: Sequence[Callable[..., Any]],
        wrapper_class: Type[structlog.stdlib.BoundLogger] = structlog.stdlib.BoundLogger,
    ):
        self._logger = logger
        self._processors = list(processors)
        self._wrapper_class = wrapper_class

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def bind(self, data: Any) -> structlog.stdlib.BoundLogger:
        """Return a bound logger carrying ``data`` as its context."""
        context = dict(data) if isinstance(data, Mapping) else {"data": data}
        return self._wrapper_class(self._logger, self._processors, context)

    def write(self, level: str, message: str, data: Any) -> None:
        getattr(self.bind(data), _SINK_METHODS[level])(message)
