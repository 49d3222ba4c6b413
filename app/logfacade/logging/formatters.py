"""Structlog processors added to every rendered record.

A record reaching these processors is the facade's prepared data (context
and call data, already redacted and depth-limited) plus the ``event``,
``level``, ``logger`` and ``timestamp`` keys set earlier in the chain.
The processors here only stamp static fields and shorten long strings;
they never see the caller's original objects.

Usage:
    from logfacade.logging.formatters import add_app_info, truncate_large_values

Dependencies:
    - structlog processors
"""

from typing import Any, Callable, Dict

EventDict = Dict[str, Any]
Processor = Callable[[Any, str, EventDict], EventDict]

TRUNCATION_SUFFIX = "...[truncated, {length} chars total]"


def _stamp_fields(fields: Dict[str, Any]) -> Processor:
    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.update(fields)
        return event_dict

    return processor


def add_app_info(app_name: str, app_version: str = "unknown") -> Processor:
    """Create a processor stamping ``app_name`` and ``app_version``.

    The stamped values win over context or call data using the same keys,
    so every record of a process carries the configured identity.

    Args:
        app_name: Name of the application (``APP_NAME``).
        app_version: Version string (``APP_VERSION``).

    Returns:
        A structlog processor function.
    """
    return _stamp_fields({"app_name": app_name, "app_version": app_version})


def add_environment_info(environment: str) -> Processor:
    """Create a processor stamping ``environment`` (``ENVIRONMENT``)."""
    return _stamp_fields({"environment": environment})


def truncate_large_values(max_length: int = 500) -> Processor:
    """Create a processor shortening string values longer than ``max_length``.

    Only top-level values are checked. Subtrees collapsed by the depth limit
    are JSON strings at this point, so a large collapsed subtree is cut as a
    whole and the result is no longer valid JSON. Structured values (lists
    and the mappings kept by the depth limit) are left alone, as is the
    ``event`` message.

    Args:
        max_length: Maximum string length before truncation
            (``LOG_MAX_VALUE_LENGTH``).

    Returns:
        A structlog processor function.
    """

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in event_dict.items():
            if key == "event" or not isinstance(value, str):
                continue
            if len(value) > max_length:
                event_dict[key] = value[:max_length] + TRUNCATION_SUFFIX.format(
                    length=len(value)
                )
        return event_dict

    return processor
