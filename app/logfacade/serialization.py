"""Deep cloning and depth-limited serialization of log data.

Log data is first cloned into plain JSON-shaped values (dicts, lists and
scalars) so that later stages never touch the caller's objects. The
depth-limited serializer then bounds nesting for transports that choke on
deeply nested or oddly keyed payloads.

Usage:
    from logfacade.serialization import bound, deep_clone

    data = deep_clone({"user": {"id": 1, "profile": {"tags": ["a"]}}})
    bound(data, 1)
    # {"user": '{"id":1,"profile":{"tags":["a"]}}'}

Supported kinds:
    - mappings (keys are strings, or int/float/bool/None turned into
      their JSON spelling)
    - lists and tuples (cloned to lists)
    - str, int, finite float, bool, None
    - datetime, date, time (ISO 8601 string)
    - UUID, Decimal (string), Enum (its value)
    - dataclass instances and pydantic models (their fields)
    - functions and other callables (dropped from mappings, None in
      sequences and at the root)

Anything else, cyclic structures and non-finite floats raise
SerializationError.
"""

import dataclasses
import datetime
import json
import math
import re
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Mapping, Set, Tuple
from uuid import UUID

from pydantic import BaseModel

from logfacade.exceptions import SerializationError

DEFAULT_MAX_DEPTH = 2

# Returned by _clone for callables; callers drop or null it.
_SKIPPED = object()

# Keys that start like an integer ("1", "-2", "12abc") get a prefix.
_INTEGER_LIKE_KEY = re.compile(r"^\s*[+-]?\d")
_RESERVED_KEY_CHARS = re.compile(r"[.$]")


def encode_json(value: Any) -> str:
    """Encode a JSON-shaped value as a compact JSON string.

    Raises:
        SerializationError: If the value cannot be represented as JSON.
    """
    try:
        return json.dumps(
            value, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        )
    except (TypeError, ValueError) as e:
        raise SerializationError(str(e)) from e


def deep_clone(value: Any) -> Any:
    """Return a plain JSON-shaped copy of ``value``.

    Shared (non-cyclic) references are copied once per occurrence.

    Args:
        value: Arbitrary log data.

    Returns:
        A structure made only of dicts, lists and scalars.

    Raises:
        SerializationError: On cycles, non-finite floats or unsupported kinds.
    """
    cloned = _clone(value, "", set())
    return None if cloned is _SKIPPED else cloned


def _where(path: str) -> str:
    return repr(path) if path else "<root>"


def _clone_key(key: Any, path: str) -> str:
    if isinstance(key, str):
        return key
    if key is None or isinstance(key, (bool, int, float)):
        if isinstance(key, float) and not math.isfinite(key):
            raise SerializationError(f"Non-finite float key {key!r} at {_where(path)}")
        return json.dumps(key)
    raise SerializationError(
        f"Mapping key of type {type(key).__name__} is not serializable at {_where(path)}"
    )


def _clone(value: Any, path: str, active: Set[int]) -> Any:
    if isinstance(value, Enum):
        return _clone(value.value, path, active)
    if value is None or isinstance(value, (str, bool, int)):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SerializationError(f"Non-finite float {value!r} at {_where(path)}")
        return value
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, (UUID, Decimal)):
        return str(value)
    if isinstance(value, BaseModel):
        return _clone(value.model_dump(), path, active)

    items: Iterable[Tuple[Any, Any]]
    if isinstance(value, Mapping):
        items = value.items()
    elif dataclasses.is_dataclass(value) and not isinstance(value, type):
        items = ((f.name, getattr(value, f.name)) for f in dataclasses.fields(value))
    elif isinstance(value, (list, tuple)):
        items = enumerate(value)
    elif callable(value):
        return _SKIPPED
    else:
        raise SerializationError(
            f"Object of type {type(value).__name__} is not serializable at {_where(path)}"
        )

    marker = id(value)
    if marker in active:
        raise SerializationError(f"Circular reference detected at {_where(path)}")
    active.add(marker)
    try:
        if isinstance(value, (list, tuple)):
            cloned_items = []
            for index, item in items:
                cloned_item = _clone(item, f"{path}[{index}]", active)
                cloned_items.append(None if cloned_item is _SKIPPED else cloned_item)
            return cloned_items
        cloned = {}
        for key, item in items:
            name = _clone_key(key, path)
            cloned_item = _clone(item, f"{path}.{name}" if path else name, active)
            if cloned_item is not _SKIPPED:
                cloned[name] = cloned_item
        return cloned
    finally:
        active.discard(marker)


def normalize_key(key: str) -> str:
    """Rename a key that transports would misread.

    Integer-like keys are prefixed with ``__`` so they do not look like
    positional fields, then ``.`` and ``$`` are replaced by ``_``.

    Example:
        >>> normalize_key("1")
        '__1'
        >>> normalize_key("a.b$c")
        'a_b_c'
    """
    if _INTEGER_LIKE_KEY.match(key):
        key = f"__{key}"
    return _RESERVED_KEY_CHARS.sub("_", key)


def bound(tree: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> Any:
    """Bound the nesting depth of ``tree``.

    At ``max_depth <= 0`` the whole subtree collapses into one JSON string.
    Above that, mapping keys are normalized and mapping values are bounded
    with one less level. Sequences and scalars pass through untouched.

    Args:
        tree: JSON-shaped data, usually the output of deep_clone().
        max_depth: Number of mapping levels kept structured.

    Returns:
        A new structure; ``tree`` is not modified.

    Example:
        >>> bound({"a": {"b": {"c": 1}}}, 2)
        {'a': {'b': '{"c":1}'}}
    """
    if max_depth <= 0:
        return encode_json(tree)
    if not isinstance(tree, Mapping):
        return tree
    return {
        normalize_key(str(key)): (
            bound(value, max_depth - 1) if isinstance(value, Mapping) else value
        )
        for key, value in tree.items()
    }
