"""Redaction of sensitive fields in log data.

A RedactionPolicy holds the exact keys and regular expressions that mark a
field as sensitive. redact() walks a data tree and replaces the value of
every matching key with a placeholder that keeps only the value's type.

Usage:
    from logfacade.redaction import RedactionPolicy, redact

    policy = RedactionPolicy.from_config(hide_keys=["password"], hide_regex=["^secret"])
    redact({"user": {"password": "abc", "secretToken": 42}}, policy)
    # {"user": {"password": "**********string**********",
    #           "secretToken": "**********number**********"}}
"""

import re
from dataclasses import dataclass
from typing import Any, FrozenSet, Iterable, Mapping, Pattern, Tuple, Union

MASK = "**********"

_TYPE_TAGS = (
    (bool, "boolean"),
    (str, "string"),
    ((int, float), "number"),
)


def type_tag(value: Any) -> str:
    """Return the JSON type name used in a redaction placeholder.

    Mappings, sequences and None are all tagged ``object``; callables are
    tagged ``function``.
    """
    for kinds, tag in _TYPE_TAGS:
        if isinstance(value, kinds):
            return tag
    if callable(value) and not isinstance(value, (Mapping, list, tuple)):
        return "function"
    return "object"


def placeholder(value: Any) -> str:
    """Build the placeholder that replaces a redacted ``value``."""
    return f"{MASK}{type_tag(value)}{MASK}"


@dataclass(frozen=True)
class RedactionPolicy:
    """Exact keys and key patterns whose values are masked.

    The policy is immutable and shared by every logger derived from the
    root logger.
    """

    keys: FrozenSet[str] = frozenset()
    patterns: Tuple[Pattern[str], ...] = ()

    @classmethod
    def from_config(
        cls,
        hide_keys: Iterable[str] = (),
        hide_regex: Iterable[Union[str, Pattern[str]]] = (),
    ) -> "RedactionPolicy":
        """Build a policy from configuration values.

        Args:
            hide_keys: Keys masked on exact match.
            hide_regex: Patterns (strings or compiled) searched in each key.

        Raises:
            re.error: If a pattern string is not a valid regular expression.
        """
        return cls(
            keys=frozenset(hide_keys),
            patterns=tuple(re.compile(pattern) for pattern in hide_regex),
        )

    def matches(self, key: str) -> bool:
        """Check whether ``key`` names a sensitive field."""
        return key in self.keys or any(p.search(key) for p in self.patterns)


EMPTY_POLICY = RedactionPolicy()


def redact(tree: Any, policy: RedactionPolicy) -> Any:
    """Return a copy of ``tree`` with sensitive fields masked.

    Every mapping key is checked against the policy at any depth; a match
    replaces the value, whatever its type, with a type-tagged placeholder.
    Non-matching mapping values and sequence items are walked recursively.
    Scalars pass through unchanged.

    Args:
        tree: Mappings, sequences and scalars, nested arbitrarily.
        policy: Keys and patterns to mask.

    Returns:
        A new structure; ``tree`` is not modified.
    """
    if isinstance(tree, Mapping):
        return {
            key: (
                placeholder(value)
                if policy.matches(str(key))
                else redact(value, policy)
            )
            for key, value in tree.items()
        }
    if isinstance(tree, list):
        return [redact(item, policy) for item in tree]
    if isinstance(tree, tuple):
        return tuple(redact(item, policy) for item in tree)
    return tree
