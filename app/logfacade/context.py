"""Hierarchical context attached to every log record.

A ContextStore has two layers: a default context fixed when the store is
created, and an instance context that grows through add(). The effective
context is the default overlaid by the instance context.

Usage:
    from logfacade.context import ContextStore

    root = ContextStore({"service": "billing"})
    request = root.derive_child({"request_id": "req-123"})
    request.add({"user_id": "u-1"})

    request.effective_context()
    # {"service": "billing", "request_id": "req-123", "user_id": "u-1"}
    root.effective_context()
    # {"service": "billing"}

Thread safety:
    The instance context is a plain dict. Concurrent add() calls on the
    same store from several threads need external locking. Derived stores
    own independent copies and never share storage with their parent.
"""

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional


class ContextStore:
    """Default plus instance context for one logger handle."""

    def __init__(
        self,
        default_context: Optional[Mapping[str, Any]] = None,
        context: Optional[Mapping[str, Any]] = None,
    ):
        self._default_context = MappingProxyType(dict(default_context or {}))
        self._context: Dict[str, Any] = dict(context or {})

    @property
    def default_context(self) -> Mapping[str, Any]:
        """Read-only view of the default context."""
        return self._default_context

    @property
    def context(self) -> Mapping[str, Any]:
        """Read-only view of the instance context."""
        return MappingProxyType(self._context)

    def add(self, entries: Mapping[str, Any]) -> "ContextStore":
        """Add entries to the instance context in place.

        Stores derived before this call are not affected.
        """
        self._context.update(entries)
        return self

    def effective_context(self) -> Dict[str, Any]:
        """Return the default context overlaid by the instance context."""
        return {**self._default_context, **self._context}

    def derive_child(self, overlay: Optional[Mapping[str, Any]] = None) -> "ContextStore":
        """Create a store inheriting this store's effective context.

        The child shares the default context and starts its instance
        context from a copy of this store's effective context with
        ``overlay`` applied on top.

        Args:
            overlay: Entries that shadow inherited ones in the child.

        Returns:
            A new, independent ContextStore.
        """
        return ContextStore(
            self._default_context,
            {**self.effective_context(), **(overlay or {})},
        )

    def __repr__(self) -> str:
        return f"ContextStore({self.effective_context()!r})"
