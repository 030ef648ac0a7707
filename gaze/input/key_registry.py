"""Key-combo dispatch table used by the navigation state machine."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class KeyComboBinding(Generic[T]):
    """Mapping from one or more key tokens to a single action callback."""

    combos: tuple[str, ...]
    handler: Callable[[], T]


class KeyComboRegistry(Generic[T]):
    """Small key-dispatch table keyed by exact key tokens."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], T]] = {}

    def register_binding(self, binding: KeyComboBinding[T]) -> KeyComboRegistry[T]:
        """Register one binding, overwriting existing handlers for same combos."""
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding[T]) -> KeyComboRegistry[T]:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, key: str) -> T | None:
        """Invoke bound handler for ``key``; ``None`` when the key is unbound."""
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return handler()
