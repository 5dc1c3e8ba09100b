"""Key-combo dispatch table for mode key bindings."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class KeyComboBinding(Generic[T]):
    """Mapping from one or more key tokens to a single action callback."""

    combos: tuple[str, ...]
    handler: Callable[[], T | None]


class KeyComboRegistry(Generic[T]):
    """Exact-match key table; later registrations win for the same token."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], T | None]] = {}

    def register_binding(self, binding: KeyComboBinding[T]) -> KeyComboRegistry[T]:
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding[T]) -> KeyComboRegistry[T]:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, key: str) -> T | None:
        """Invoke the handler bound to ``key``; unbound keys return ``None``."""
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return handler()
