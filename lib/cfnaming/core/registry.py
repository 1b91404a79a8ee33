"""String-to-callable registry for event planners."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Dict, Generic, TypeVar

T = TypeVar("T")


class Registry(Generic[T]):
    """Lightweight registry for mapping string identifiers to callables."""

    def __init__(self, kind: str) -> None:
        self._kind = kind
        self._items: Dict[str, T] = {}

    def register(self, name: str) -> Callable[[T], T]:
        """Decorator to register an item under the provided name."""

        def decorator(obj: T) -> T:
            if name in self._items:
                raise ValueError(f"{self._kind!r} '{name}' already registered.")
            self._items[name] = obj
            return obj

        return decorator

    def get(self, name: str) -> T:
        try:
            return self._items[name]
        except KeyError as exc:
            available = ", ".join(sorted(self._items)) or "<none>"
            raise KeyError(
                f"Unknown {self._kind!r} '{name}'. Available: {available}"
            ) from exc

    def __contains__(self, name: str) -> bool:
        return name in self._items

    def as_mapping(self) -> Mapping[str, T]:
        return dict(self._items)


EVENT_PLANNERS: Registry[Any] = Registry("event planner")


def register_event_planner(name: str) -> Callable[[T], T]:
    return EVENT_PLANNERS.register(name)
