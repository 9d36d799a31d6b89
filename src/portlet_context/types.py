"""Structural types shared by the lookup helpers and the context loader.

The attribute container and the application context are owned by the host
framework. They are described here as runtime-checkable protocols so that
any object with the right shape can take part, together with small
in-memory implementations for hosts that have nothing of their own.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Iterator, Optional, Protocol, runtime_checkable


@runtime_checkable
class AttributeContainer(Protocol):
    """A shared key/value attribute store populated by the host framework."""

    def get_attribute(self, name: str) -> Any:
        ...

    def set_attribute(self, name: str, value: Any) -> None:
        ...

    def remove_attribute(self, name: str) -> None:
        ...

    def get_attribute_names(self) -> Iterator[str]:
        ...


@runtime_checkable
class ApplicationContext(Protocol):
    """An initialized application/service registry published in a container."""

    id: str
    display_name: str

    def get_bean(self, name: str) -> Any:
        ...

    def contains_bean(self, name: str) -> bool:
        ...


class AttributeStore:
    """Thread-safe in-memory :class:`AttributeContainer`.

    Setting an attribute to ``None`` removes it, so that a lookup never has
    to tell a stored ``None`` apart from a missing key.
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._lock = threading.RLock()
        self._attributes: Dict[str, Any] = {}
        for name, value in (initial or {}).items():
            self.set_attribute(name, value)

    def get_attribute(self, name: str) -> Any:
        with self._lock:
            return self._attributes.get(name)

    def set_attribute(self, name: str, value: Any) -> None:
        with self._lock:
            if value is None:
                self._attributes.pop(name, None)
            else:
                self._attributes[name] = value

    def remove_attribute(self, name: str) -> None:
        with self._lock:
            self._attributes.pop(name, None)

    def get_attribute_names(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._attributes))

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._attributes

    def __len__(self) -> int:
        with self._lock:
            return len(self._attributes)


class StaticApplicationContext:
    """Minimal :class:`ApplicationContext` backed by a dictionary of beans.

    Beans may be registered directly or as zero-argument factories, which
    are called once on first lookup.
    """

    def __init__(
        self,
        context_id: Optional[str] = None,
        display_name: Optional[str] = None,
        beans: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.id = context_id or f"{type(self).__name__}@{id(self):x}"
        self.display_name = display_name or "Root application context"
        self.startup_date = time.time()
        self._lock = threading.RLock()
        self._beans: Dict[str, Any] = dict(beans or {})
        self._factories: Dict[str, Callable[[], Any]] = {}
        self._closed = False

    def register_bean(self, name: str, bean: Any) -> None:
        with self._lock:
            self._factories.pop(name, None)
            self._beans[name] = bean

    def register_factory(self, name: str, factory: Callable[[], Any]) -> None:
        with self._lock:
            self._beans.pop(name, None)
            self._factories[name] = factory

    def contains_bean(self, name: str) -> bool:
        with self._lock:
            return name in self._beans or name in self._factories

    def get_bean(self, name: str) -> Any:
        """Return the bean registered under ``name``.

        Raises:
            KeyError: If no bean or factory is registered under ``name``.
            RuntimeError: If the context has been closed.
        """
        with self._lock:
            if self._closed:
                raise RuntimeError(f"{self.display_name} has been closed")
            if name not in self._beans:
                if name not in self._factories:
                    raise KeyError(f"No bean named '{name}' is defined")
                self._beans[name] = self._factories.pop(name)()
            return self._beans[name]

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        with self._lock:
            self._closed = True
            self._beans.clear()
            self._factories.clear()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, display_name={self.display_name!r})"


__all__ = [
    "AttributeContainer",
    "ApplicationContext",
    "AttributeStore",
    "StaticApplicationContext",
]
