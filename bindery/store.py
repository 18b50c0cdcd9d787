"""
Bindery Store - Reactive Property Bag
=====================================

A ReactiveStore behaves like a plain object whose attributes fire events when
written. Every key lives in a private, insertion-ordered map; reading
``store.count`` or ``store["count"]`` returns the stored value, and writing it
stores the new value and then dispatches two events, in this order:

1. ``ReactiveStore.CHANGE`` with ``(key, value)``
2. the key itself (``"count"``) with ``(value)``

Defining a Store
----------------

```python
from bindery import ReactiveStore

class Counter(ReactiveStore):
    defaults = {"count": 0, "label": "clicks"}

counter = Counter({"label": "taps"})
counter.subscribe("count", lambda value: print(f"count is now {value}"))
counter.count = 5          # prints "count is now 5"
list(counter)              # [5, "taps"]
```

Keys
----

Keys come from ``defaults`` merged with constructor data (constructor data
wins) and from explicit ``set(key, value)`` calls. ``set`` is the only way to
introduce a key. Assigning an unknown key as an attribute creates an ordinary
instance attribute that never notifies anyone; assigning it as an item raises
``KeyError``. Keys that start with an underscore or shadow a class attribute
(``keys``, ``set``, ``fetch``...) are only reachable through item access.

There is no deletion primitive.
"""

from typing import Any, Dict, Iterator, KeysView, Mapping, Optional, Tuple

from .emitter import Emitter, Signal
from .remote import Fetchable


class ReactiveStore(Emitter, Fetchable):
    """Keyed property bag that dispatches an event for every write."""

    CHANGE = Signal("ReactiveStore.change")

    defaults: Dict[str, Any] = {}

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        super().__init__()
        self._data: Dict[str, Any] = {}
        merged = dict(self.defaults)
        if data:
            merged.update(data)
        for key, value in merged.items():
            self.set(key, value)

    # ------------------------------------------------------------------
    # Reactive keys
    # ------------------------------------------------------------------

    def set(self, key: str, value: Any) -> None:
        """
        Store ``value`` under ``key`` and notify.

        Makes ``key`` reactive if it was not already, then dispatches
        ``CHANGE`` with ``(key, value)`` followed by ``key`` with ``(value)``.
        """
        self._data[key] = value
        self.dispatch_event(self.CHANGE, key, value)
        self.dispatch_event(key, value)

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def keys(self) -> KeysView:
        return self._data.keys()

    def items(self) -> Iterator[Tuple[str, Any]]:
        for key in list(self._data):
            yield key, self._data[key]

    def update(self, data: Mapping[str, Any]) -> None:
        """``set`` every pair of ``data``, in order."""
        for key, value in data.items():
            self.set(key, value)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._data)

    def announce(self) -> None:
        """Re-dispatch every key event with its current value."""
        for key in list(self._data):
            self.dispatch_event(key, self._data[key])

    def _is_reactive_attr(self, name: str) -> bool:
        data = self.__dict__.get("_data")
        return (
            data is not None
            and name in data
            and not name.startswith("_")
            and not hasattr(type(self), name)
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def __getattr__(self, name: str) -> Any:
        if self._is_reactive_attr(name):
            return self._data[name]
        raise AttributeError(
            f"'{type(self).__name__}' object has no attribute '{name}'"
        )

    def __setattr__(self, name: str, value: Any) -> None:
        if self._is_reactive_attr(name):
            self.set(name, value)
        else:
            object.__setattr__(self, name, value)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if key not in self._data:
            raise KeyError(f"{key!r} is not a key of this store; use set() to add it")
        self.set(key, value)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[Any]:
        """Yield the current value of every key, in insertion order."""
        for key in list(self._data):
            yield self._data[key]

    def __repr__(self):
        fields = ", ".join(f"{key}={value!r}" for key, value in self._data.items())
        return f"{type(self).__name__}({fields})"
