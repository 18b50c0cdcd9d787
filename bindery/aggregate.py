"""
Bindery Aggregate - Reactive Ordered Sequence of Stores
=======================================================

A ReactiveAggregate wraps a live list of ReactiveStore instances and raises two
kinds of events of its own:

- ``ReactiveAggregate.LENGTH`` (no arguments) after every structural change:
  ``set``, ``push``, ``pop``, ``shift``, ``unshift`` and ``splice``.
- ``ReactiveAggregate.CHANGE`` with ``(index, key, value)`` whenever an element
  writes one of its keys.

Element forwarding is rebuilt on every ``LENGTH`` dispatch: the forwarders
installed by the previous rebuild are detached first, then one forwarder per
current index is attached. A store shared with other aggregates or bindings
therefore only ever carries the forwarders that match its current position.

The positional methods mirror array operations and return their native
results: ``push``/``unshift`` the new length, ``pop``/``shift`` the removed
element (``None`` when empty), ``splice`` the list of removed elements.

Usage:
    todos = ReactiveAggregate([ReactiveStore({"done": False})])
    todos.add_event_listener(ReactiveAggregate.CHANGE, print)
    todos[0].done = True       # prints 0 done True
    todos.push(ReactiveStore({"done": False}))
    len(todos)                 # 2
"""

from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
    Type,
)

from .emitter import Emitter, Signal
from .remote import Fetchable
from .store import ReactiveStore


class ReactiveAggregate(Emitter, Fetchable):
    """Ordered, observable sequence of ReactiveStore instances."""

    LENGTH = Signal("ReactiveAggregate.length")
    CHANGE = Signal("ReactiveAggregate.change")

    model: Type[ReactiveStore] = ReactiveStore

    def __init__(self, items: Optional[List[ReactiveStore]] = None):
        super().__init__()
        self._items: List[ReactiveStore] = self._as_list(items)
        self._forwarders: List[Tuple[ReactiveStore, Callable[..., None]]] = []
        self._rebuild()
        self.add_event_listener(self.LENGTH, self._rebuild)

    @staticmethod
    def _as_list(items: Optional[Iterable[ReactiveStore]]) -> List[ReactiveStore]:
        if items is None:
            return []
        return items if isinstance(items, list) else list(items)

    def _forwarder(self, index: int) -> Callable[[str, Any], None]:
        def forward(key: str, value: Any) -> None:
            self.dispatch_event(self.CHANGE, index, key, value)

        return forward

    def _rebuild(self) -> None:
        """Re-attach element forwarders to match the current positions."""
        for element, forward in self._forwarders:
            element.remove_event_listener(ReactiveStore.CHANGE, forward)

        forwarders = []
        for index, element in enumerate(self._items):
            forward = self._forwarder(index)
            element.add_event_listener(ReactiveStore.CHANGE, forward)
            forwarders.append((element, forward))
        self._forwarders = forwarders

    # ------------------------------------------------------------------
    # Whole-sequence access
    # ------------------------------------------------------------------

    def get(self) -> List[ReactiveStore]:
        """The live backing list, not a copy."""
        return self._items

    def set(self, items: Iterable[ReactiveStore]) -> None:
        self._items = self._as_list(items)
        self.dispatch_event(self.LENGTH)

    def load(self, records: Iterable[Mapping[str, Any]]) -> None:
        """Replace the contents with one ``model`` store per record."""
        self.set([self.model(record) for record in records])

    def to_list(self) -> List[Dict[str, Any]]:
        return [element.to_dict() for element in self._items]

    @property
    def length(self) -> int:
        return len(self._items)

    # ------------------------------------------------------------------
    # Positional mutation
    # ------------------------------------------------------------------

    def push(self, *items: ReactiveStore) -> int:
        self._items.extend(items)
        self.dispatch_event(self.LENGTH)
        return len(self._items)

    def pop(self) -> Optional[ReactiveStore]:
        popped = self._items.pop() if self._items else None
        self.dispatch_event(self.LENGTH)
        return popped

    def shift(self) -> Optional[ReactiveStore]:
        shifted = self._items.pop(0) if self._items else None
        self.dispatch_event(self.LENGTH)
        return shifted

    def unshift(self, *items: ReactiveStore) -> int:
        self._items[0:0] = items
        self.dispatch_event(self.LENGTH)
        return len(self._items)

    def splice(
        self, start: int, delete_count: Optional[int] = None, *items: ReactiveStore
    ) -> List[ReactiveStore]:
        """
        Remove ``delete_count`` elements at ``start`` and insert ``items`` there.

        A negative ``start`` counts from the end. Both arguments are clamped to
        the sequence. Omitting ``delete_count`` removes everything from
        ``start`` onwards, as native arrays do; it is not treated as zero, so
        pass ``0`` explicitly to insert without removing.
        """
        size = len(self._items)
        if start < 0:
            start = max(size + start, 0)
        else:
            start = min(start, size)
        if delete_count is None:
            delete_count = size - start
        delete_count = max(0, min(delete_count, size - start))

        removed = self._items[start : start + delete_count]
        self._items[start : start + delete_count] = items
        self.dispatch_event(self.LENGTH)
        return removed

    # ------------------------------------------------------------------
    # Index accessors
    # ------------------------------------------------------------------

    def __getitem__(self, index):
        return self._items[index]

    def __setitem__(self, index: int, element: ReactiveStore) -> None:
        position = range(len(self._items))[index]
        self._items[position] = element
        self._rebuild()
        self.dispatch_event(position, element)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ReactiveStore]:
        for element in self._items:
            yield element

    def __repr__(self):
        return f"{type(self).__name__}({self._items!r})"
