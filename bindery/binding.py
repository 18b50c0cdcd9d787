"""
Bindery Binding - Declarative Read/Transform/Write Pipelines
============================================================

A Binding ties trigger events to a pipeline that samples sources, folds the
samples through modifier functions, and hands the result to destinations.

Descriptor Format
-----------------

A binding is described by four lists. Triggers, sources and destinations are
flat lists read two elements at a time::

    Binding([
        [button, "click", form, "submit"],          # (target, event) pairs
        [price, "amount", tax_rate, ()],            # (target, key or args) pairs
        [lambda values: values[0] * (1 + values[1])],  # modifiers
        [total, "amount", log, "append"],           # (target, key) pairs
    ])

A flat list with an odd number of elements yields ``len // 2`` pairs; the
trailing element is never visited. ``Binding.from_pairs`` takes explicit
two-tuples instead and has no such trap.

Pipeline
--------

Every time any trigger fires (its payload is ignored):

1. Each source is sampled in order. A callable source is called with its
   paired value as an argument list: a list or tuple is spread, ``None``
   means no arguments, and anything else, strings included, is passed as a
   single argument (``(str.upper, "abc")`` calls ``str.upper("abc")``, not
   ``str.upper("a", "b", "c")``). Any other source is read with
   ``target[key]`` for mappings, non-string keys and containers that hold
   ``key`` (so a store key named ``items`` reads the value, not the method),
   and with ``getattr(target, key)`` otherwise.
2. The list of samples is passed through each modifier in order; each
   modifier's return value becomes the next modifier's only argument.
3. Each destination receives the final value. Destinations whose member was
   callable when the binding was built are invoked with it; the rest are
   assigned it.

Everything runs synchronously inside the trigger's dispatch. A destination
that is itself reactive dispatches nested events before the pipeline moves on
to the next destination.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Iterable, Iterator, List, Sequence, Tuple


class BindingError(ValueError):
    """Raised when a binding descriptor does not have four parts."""

    pass


def pairwise(flat: Sequence[Any]) -> Iterator[Tuple[Any, Any]]:
    """Yield ``(flat[0], flat[1]), (flat[2], flat[3]), ...``; drop an unpaired tail."""
    for i in range(0, len(flat) - 1, 2):
        yield flat[i], flat[i + 1]


def _uses_items(target: Any, key: Any) -> bool:
    if isinstance(target, Mapping) or not isinstance(key, str):
        return True
    if isinstance(target, (str, bytes)):
        return False
    try:
        return key in target
    except TypeError:
        return False


def read_member(target: Any, key: Any) -> Any:
    if _uses_items(target, key):
        return target[key]
    return getattr(target, key)


def write_member(target: Any, key: Any, value: Any) -> None:
    if _uses_items(target, key):
        target[key] = value
    else:
        setattr(target, key, value)


def _arguments(args: Any) -> Tuple[Any, ...]:
    if args is None:
        return ()
    if isinstance(args, (list, tuple)):
        return tuple(args)
    return (args,)


@dataclass
class Trigger:
    target: Any
    event: Hashable


@dataclass
class Source:
    """A sampled value provider: ``"call"`` for callables, ``"read"`` otherwise."""

    target: Any
    key: Any
    kind: str

    @classmethod
    def resolve(cls, target: Any, key: Any) -> "Source":
        return cls(target, key, "call" if callable(target) else "read")

    def read(self) -> Any:
        if self.kind == "call":
            return self.target(*_arguments(self.key))
        return read_member(self.target, self.key)


@dataclass
class Destination:
    """A pipeline sink, resolved once to ``"invoke"`` or ``"assign"``."""

    target: Any
    key: Any
    kind: str

    @classmethod
    def resolve(cls, target: Any, key: Any) -> "Destination":
        try:
            member = read_member(target, key)
        except (AttributeError, KeyError, IndexError):
            member = None
        return cls(target, key, "invoke" if callable(member) else "assign")

    def write(self, value: Any) -> None:
        if self.kind == "invoke":
            read_member(self.target, self.key)(value)
        else:
            write_member(self.target, self.key, value)


def _pairs(flat: Sequence[Any], role: str) -> List[Tuple[Any, Any]]:
    if len(flat) % 2:
        logging.debug(f"Binding {role} list has an unpaired tail, ignoring {flat[-1]!r}")
    return list(pairwise(flat))


class Binding:
    """
    Wires trigger events to a source → modifier → destination pipeline.

    The binding subscribes to every trigger as soon as it is constructed and
    stays subscribed until ``teardown`` is called.
    """

    def __init__(self, descriptor: Sequence[Sequence[Any]]):
        parts = list(descriptor)
        if len(parts) != 4:
            raise BindingError(
                "A binding descriptor needs exactly four lists "
                f"(triggers, sources, modifiers, destinations), got {len(parts)}"
            )
        triggers, sources, modifiers, destinations = parts

        self._triggers = [Trigger(t, e) for t, e in _pairs(triggers, "trigger")]
        self._sources = [Source.resolve(t, k) for t, k in _pairs(sources, "source")]
        self._modifiers: List[Callable[[Any], Any]] = list(modifiers)
        self._destinations = [
            Destination.resolve(t, k) for t, k in _pairs(destinations, "destination")
        ]

        self._handler = self._on_trigger
        self._active = False
        self._subscribe()

    @classmethod
    def from_pairs(
        cls,
        triggers: Iterable[Tuple[Any, Hashable]] = (),
        sources: Iterable[Tuple[Any, Any]] = (),
        modifiers: Iterable[Callable[[Any], Any]] = (),
        destinations: Iterable[Tuple[Any, Any]] = (),
    ) -> "Binding":
        """Build a binding from explicit ``(target, key)`` tuples."""

        def flatten(pairs):
            return [item for target, key in pairs for item in (target, key)]

        return cls(
            [flatten(triggers), flatten(sources), list(modifiers), flatten(destinations)]
        )

    @classmethod
    def many(cls, descriptors: Iterable[Sequence[Sequence[Any]]]) -> List["Binding"]:
        return [cls(descriptor) for descriptor in descriptors]

    # ------------------------------------------------------------------
    # Subscription lifecycle
    # ------------------------------------------------------------------

    def _subscribe(self) -> None:
        for trigger in self._triggers:
            trigger.target.add_event_listener(trigger.event, self._handler)
        self._active = True
        logging.debug(f"{self!r} listening to {len(self._triggers)} trigger(s)")

    def teardown(self) -> None:
        """Stop listening to every trigger. Safe to call more than once."""
        if not self._active:
            return
        for trigger in self._triggers:
            trigger.target.remove_event_listener(trigger.event, self._handler)
        self._active = False
        logging.debug(f"{self!r} torn down")

    @property
    def active(self) -> bool:
        return self._active

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _on_trigger(self, *event_args: Any) -> None:
        self.propagate()

    def propagate(self) -> Any:
        """Run the pipeline once and return the value written to destinations."""
        value: Any = [source.read() for source in self._sources]
        for modify in self._modifiers:
            value = modify(value)
        for destination in self._destinations:
            destination.write(value)
        return value

    @property
    def triggers(self) -> Tuple[Trigger, ...]:
        return tuple(self._triggers)

    @property
    def sources(self) -> Tuple[Source, ...]:
        return tuple(self._sources)

    @property
    def modifiers(self) -> Tuple[Callable[[Any], Any], ...]:
        return tuple(self._modifiers)

    @property
    def destinations(self) -> Tuple[Destination, ...]:
        return tuple(self._destinations)

    def __repr__(self):
        return (
            f"Binding(triggers={len(self._triggers)}, sources={len(self._sources)}, "
            f"modifiers={len(self._modifiers)}, destinations={len(self._destinations)})"
        )
