"""
Bindery Emitter - Named-Event Publish/Subscribe
===============================================

The Emitter is the leaf of the package: every reactive entity (stores,
aggregates) inherits from it, and a Binding can listen to anything exposing an
Emitter-compatible ``add_event_listener``.

Event names are exact-match keys. They may be plain strings (a store dispatches
one per key), integers (an aggregate dispatches one per index), or opaque
``Signal`` sentinels for entity-private structural events. Signals compare by
identity, so a user key such as ``"change"`` can never collide with a store's
generic change event.

Dispatch Semantics:
    - Handlers run synchronously, in registration order, before
      ``dispatch_event`` returns.
    - The handler list is captured when the dispatch starts; handlers added or
      removed by a running handler take effect from the next dispatch.
    - A raising handler aborts the remaining handlers of that dispatch and the
      exception propagates unchanged to whoever dispatched.
    - A handler that dispatches again causes nested dispatch, which completes
      before the outer dispatch resumes.

Usage:
    emitter = Emitter()
    emitter.add_event_listener("saved", lambda path: print(path))
    emitter.dispatch_event("saved", "/tmp/out.json")
"""

from typing import Any, Callable, Dict, Hashable, List

Handler = Callable[..., Any]


class Signal:
    """Opaque, identity-compared event name."""

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self):
        return f"Signal({self.name})"


class Emitter:
    """
    Publish/subscribe primitive shared by every reactive entity.

    Handlers registered more than once are called once per registration.
    """

    def __init__(self):
        self._handlers: Dict[Hashable, List[Handler]] = {}

    def add_event_listener(self, event: Hashable, handler: Handler) -> None:
        """Append ``handler`` to the handler list for ``event``."""
        handlers = self._handlers.get(event)
        if handlers is None:
            self._handlers[event] = [handler]
        else:
            handlers.append(handler)

    def remove_event_listener(self, event: Hashable, handler: Handler) -> None:
        """
        Remove every registration of ``handler`` for ``event``.

        Other events are untouched. Unknown events and handlers are a no-op.
        """
        handlers = self._handlers.get(event)
        if not handlers:
            return
        self._handlers[event] = [fn for fn in handlers if fn != handler]

    def dispatch_event(self, event: Hashable, *args: Any) -> None:
        """Call every handler of ``event`` with ``args``, in order."""
        handlers = self._handlers.get(event)
        if not handlers:
            return
        for handler in list(handlers):
            handler(*args)

    def subscribe(self, event: Hashable, handler: Handler) -> Callable[[], None]:
        """
        Register ``handler`` and return a callable that removes it again.

        Example:
            unsubscribe = store.subscribe("count", print)
            store.count = 3   # prints 3
            unsubscribe()
        """
        self.add_event_listener(event, handler)

        def unsubscribe() -> None:
            self.remove_event_listener(event, handler)

        return unsubscribe

    def listeners(self, event: Hashable) -> List[Handler]:
        """Copy of the handlers currently registered for ``event``."""
        return list(self._handlers.get(event, ()))

    def has_listeners(self, event: Hashable) -> bool:
        return bool(self._handlers.get(event))
