"""
Bindery - Declarative Data Binding for Reactive Entities

Entities raise change events; bindings read values from one set of entities
and write transformed values into another whenever a trigger event fires.
"""

__version__ = "0.1.0"

from .aggregate import ReactiveAggregate
from .binding import (
    Binding,
    BindingError,
    Destination,
    Source,
    Trigger,
    pairwise,
)
from .emitter import Emitter, Signal
from .remote import Fetchable, FetchError, fetch
from .store import ReactiveStore

__all__ = [
    # Event primitive
    "Emitter",
    "Signal",
    # Reactive entities
    "ReactiveStore",
    "ReactiveAggregate",
    # Bindings
    "Binding",
    "Trigger",
    "Source",
    "Destination",
    "pairwise",
    # Remote reads
    "fetch",
    "Fetchable",
    # Exceptions
    "BindingError",
    "FetchError",
]
