"""
Shared pytest fixtures for Bindery tests.
"""

import pytest

from bindery import Emitter, ReactiveAggregate, ReactiveStore


class Recorder:
    """Callable that remembers the positional arguments of every call."""

    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)

    @property
    def count(self):
        return len(self.calls)


@pytest.fixture
def recorder():
    """Provide a fresh call recorder."""
    return Recorder()


@pytest.fixture
def make_recorder():
    """Factory for tests that need several independent recorders."""
    return Recorder


@pytest.fixture
def emitter():
    return Emitter()


@pytest.fixture
def store():
    """Provide a store with two keys."""
    return ReactiveStore({"x": 1, "y": 2})


@pytest.fixture
def aggregate():
    """Provide an aggregate of two stores."""
    return ReactiveAggregate([ReactiveStore({"x": 0}), ReactiveStore({"x": 1})])
