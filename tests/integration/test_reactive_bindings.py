"""
Integration tests wiring stores, aggregates and bindings together.

These cover the propagation protocol end to end: synchronous nested dispatch
through reactive destinations, aggregate forwarding feeding bindings, and the
view-layer pattern of building bindings and priming them with announce().
"""

from types import SimpleNamespace

import pytest

from bindery import Binding, ReactiveAggregate, ReactiveStore


class Item(ReactiveStore):
    defaults = {"data": None}


class Items(ReactiveAggregate):
    model = Item


@pytest.mark.integration
def test_store_key_drives_another_store():
    """A key event on one store rewrites a key on another"""
    celsius = ReactiveStore({"degrees": 0})
    fahrenheit = ReactiveStore({"degrees": 32})
    Binding(
        [
            [celsius, "degrees"],
            [celsius, "degrees"],
            [lambda v: v[0] * 9 / 5 + 32],
            [fahrenheit, "degrees"],
        ]
    )

    celsius.degrees = 100

    assert fahrenheit.degrees == 212


@pytest.mark.integration
def test_reactive_destination_dispatches_nested_events_in_order():
    """Downstream handlers finish before the upstream dispatch continues"""
    # Arrange
    upstream = ReactiveStore({"value": 0})
    downstream = ReactiveStore({"value": 0})
    order = []
    Binding([[upstream, "value"], [upstream, "value"], [lambda v: v[0]], [downstream, "value"]])
    downstream.add_event_listener("value", lambda v: order.append(("downstream", v)))
    upstream.add_event_listener("value", lambda v: order.append(("upstream", v)))

    # Act
    upstream.value = 4

    # Assert
    assert order == [("downstream", 4), ("upstream", 4)]


@pytest.mark.integration
def test_bindings_chain_through_intermediate_store():
    a = ReactiveStore({"n": 1})
    b = ReactiveStore({"n": 0})
    c = ReactiveStore({"n": 0})
    Binding([[a, "n"], [a, "n"], [lambda v: v[0] + 1], [b, "n"]])
    Binding([[b, "n"], [b, "n"], [lambda v: v[0] * 10], [c, "n"]])

    a.n = 5

    assert (b.n, c.n) == (6, 60)


@pytest.mark.integration
def test_mutual_bindings_recurse_without_a_guard():
    """Two stores bound to each other recurse until Python stops them"""
    a = ReactiveStore({"n": 0})
    b = ReactiveStore({"n": 0})
    Binding([[a, "n"], [a, "n"], [lambda v: v[0]], [b, "n"]])
    Binding([[b, "n"], [b, "n"], [lambda v: v[0]], [a, "n"]])

    with pytest.raises(RecursionError):
        a.n = 1


@pytest.mark.integration
def test_aggregate_change_event_scenario(recorder):
    """Writing x on the first element raises (0, 'x', 9) on the aggregate"""
    store_a = ReactiveStore({"x": 0})
    store_b = ReactiveStore({"x": 0})
    aggregate = ReactiveAggregate([store_a, store_b])
    aggregate.add_event_listener(ReactiveAggregate.CHANGE, recorder)

    store_a.x = 9

    assert recorder.calls == [(0, "x", 9)]


@pytest.mark.integration
def test_binding_on_aggregate_change_recomputes_summary():
    """A binding triggered by element changes keeps a total up to date"""
    # Arrange
    cart = ReactiveAggregate([ReactiveStore({"price": 3}), ReactiveStore({"price": 4})])
    summary = ReactiveStore({"total": 0})
    Binding(
        [
            [cart, ReactiveAggregate.CHANGE, cart, ReactiveAggregate.LENGTH],
            [lambda: [item.price for item in cart], None],
            [lambda v: sum(v[0])],
            [summary, "total"],
        ]
    )

    # Act
    cart[0].price = 10
    after_change = summary.total
    cart.push(ReactiveStore({"price": 1}))

    # Assert
    assert after_change == 14
    assert summary.total == 15


@pytest.mark.integration
def test_renderer_rebuilds_from_scratch_on_length_events():
    """A view collaborator re-materialises every element on each structural event"""
    # Arrange
    items = Items()
    rendered = []

    def render():
        rendered[:] = [f"<li>{item.data}</li>" for item in items]

    items.add_event_listener(ReactiveAggregate.LENGTH, render)

    # Act
    items.load([{"data": str(i)} for i in range(3)])
    items.shift()

    # Assert
    assert rendered == ["<li>1</li>", "<li>2</li>"]


@pytest.mark.integration
def test_view_ties_are_primed_by_announce():
    """Bindings created after the data exists pick it up once announce() runs"""
    # Arrange
    item = Item({"data": "hello"})
    node = SimpleNamespace(text_content="")
    ties = [
        [[item, "data"], [item, "data"], [lambda v: v[0]], [node, "text_content"]],
    ]
    bindings = Binding.many(ties)

    # Act
    item.announce()

    # Assert
    assert node.text_content == "hello"
    assert len(bindings) == 1


@pytest.mark.integration
def test_click_repopulates_aggregate():
    """A trigger with no sources can drive an aggregate method as its destination"""
    # Arrange
    button = ReactiveStore()
    items = Items()
    Binding(
        [
            [button, "click"],
            [],
            [lambda _: [Item({"data": str(i)}) for i in range(4)]],
            [items, "set"],
        ]
    )

    # Act
    button.dispatch_event("click")

    # Assert
    assert items.length == 4
    assert [item.data for item in items] == ["0", "1", "2", "3"]


@pytest.mark.integration
def test_torn_down_binding_leaves_other_bindings_working():
    source = ReactiveStore({"v": 0})
    first = SimpleNamespace(v=None)
    second = SimpleNamespace(v=None)
    keep = Binding([[source, "v"], [source, "v"], [], [first, "v"]])
    drop = Binding([[source, "v"], [source, "v"], [], [second, "v"]])

    drop.teardown()
    source.v = 3

    assert first.v == [3]
    assert second.v is None
    assert keep.active
