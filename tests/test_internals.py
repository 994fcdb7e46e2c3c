from dataclasses import dataclass, field

import pytest

from mogview.channel import txrx
from mogview.effect import Effect
from mogview.internals import ServerNode, ViewInternals


@dataclass
class _Child:
    label: str
    internals: ViewInternals = field(default_factory=ViewInternals)


def _labels(internals):
    return [child.label for child in internals.slots]


def _filled(*labels):
    internals = ViewInternals()
    for label in labels:
        internals.add_child(_Child(label))
    return internals


def test_default_server_node_is_empty_element():
    internals = ViewInternals()
    assert internals.server_node == ServerNode()
    assert internals.server_node.is_text is False
    assert internals.slots == []


def test_text_server_node():
    node = ServerNode(text="hi")
    assert node.is_text is True


def test_add_child_appends_in_order():
    internals = _filled("a", "b", "c")
    assert _labels(internals) == ["a", "b", "c"]


def test_add_child_at_inserts_before():
    internals = _filled("a", "c")
    internals.add_child_at(1, _Child("b"))
    assert _labels(internals) == ["a", "b", "c"]


def test_add_child_at_past_end_appends():
    internals = _filled("a")
    internals.add_child_at(10, _Child("z"))
    assert _labels(internals) == ["a", "z"]


def test_add_child_at_negative_index_raises():
    with pytest.raises(ValueError):
        ViewInternals().add_child_at(-1, _Child("x"))


def test_remove_child_at_returns_child():
    internals = _filled("a", "b", "c")
    removed = internals.remove_child_at(1)
    assert removed.label == "b"
    assert _labels(internals) == ["a", "c"]


def test_remove_child_at_out_of_range_returns_none():
    internals = _filled("a")
    assert internals.remove_child_at(1) is None
    assert _labels(internals) == ["a"]


def test_remove_all_children():
    internals = _filled("a", "b")
    removed = internals.remove_all_children()
    assert [c.label for c in removed] == ["a", "b"]
    assert internals.slots == []


def test_replace_child_at_swaps_internals():
    internals = _filled("a", "b")
    old = internals.slots[1]
    old_inner = old.internals
    new = _Child("n")
    new_inner = new.internals
    new_inner.server_node.name = "li"

    returned = internals.replace_child_at(1, new)

    assert returned is new
    assert internals.slots[1] is old
    assert old.internals.server_node.name == "li"
    assert new.internals.server_node.name == ""
    assert old.internals is old_inner
    assert new.internals is new_inner


def test_replace_child_at_out_of_range():
    internals = _filled("a")
    assert internals.replace_child_at(3, _Child("x")) is None
    assert _labels(internals) == ["a"]


def test_events_are_stored_in_order():
    internals = ViewInternals()
    tx, _rx = txrx()
    internals.add_event_on_this("click", tx)
    internals.add_event_on_window("load", tx)
    internals.add_event_on_document("keyup", tx)
    assert [c.target for c in internals.callbacks] == ["this", "window", "document"]
    assert [c.name for c in internals.callbacks] == ["click", "load", "keyup"]
    assert all(c.transmitter is tx for c in internals.callbacks)


def test_style_now_and_later():
    internals = ViewInternals()
    tx, rx = txrx()
    internals.add_style("float", Effect(now="left", later=rx))
    name, var = internals.server_node.styles[0]
    assert name == "float"
    assert var.value == "left"
    tx.send("right")
    assert var.value == "right"


def test_style_only_later_is_not_written():
    internals = ViewInternals()
    tx, rx = txrx()
    internals.add_style("display", rx)
    tx.send("none")
    assert internals.server_node.styles == []


def test_attribute_now_and_later():
    internals = ViewInternals()
    tx, rx = txrx()
    internals.add_attribute("class", ("p_class", rx))
    name, var = internals.server_node.attributes[0]
    assert name == "class"
    assert var.value == "p_class"
    tx.send("my_p_class")
    assert var.value == "my_p_class"


def test_attribute_only_later_starts_empty():
    internals = ViewInternals()
    tx, rx = txrx()
    internals.add_attribute("id", rx)
    _, var = internals.server_node.attributes[0]
    assert var.value is None
    tx.send("main")
    assert var.value == "main"


def test_boolean_attribute_toggles():
    internals = ViewInternals()
    tx, rx = txrx()
    internals.add_boolean_attribute("checked", Effect(now=True, later=rx))
    name, var = internals.server_node.attributes[0]
    assert name == "checked"
    assert var.value == ""
    tx.send(False)
    assert var.value is None
    tx.send(True)
    assert var.value == ""


def test_boolean_attribute_false_now_is_absent():
    internals = ViewInternals()
    internals.add_boolean_attribute("disabled", False)
    _, var = internals.server_node.attributes[0]
    assert var.value is None


def test_attribute_without_any_value_raises():
    with pytest.raises(ValueError):
        ViewInternals().add_attribute("id", None)