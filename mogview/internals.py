"""Server-side state held behind a view: its node, children and events."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, NamedTuple, Optional

from .channel import Shared, Transmitter
from .effect import Effect, to_effect

__all__ = ["ServerNode", "ViewInternals"]


@dataclass
class ServerNode:
    """The renderable part of a view: an element name or a text, plus attributes and styles.

    ``text`` is ``None`` for elements. Attribute and style values live in
    :class:`~mogview.channel.Shared` cells so that receivers can update them.
    An attribute cell holding ``None`` is rendered as a bare name.
    """

    name: str = ""
    text: Optional[str] = None
    attributes: list[tuple[str, Shared]] = field(default_factory=list)
    styles: list[tuple[str, Shared]] = field(default_factory=list)

    @property
    def is_text(self) -> bool:
        """Whether this node is a text node."""
        return self.text is not None


class _StoredEvent(NamedTuple):
    target: str
    name: str
    transmitter: Transmitter


def _check_index(index: int) -> None:
    if index < 0:
        raise ValueError(f"index must not be negative, got {index}")


class ViewInternals:
    """Children, event registrations and server node of one view.

    Children are view objects; each must carry its own ``internals``
    attribute so that :meth:`replace_child_at` can exchange contents.
    """

    def __init__(self, server_node: Optional[ServerNode] = None) -> None:
        self.slots: list[Any] = []
        self.callbacks: list[_StoredEvent] = []
        self.server_node: ServerNode = server_node if server_node is not None else ServerNode()

    def _swap(self, other: "ViewInternals") -> None:
        self.slots, other.slots = other.slots, self.slots
        self.callbacks, other.callbacks = other.callbacks, self.callbacks
        self.server_node, other.server_node = other.server_node, self.server_node

    # children

    def add_child(self, child: Any) -> None:
        """Append ``child`` to the children."""
        self.slots.append(child)

    def add_child_at(self, index: int, child: Any) -> None:
        """Insert ``child`` at ``index``, or append it when ``index`` is past the end."""
        _check_index(index)
        if index >= len(self.slots):
            self.add_child(child)
        else:
            self.slots.insert(index, child)

    def remove_child_at(self, index: int) -> Optional[Any]:
        """Remove and return the child at ``index``, or ``None`` if there is none."""
        _check_index(index)
        if index >= len(self.slots):
            return None
        return self.slots.pop(index)

    def remove_all_children(self) -> list[Any]:
        """Remove every child and return them in order."""
        children, self.slots = self.slots, []
        return children

    def replace_child_at(self, index: int, new_child: Any) -> Optional[Any]:
        """Put the contents of ``new_child`` into the child at ``index``.

        The stored child object stays in place but takes on the internals of
        ``new_child``; ``new_child`` receives the old internals and is
        returned. Returns ``None`` when there is no child at ``index``.
        """
        _check_index(index)
        if index >= len(self.slots):
            return None
        old_child = self.slots[index]
        old_child.internals._swap(new_child.internals)
        return new_child

    # events

    def add_event_on_this(self, ev_name: str, tx: Transmitter) -> None:
        """Register ``tx`` for the named event on this view's own node."""
        self.callbacks.append(_StoredEvent("this", ev_name, tx))

    def add_event_on_window(self, ev_name: str, tx: Transmitter) -> None:
        """Register ``tx`` for the named event on the window."""
        self.callbacks.append(_StoredEvent("window", ev_name, tx))

    def add_event_on_document(self, ev_name: str, tx: Transmitter) -> None:
        """Register ``tx`` for the named event on the document."""
        self.callbacks.append(_StoredEvent("document", ev_name, tx))

    # styles and attributes

    def add_style(self, name: str, effect: Any) -> None:
        """Add a style whose value is given now, later, or both.

        Only a style with a value now is written out; later values update it.
        """
        eff: Effect = to_effect(effect)
        var: Shared[str] = Shared("")
        if eff.now is not None:
            var.value = str(eff.now)
            self.server_node.styles.append((name, var))
        if eff.later is not None:

            def update(value: str) -> None:
                var.value = str(value)

            eff.later.respond(update)

    def add_attribute(self, name: str, effect: Any) -> None:
        """Add an attribute whose value is given now, later, or both."""
        eff: Effect = to_effect(effect)
        var: Shared[Optional[str]] = Shared(None)
        self.server_node.attributes.append((name, var))
        if eff.now is not None:
            var.value = str(eff.now)
        if eff.later is not None:

            def update(value: str) -> None:
                var.value = str(value)

            eff.later.respond(update)

    def add_boolean_attribute(self, name: str, effect: Any) -> None:
        """Add a valueless attribute that is present while its effect is true."""
        eff: Effect = to_effect(effect)
        var: Shared[Optional[str]] = Shared(None)
        self.server_node.attributes.append((name, var))
        if eff.now is True:
            var.value = ""
        if eff.later is not None:

            def update(present: bool) -> None:
                var.value = "" if present else None

            eff.later.respond(update)