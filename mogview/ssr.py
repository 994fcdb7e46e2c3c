"""String rendering of server-side DOM nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

__all__ = ["Text", "Container", "Node", "VOID_TAGS", "tag_is_voidable", "render"]

# Tags that may be written as ``<tag />`` when they have no children.
# Writing other tags that way confuses HTML parsers.
VOID_TAGS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "command",
        "keygen",
        "source",
    }
)


def tag_is_voidable(tag: str) -> bool:
    """Return whether ``tag`` may be rendered as a self-closing void element."""
    return tag in VOID_TAGS


@dataclass
class Text:
    """A text node."""

    text: str

    def __str__(self) -> str:
        return render(self)


@dataclass
class Container:
    """An element node with attributes and children.

    An attribute whose value is ``None`` is rendered as a bare name.
    """

    name: str
    attributes: list[tuple[str, Optional[str]]] = field(default_factory=list)
    children: list["Node"] = field(default_factory=list)

    def __str__(self) -> str:
        return render(self)


Node = Union[Text, Container]


def _render_attribute(key: str, value: Optional[str]) -> str:
    return key if value is None else f'{key}="{value}"'


def render(node: Node) -> str:
    """Render ``node`` and its children as an HTML string."""
    if isinstance(node, Text):
        return node.text
    if not isinstance(node, Container):
        raise TypeError(f"cannot render {type(node).__name__} as a node")

    if node.attributes:
        atts = " ".join(_render_attribute(key, value) for key, value in node.attributes)
        opening = f"{node.name} {atts}"
    else:
        opening = node.name

    if not node.children:
        if tag_is_voidable(node.name):
            return f"<{opening} />"
        return f"<{opening}></{node.name}>"

    kids = " ".join(render(child).strip() for child in node.children)
    return f"<{opening}>{kids}</{node.name}>"