"""Values known now, values delivered later by a receiver, or both."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from .channel import Receiver

__all__ = ["Effect", "to_effect"]

T = TypeVar("T")


@dataclass
class Effect(Generic[T]):
    """A value now, forthcoming values from a receiver, or both.

    ``now`` is ``None`` when there is no value now; ``later`` is ``None``
    when no values will follow. At least one of them must be given.
    """

    now: Optional[T] = None
    later: Optional[Receiver[T]] = None

    def __post_init__(self) -> None:
        if self.now is None and self.later is None:
            raise ValueError("an effect needs a value now, a receiver for later, or both")

    def branch(self) -> "Effect[T]":
        """Copy this effect, giving the copy its own branch of the receiver."""
        later = self.later.branch() if self.later is not None else None
        return Effect(self.now, later)


def to_effect(value: Any) -> Effect:
    """Convert ``value`` into an :class:`Effect`.

    An effect is returned as is, a receiver becomes values later, a pair of a
    value and a receiver becomes both, and anything else is a value now.
    """
    if isinstance(value, Effect):
        return value
    if isinstance(value, Receiver):
        return Effect(later=value)
    if isinstance(value, tuple) and len(value) == 2 and isinstance(value[1], Receiver):
        return Effect(now=value[0], later=value[1])
    return Effect(now=value)