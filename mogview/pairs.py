"""Constructors for linked transmitter and receiver pairs of different types.

Each function returns ``(tx, rx)``. Messages sent on ``tx`` pass through the
given function, and what comes out arrives on ``rx``. Filtering variants
send nothing when the function returns ``None``. Fold functions receive a
:class:`~mogview.channel.Shared` cell and change its ``value`` in place.
"""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

from .channel import Receiver, Shared, Transmitter, txrx

A = TypeVar("A")
B = TypeVar("B")
T = TypeVar("T")

__all__ = [
    "txrx_filter_fold",
    "txrx_filter_fold_shared",
    "txrx_fold",
    "txrx_fold_shared",
    "txrx_filter_map",
    "txrx_map",
]


def txrx_filter_fold(
    init: T, f: Callable[[Shared[T], A], Optional[B]]
) -> tuple[Transmitter[A], Receiver[B]]:
    """Pair linked through a filtering fold over private state seeded by ``init``."""
    ta, ra = txrx()
    tb, rb = txrx()
    ra.forward_filter_fold(tb, init, f)
    return ta, rb


def txrx_filter_fold_shared(
    var: Shared[T], f: Callable[[Shared[T], A], Optional[B]]
) -> tuple[Transmitter[A], Receiver[B]]:
    """Pair linked through a filtering fold over the shared cell ``var``."""
    ta, ra = txrx()
    tb, rb = txrx()
    ra.forward_filter_fold_shared(tb, var, f)
    return ta, rb


def txrx_fold(init: T, f: Callable[[Shared[T], A], B]) -> tuple[Transmitter[A], Receiver[B]]:
    """Pair linked through a fold over private state seeded by ``init``."""
    ta, ra = txrx()
    tb, rb = txrx()
    ra.forward_fold(tb, init, f)
    return ta, rb


def txrx_fold_shared(
    var: Shared[T], f: Callable[[Shared[T], A], B]
) -> tuple[Transmitter[A], Receiver[B]]:
    """Pair linked through a fold over the shared cell ``var``."""
    ta, ra = txrx()
    tb, rb = txrx()
    ra.forward_fold_shared(tb, var, f)
    return ta, rb


def txrx_filter_map(f: Callable[[A], Optional[B]]) -> tuple[Transmitter[A], Receiver[B]]:
    """Pair linked through a filtering map."""
    ta, ra = txrx()
    tb, rb = txrx()
    ra.forward_filter_map(tb, f)
    return ta, rb


def txrx_map(f: Callable[[A], B]) -> tuple[Transmitter[A], Receiver[B]]:
    """Pair linked through a map."""
    ta, ra = txrx()
    tb, rb = txrx()
    ra.forward_map(tb, f)
    return ta, rb