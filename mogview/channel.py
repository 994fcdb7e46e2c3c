"""Instant, unbuffered channels.

A :class:`Transmitter` delivers every message straight to the responders of
all its linked :class:`Receiver` objects. Nothing is queued and nothing is
polled.

Fold functions receive a :class:`Shared` cell holding their state and
change it in place through ``state.value``. Filtering functions return
``None`` to send nothing.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Iterable, Optional, TypeVar

log = logging.getLogger(__name__)

A = TypeVar("A")
B = TypeVar("B")
T = TypeVar("T")

_PENDING_TASKS: set = set()


@dataclass
class Shared(Generic[T]):
    """A mutable cell that several responders may share."""

    value: T


def new_shared(init: T) -> Shared[T]:
    """Wrap ``init`` in a :class:`Shared` cell."""
    return Shared(init)


def wrap_future(awaitable: Awaitable[Optional[B]]) -> Awaitable[Optional[B]]:
    """Mark ``awaitable`` as the optional future result of an async fold."""
    if not inspect.isawaitable(awaitable):
        raise TypeError(f"expected an awaitable, got {type(awaitable).__name__}")
    return awaitable


def _discard(awaitable: Any) -> None:
    if inspect.iscoroutine(awaitable):
        awaitable.close()


def _spawn(run: Callable[[Any], Awaitable[None]], awaitable: Any) -> Optional[asyncio.Task]:
    """Drive ``run(awaitable)`` on the running loop, or drop it if none runs."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        log.warning("no running event loop; asynchronous message dropped")
        _discard(awaitable)
        return None
    task = loop.create_task(run(awaitable))
    _PENDING_TASKS.add(task)
    task.add_done_callback(_PENDING_TASKS.discard)
    return task


class _Responders(Generic[A]):
    """The responders of every receiver linked to one set of transmitters."""

    def __init__(self) -> None:
        self._next_key = 0
        self._branches: dict[int, Callable[[A], None]] = {}

    def new_key(self) -> int:
        key = self._next_key
        self._next_key += 1
        return key

    def insert(self, key: int, f: Callable[[A], None]) -> None:
        self._branches[key] = f

    def remove(self, key: int) -> None:
        self._branches.pop(key, None)

    def send(self, msg: A) -> None:
        for f in list(self._branches.values()):
            f(msg)


class Transmitter(Generic[A]):
    """Sends messages instantly to all linked receivers."""

    def __init__(self) -> None:
        self._responders: _Responders[A] = _Responders()

    @classmethod
    def _linked(cls, responders: _Responders[A]) -> "Transmitter[A]":
        tx = cls.__new__(cls)
        tx._responders = responders
        return tx

    def spawn_recv(self) -> "Receiver[A]":
        """Create a receiver linked to this transmitter."""
        return Receiver._linked(self._responders)

    def send(self, msg: A) -> None:
        """Send a message to every linked receiver."""
        self._responders.send(msg)

    def send_many(self, msgs: Iterable[A]) -> None:
        """Send each of ``msgs`` in turn."""
        for msg in msgs:
            self.send(msg)

    def send_async(self, awaitable: Awaitable[A]) -> Optional[asyncio.Task]:
        """Await ``awaitable`` on the running event loop, then send its result.

        Without a running loop the awaitable is dropped with a warning and
        ``None`` is returned.
        """

        async def run(aw: Awaitable[A]) -> None:
            self.send(await aw)

        return _spawn(run, awaitable)

    # contra_* family: new transmitters that feed this one

    def contra_filter_fold_shared(
        self, var: Shared[T], f: Callable[[Shared[T], B], Optional[A]]
    ) -> "Transmitter[B]":
        """Return a transmitter of ``B`` folding over ``var`` into this one."""
        tev, rev = txrx()

        def respond(ev: B) -> None:
            result = f(var, ev)
            if result is not None:
                self.send(result)

        rev.respond(respond)
        return tev

    def contra_filter_fold(
        self, init: T, f: Callable[[Shared[T], B], Optional[A]]
    ) -> "Transmitter[B]":
        """Return a transmitter of ``B`` folding over private state into this one."""
        return self.contra_filter_fold_shared(Shared(init), f)

    def contra_fold(self, init: T, f: Callable[[Shared[T], B], A]) -> "Transmitter[B]":
        """Return a transmitter of ``B`` whose folded output always goes here."""
        return self.contra_filter_fold(init, f)

    def contra_filter_map(self, f: Callable[[B], Optional[A]]) -> "Transmitter[B]":
        """Return a transmitter of ``B`` that maps and filters into this one."""
        return self.contra_filter_fold(None, lambda _state, ev: f(ev))

    def contra_map(self, f: Callable[[B], A]) -> "Transmitter[B]":
        """Return a transmitter of ``B`` that maps every message into this one."""
        return self.contra_filter_map(f)

    # wire_* family: connect this transmitter to an existing receiver

    def wire_filter_fold_shared(
        self, rb: "Receiver[B]", var: Shared[T], f: Callable[[Shared[T], A], Optional[B]]
    ) -> None:
        """Send to ``rb`` through a filtering fold over shared state."""
        self.spawn_recv().forward_filter_fold_shared(rb.new_trns(), var, f)

    def wire_filter_fold(
        self, rb: "Receiver[B]", init: T, f: Callable[[Shared[T], A], Optional[B]]
    ) -> None:
        """Send to ``rb`` through a filtering fold over private state."""
        self.spawn_recv().forward_filter_fold(rb.new_trns(), init, f)

    def wire_fold(self, rb: "Receiver[B]", init: T, f: Callable[[Shared[T], A], B]) -> None:
        """Send to ``rb`` through a fold over private state."""
        self.spawn_recv().forward_fold(rb.new_trns(), init, f)

    def wire_fold_shared(
        self, rb: "Receiver[B]", var: Shared[T], f: Callable[[Shared[T], A], B]
    ) -> None:
        """Send to ``rb`` through a fold over shared state."""
        self.spawn_recv().forward_fold_shared(rb.new_trns(), var, f)

    def wire_filter_map(self, rb: "Receiver[B]", f: Callable[[A], Optional[B]]) -> None:
        """Send to ``rb`` through a filtering map."""
        self.spawn_recv().forward_filter_map(rb.new_trns(), f)

    def wire_map(self, rb: "Receiver[B]", f: Callable[[A], B]) -> None:
        """Send to ``rb`` through a map."""
        self.spawn_recv().forward_map(rb.new_trns(), f)

    def wire_filter_fold_async(
        self,
        rb: "Receiver[B]",
        init: T,
        f: Callable[[Shared[T], A], Optional[Awaitable[Optional[B]]]],
        h: Callable[[Shared[T], Optional[B]], None],
    ) -> None:
        """Send to ``rb`` through a fold that may start asynchronous work."""
        self.spawn_recv().forward_filter_fold_async(rb.new_trns(), init, f, h)


class _MessageFuture(Generic[A]):
    """Awaitable for the next message arriving on a receiver."""

    def __init__(self, receiver: "Receiver[A]") -> None:
        self._receiver = receiver
        self._has_value = False
        self._value: Optional[A] = None
        self._waiter: Optional[asyncio.Future] = None
        receiver.respond(self._on_message)

    def _on_message(self, msg: A) -> None:
        self._value = msg
        self._has_value = True
        if self._waiter is not None and not self._waiter.done():
            self._waiter.set_result(None)

    def __await__(self):
        while not self._has_value:
            self._waiter = asyncio.get_running_loop().create_future()
            yield from self._waiter.__await__()
        self._receiver.drop_responder()
        return self._value


class Receiver(Generic[A]):
    """Receives messages instantly through a single responder."""

    def __init__(self) -> None:
        self._responders: _Responders[A] = _Responders()
        self._key = self._responders.new_key()

    @classmethod
    def _linked(cls, responders: _Responders[A]) -> "Receiver[A]":
        rx = cls.__new__(cls)
        rx._responders = responders
        rx._key = responders.new_key()
        return rx

    def respond(self, f: Callable[[A], None]) -> None:
        """Set the function run on each received message, replacing any previous one."""
        self._responders.insert(self._key, f)

    def respond_shared(self, var: Shared[T], f: Callable[[Shared[T], A], None]) -> None:
        """Respond with a function that also receives the shared ``var``."""
        self.respond(lambda msg: f(var, msg))

    def drop_responder(self) -> None:
        """Remove this receiver's responder."""
        self._responders.remove(self._key)

    def new_trns(self) -> Transmitter[A]:
        """Create a transmitter that sends to this receiver."""
        return Transmitter._linked(self._responders)

    def branch(self) -> "Receiver[A]":
        """Create a receiver linked to the same transmitters, with no responder yet."""
        return Receiver._linked(self._responders)

    # branch_* family

    def branch_filter_fold(
        self, init: T, f: Callable[[Shared[T], A], Optional[B]]
    ) -> "Receiver[B]":
        """Branch a receiver of ``B`` through a filtering fold over private state."""
        tb, rb = txrx()
        self.branch().forward_filter_fold(tb, init, f)
        return rb

    def branch_filter_fold_shared(
        self, var: Shared[T], f: Callable[[Shared[T], A], Optional[B]]
    ) -> "Receiver[B]":
        """Branch a receiver of ``B`` through a filtering fold over shared state."""
        tb, rb = txrx()
        self.branch().forward_filter_fold_shared(tb, var, f)
        return rb

    def branch_fold(self, init: T, f: Callable[[Shared[T], A], B]) -> "Receiver[B]":
        """Branch a receiver of ``B`` through a fold over private state."""
        tb, rb = txrx()
        self.branch().forward_fold(tb, init, f)
        return rb

    def branch_fold_shared(self, var: Shared[T], f: Callable[[Shared[T], A], B]) -> "Receiver[B]":
        """Branch a receiver of ``B`` through a fold over shared state."""
        tb, rb = txrx()
        self.branch().forward_fold_shared(tb, var, f)
        return rb

    def branch_filter_map(self, f: Callable[[A], Optional[B]]) -> "Receiver[B]":
        """Branch a receiver of ``B`` through a filtering map."""
        tb, rb = txrx()
        self.branch().forward_filter_map(tb, f)
        return rb

    def branch_map(self, f: Callable[[A], B]) -> "Receiver[B]":
        """Branch a receiver of ``B`` through a map."""
        tb, rb = txrx()
        self.branch().forward_map(tb, f)
        return rb

    # forward_* family

    def forward_filter_fold_shared(
        self, tx: Transmitter[B], var: Shared[T], f: Callable[[Shared[T], A], Optional[B]]
    ) -> None:
        """Forward to ``tx`` through a filtering fold over shared state."""

        def respond(msg: A) -> None:
            result = f(var, msg)
            if result is not None:
                tx.send(result)

        self.respond(respond)

    def forward_filter_fold(
        self, tx: Transmitter[B], init: T, f: Callable[[Shared[T], A], Optional[B]]
    ) -> None:
        """Forward to ``tx`` through a filtering fold over private state."""
        self.forward_filter_fold_shared(tx, Shared(init), f)

    def forward_fold(self, tx: Transmitter[B], init: T, f: Callable[[Shared[T], A], B]) -> None:
        """Forward to ``tx`` through a fold over private state."""
        self.forward_filter_fold(tx, init, f)

    def forward_fold_shared(
        self, tx: Transmitter[B], var: Shared[T], f: Callable[[Shared[T], A], B]
    ) -> None:
        """Forward to ``tx`` through a fold over shared state."""
        self.forward_filter_fold_shared(tx, var, f)

    def forward_filter_map(self, tx: Transmitter[B], f: Callable[[A], Optional[B]]) -> None:
        """Forward to ``tx`` through a filtering map."""
        self.forward_filter_fold(tx, None, lambda _state, msg: f(msg))

    def forward_map(self, tx: Transmitter[B], f: Callable[[A], B]) -> None:
        """Forward to ``tx`` through a map."""
        self.forward_filter_map(tx, f)

    def forward_filter_fold_async(
        self,
        tx: Transmitter[B],
        init: T,
        f: Callable[[Shared[T], A], Optional[Awaitable[Optional[B]]]],
        h: Callable[[Shared[T], Optional[B]], None],
    ) -> None:
        """Forward to ``tx`` through a fold that may return an awaitable.

        The awaitable runs on the event loop; a non-``None`` result is sent on
        ``tx``, and ``h`` is then called with the state and the result.
        """
        state = Shared(init)

        async def run(block: Awaitable[Optional[B]]) -> None:
            result = await block
            if result is not None:
                tx.send(result)
            h(state, result)

        def respond(msg: A) -> None:
            block = f(state, msg)
            if block is not None:
                _spawn(run, block)

        self.respond(respond)

    @staticmethod
    def merge(rxs: Iterable["Receiver[B]"]) -> "Receiver[B]":
        """Merge receivers: any message on any of them arrives on the result."""
        tx, rx = txrx()
        for incoming in rxs:
            incoming.branch().respond(tx.send)
        return rx

    def message(self) -> Awaitable[A]:
        """Return an awaitable for the next message received after this call."""
        return _MessageFuture(self.branch())


def recv() -> Receiver:
    """Create an unlinked receiver."""
    return Receiver()


def trns() -> Transmitter:
    """Create an unlinked transmitter."""
    return Transmitter()


def txrx() -> tuple[Transmitter, Receiver]:
    """Create a linked transmitter and receiver."""
    tx = Transmitter()
    return tx, tx.spawn_recv()