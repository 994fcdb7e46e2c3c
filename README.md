# mogview

Instant, synchronous message channels, values that change over time
("effects"), and plain HTML node rendering.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Channels: `mogview.channel`

A `Transmitter` sends messages and every linked `Receiver` responds at once.
No messages are queued and nothing is polled.

```python
from mogview.channel import txrx, new_shared

tx, rx = txrx()
count = new_shared(0)

def bump(state, _msg):
    state.value += 1

rx.respond_shared(count, bump)
tx.send(None)
tx.send(None)
assert count.value == 2
```

- `txrx()` creates a linked pair; `trns()` and `recv()` create unlinked ends.
  `Transmitter.spawn_recv()` and `Receiver.new_trns()` link new partners.
- A receiver has one responder, set with `respond` or `respond_shared` and
  removed with `drop_responder`. `Receiver.branch()` creates another receiver
  on the same transmitters with its own responder.
- Fold functions take a `Shared` cell and change its `value` in place.
  Filtering variants send nothing when the function returns `None`.
- `Transmitter.contra_map`, `contra_filter_map`, `contra_fold`,
  `contra_filter_fold` and `contra_filter_fold_shared` return a new
  transmitter that feeds the original.
- `Receiver.branch_map`, `branch_filter_map`, `branch_fold`,
  `branch_filter_fold`, `branch_fold_shared` and `branch_filter_fold_shared`
  return a new receiver fed by the original.
- `Transmitter.wire_*` and `Receiver.forward_*` connect two existing ends.
- `Receiver.merge(rxs)` joins several receivers into one.
- `Receiver.message()` returns an awaitable for the next message.
- `Transmitter.send_async(awaitable)` and the `*_filter_fold_async` methods
  run on the running asyncio event loop. If no loop is running, the awaitable
  is dropped and a warning is logged.

## Pairs: `mogview.pairs`

These shortcuts return a linked `(tx, rx)` with a transformation between the
two ends: `txrx_map`, `txrx_filter_map`, `txrx_fold`, `txrx_fold_shared`,
`txrx_filter_fold` and `txrx_filter_fold_shared`.

```python
from mogview.pairs import txrx_fold

def clicks(state, _event):
    state.value += 1
    return f"Clicked {state.value} times"

tx, rx = txrx_fold(0, clicks)
seen = []
rx.respond(seen.append)
tx.send("click")
assert seen == ["Clicked 1 times"]
```

## Effects: `mogview.effect`

An `Effect` holds a value now (`now`), a receiver that delivers values later
(`later`), or both. It raises `ValueError` if it has neither. `to_effect`
turns a plain value, a receiver, or a `(value, receiver)` pair into an
`Effect`. `Effect.branch()` copies an effect and gives the copy its own
branch of the receiver.

## HTML nodes: `mogview.ssr`

`Text` and `Container` are plain nodes. `render` turns them into an HTML
string:

```python
from mogview.ssr import Container, Text, render

page = Container("div", [("class", "hero"), ("hidden", None)], [Text("hi")])
assert render(page) == '<div class="hero" hidden>hi</div>'
assert render(Container("br")) == "<br />"
assert render(Container("p")) == "<p></p>"
```

An attribute with the value `None` is written as a bare name. Children are
trimmed and joined with single spaces. Text is written as given, with no
escaping. Only the tags in `VOID_TAGS` (see `tag_is_voidable`) are written
self-closing when they are empty.

## View state: `mogview.internals`

`ViewInternals` holds the state behind one view: its children (`slots`), its
event registrations, and a `ServerNode` with the element name or text and the
attributes and styles.

- `add_child`, `add_child_at`, `remove_child_at`, `remove_all_children` and
  `replace_child_at` manage the children. Indexes past the end append or
  return `None`. Negative indexes raise `ValueError`.
- `add_attribute`, `add_boolean_attribute` and `add_style` take an effect, or
  anything `to_effect` accepts. They store the value in a `Shared` cell, and
  later messages on the receiver update that cell.
- `add_event_on_this`, `add_event_on_window` and `add_event_on_document`
  only record the event name and the transmitter.

## What this package does not do

It has no view tree type that turns `ViewInternals` into `ssr` nodes or HTML.
It has no way to patch children by sending messages, and no builder for view
descriptions. To render HTML, convert the `ServerNode` contents into
`Container` and `Text` nodes yourself and pass them to `render`. Recorded
events are never fired: there is no browser, window or document behind them.