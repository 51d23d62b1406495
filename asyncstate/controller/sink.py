"""
State sinks
===========

Seam between a controller and whatever renders its state.

A controller only needs to publish a value, read the current value back and
let observers subscribe. StateCell is the in-memory implementation; a UI
binding implements StateSink on top of its own subscription mechanism.
"""

from __future__ import annotations

import typing

from .._types import Listener, Unsubscribe


@typing.runtime_checkable
class StateSink[S](typing.Protocol):
    """Publish / read / subscribe capability for one operation slot."""

    def get(self) -> S: ...

    def set(self, state: S, /) -> None: ...

    def subscribe(self, listener: Listener[S], /) -> Unsubscribe: ...


class StateCell[S]:
    """
    Holds the current state and notifies listeners on change.

    Publishing the very object already held is a no-op (no notification),
    so repeated Loading singletons do not re-render observers.
    """

    __slots__ = ("_state", "_listeners")

    def __init__(self, initial: S, /) -> None:
        self._state = initial
        self._listeners: list[Listener[S]] = []

    def get(self) -> S:
        return self._state

    def set(self, state: S, /) -> None:
        if state is self._state:
            return
        self._state = state
        for listener in tuple(self._listeners):
            listener(state)

    def subscribe(self, listener: Listener[S], /) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def __repr__(self) -> str:
        return f"StateCell({self._state!r}, listeners={len(self._listeners)})"


__all__ = ("StateSink", "StateCell")
