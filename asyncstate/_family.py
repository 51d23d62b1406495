"""
Shared combinator logic
=======================

Один набор комбинаторов для всех четырёх семейств состояний.

A `Family` is the set of tags a union admits. Each family module
(async_state_n, async_state, async_state_s, async_state_sn) holds one
`Family` instance and exposes typed, curried wrappers around its methods.
The wrappers carry the static guarantees (required fold handlers, narrowed
unions); the methods here carry the runtime ones.
"""

from __future__ import annotations

import typing
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from kungfu import Error, Nothing, Ok, Option, Result, Some

from ._errors import ForeignStateError, MissingHandlerError, NotReadyError
from .base import (
    AnyState,
    Failure,
    Loading,
    NotInitiated,
    ReadyState,
    Success,
    Tag,
    error,
    loading,
    success,
)

# Resolution order for combine(): first match wins
_COMBINE_PRECEDENCE = (Tag.ERROR, Tag.LOADING, Tag.NOT_INITIATED)

_MIN_COMBINE = 2
_MAX_COMBINE = 4


@dataclass(frozen=True, slots=True)
class Family:
    """Closed set of tags with the combinators specialised to it."""

    name: str
    tags: frozenset[Tag]

    def admits(self, state: typing.Any) -> bool:
        return isinstance(state, (NotInitiated, Loading, Success, Failure)) and state.type in self.tags

    def check[S](self, state: S) -> S:
        """Return state unchanged, raise ForeignStateError if not a member."""
        if not self.admits(state):
            raise ForeignStateError(state, self.name)
        return state

    # Refinements

    def has_tag(self, state: typing.Any, tag: Tag) -> bool:
        return self.admits(state) and state.type is tag

    def is_ready(self, state: typing.Any) -> bool:
        return self.has_tag(state, Tag.SUCCESS) or self.has_tag(state, Tag.ERROR)

    # Functor / monad

    def map(self, f: Callable[[typing.Any], typing.Any], state: AnyState) -> AnyState:
        match self.check(state):
            case Success(value):
                return success(f(value))
            case _:
                return state

    def chain(self, f: Callable[[typing.Any], AnyState], state: AnyState) -> AnyState:
        match self.check(state):
            case Success(value):
                return f(value)
            case _:
                return state

    def map_left(self, f: Callable[[typing.Any], typing.Any], state: AnyState) -> AnyState:
        match self.check(state):
            case Failure(err):
                return error(f(err))
            case _:
                return state

    # Fold

    def match(
        self,
        state: AnyState,
        handlers: Mapping[Tag, Callable[..., typing.Any] | None],
    ) -> typing.Any:
        handler = handlers.get(self.check(state).type)
        if handler is None:
            raise MissingHandlerError(state.type)

        match state:
            case Success(value):
                return handler(value)
            case Failure(err):
                return handler(err)
            case Loading() | NotInitiated():
                return handler()
            case _ as unreachable:
                typing.assert_never(unreachable)

    # Multi-state

    def combine(self, states: Sequence[AnyState], fn: Callable[..., typing.Any]) -> AnyState:
        """
        Resolve several states into one.

        Precedence: first Error, then first Loading, then first NotInitiated.
        Only when every state is Success is fn applied to the values.
        """
        if not _MIN_COMBINE <= len(states) <= _MAX_COMBINE:
            raise ValueError(
                f"combine() takes {_MIN_COMBINE} to {_MAX_COMBINE} states, got {len(states)}"
            )
        for state in states:
            self.check(state)

        for tag in _COMBINE_PRECEDENCE:
            for state in states:
                if state.type is tag:
                    return state

        values = [typing.cast(Success[typing.Any], state).value for state in states]
        return success(fn(*values))

    # Conversions

    def from_either(self, result: Result[typing.Any, typing.Any]) -> ReadyState[typing.Any, typing.Any]:
        match result:
            case Ok(value):
                return success(value)
            case Error(err):
                return error(err)
            case _:
                raise TypeError(f"Expected Ok or Error, got {result!r}")

    def to_either(
        self,
        state: AnyState,
        on_loading: Callable[[], typing.Any] | None = None,
    ) -> Result[typing.Any, typing.Any]:
        match self.check(state):
            case Success(value):
                return Ok(value)
            case Failure(err):
                return Error(err)
            case Loading() | NotInitiated():
                if on_loading is None:
                    raise NotReadyError(state)
                return Error(on_loading())
            case _ as unreachable:
                typing.assert_never(unreachable)

    def from_nullable(self, on_none: AnyState, value: typing.Any) -> AnyState:
        if value is None:
            return on_none
        return success(value)

    def from_option(self, option: Option[typing.Any]) -> AnyState:
        if isinstance(option, Some):
            return success(option.unwrap())
        return loading()

    def to_option(self, state: AnyState) -> Option[typing.Any]:
        match self.check(state):
            case Success(value):
                return Some(value)
            case _:
                return Nothing()

    def get_or_else(self, on_other: Callable[[], typing.Any], state: AnyState) -> typing.Any:
        match self.check(state):
            case Success(value):
                return value
            case _:
                return on_other()

    def get_tag(self, state: AnyState) -> Tag:
        return self.check(state).type


__all__ = ("Family",)
