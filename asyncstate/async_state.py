"""
AsyncState
==========

Loading | Success | Error: вычисление всегда уже запущено.

Use when there is no "not started" moment, e.g. data fetched on mount
(see ImmediateTaskController). Tags shared with AsyncStateN behave the same.
"""

from __future__ import annotations

import typing
from collections.abc import Callable, Sequence

from kungfu import Result

from ._family import Family
from .base import (
    Failure,
    Loading,
    ReadyState,
    Success,
    Tag,
    error,
    loading,
    success,
)

# ============================================================================
# Definitions
# ============================================================================

type AsyncState[T, E] = Loading | Success[T] | Failure[E]

_F = Family("AsyncState", frozenset({Tag.LOADING, Tag.SUCCESS, Tag.ERROR}))


# ============================================================================
# Refinements
# ============================================================================


def is_success[T, E](state: AsyncState[T, E]) -> typing.TypeGuard[Success[T]]:
    return _F.has_tag(state, Tag.SUCCESS)


def is_error[T, E](state: AsyncState[T, E]) -> typing.TypeGuard[Failure[E]]:
    return _F.has_tag(state, Tag.ERROR)


def is_loading[T, E](state: AsyncState[T, E]) -> typing.TypeGuard[Loading]:
    return _F.has_tag(state, Tag.LOADING)


def is_ready[T, E](state: AsyncState[T, E]) -> typing.TypeGuard[ReadyState[T, E]]:
    return _F.is_ready(state)


# ============================================================================
# Instance operations
# ============================================================================


def map[A, B](f: Callable[[A], B]) -> Callable[[AsyncState[A, typing.Any]], AsyncState[B, typing.Any]]:
    def run(state: AsyncState[A, typing.Any]) -> AsyncState[B, typing.Any]:
        return _F.map(f, state)

    return run


def chain_w[A, B, E2](
    f: Callable[[A], AsyncState[B, E2]],
) -> Callable[[AsyncState[A, typing.Any]], AsyncState[B, typing.Any]]:
    """Bind where f may fail with a different error type."""

    def run(state: AsyncState[A, typing.Any]) -> AsyncState[B, typing.Any]:
        return _F.chain(f, state)

    return run


def chain[A, B, E](
    f: Callable[[A], AsyncState[B, E]],
) -> Callable[[AsyncState[A, E]], AsyncState[B, E]]:
    return chain_w(f)


def map_left[E, E1](f: Callable[[E], E1]) -> Callable[[AsyncState[typing.Any, E]], AsyncState[typing.Any, E1]]:
    def run(state: AsyncState[typing.Any, E]) -> AsyncState[typing.Any, E1]:
        return _F.map_left(f, state)

    return run


# ============================================================================
# Fold
# ============================================================================


def match_i[T, E, B](
    state: AsyncState[T, E],
    *,
    loading: Callable[[], B],
    success: Callable[[T], B],
    error: Callable[[E], B],
) -> B:
    """Fold the state: exactly one handler per tag of the family."""
    return _F.match(
        state,
        {
            Tag.LOADING: loading,
            Tag.SUCCESS: success,
            Tag.ERROR: error,
        },
    )


def match[T, E, B](
    *,
    loading: Callable[[], B],
    success: Callable[[T], B],
    error: Callable[[E], B],
) -> Callable[[AsyncState[T, E]], B]:
    def run(state: AsyncState[T, E]) -> B:
        return match_i(state, loading=loading, success=success, error=error)

    return run


# ============================================================================
# Multi-state
# ============================================================================


@typing.overload
def combine[A1, A2, E1, E2, B](
    states: tuple[AsyncState[A1, E1], AsyncState[A2, E2]],
    fn: Callable[[A1, A2], B],
    /,
) -> AsyncState[B, E1 | E2]: ...


@typing.overload
def combine[A1, A2, A3, E1, E2, E3, B](
    states: tuple[AsyncState[A1, E1], AsyncState[A2, E2], AsyncState[A3, E3]],
    fn: Callable[[A1, A2, A3], B],
    /,
) -> AsyncState[B, E1 | E2 | E3]: ...


@typing.overload
def combine[A1, A2, A3, A4, E1, E2, E3, E4, B](
    states: tuple[AsyncState[A1, E1], AsyncState[A2, E2], AsyncState[A3, E3], AsyncState[A4, E4]],
    fn: Callable[[A1, A2, A3, A4], B],
    /,
) -> AsyncState[B, E1 | E2 | E3 | E4]: ...


def combine(
    states: Sequence[AsyncState[typing.Any, typing.Any]],
    fn: Callable[..., typing.Any],
    /,
) -> AsyncState[typing.Any, typing.Any]:
    """First Error, else first Loading, else Success(fn(*values))."""
    return _F.combine(states, fn)


# ============================================================================
# kungfu interop
# ============================================================================


def from_either[T, E](result: Result[T, E]) -> AsyncState[T, E]:
    return _F.from_either(result)


def to_either[T, E, L](
    state: AsyncState[T, E],
    on_loading: Callable[[], L] | None = None,
) -> Result[T, E | L]:
    """
    Success -> Ok, Error -> Error, Loading -> Error(on_loading()).

    NOTE: Loading without on_loading raises NotReadyError.
    """
    return _F.to_either(state, on_loading)


# ============================================================================
# Python interop
# ============================================================================


def from_nullable[T, E](default: E) -> Callable[[T | None], AsyncState[T, E]]:
    """None -> Error(default), anything else -> Success."""

    def run(value: T | None) -> AsyncState[T, E]:
        return _F.from_nullable(error(default), value)

    return run


def get_or_else[T](on_other: Callable[[], T]) -> Callable[[AsyncState[T, typing.Any]], T]:
    def run(state: AsyncState[T, typing.Any]) -> T:
        return _F.get_or_else(on_other, state)

    return run


def get_or_else_w[T, B](on_other: Callable[[], B]) -> Callable[[AsyncState[T, typing.Any]], T | B]:
    def run(state: AsyncState[T, typing.Any]) -> T | B:
        return _F.get_or_else(on_other, state)

    return run


def get_tag(state: AsyncState[typing.Any, typing.Any]) -> Tag:
    return _F.get_tag(state)


__all__ = (
    "AsyncState",
    "loading",
    "success",
    "error",
    "is_success",
    "is_error",
    "is_loading",
    "is_ready",
    "map",
    "chain",
    "chain_w",
    "map_left",
    "match",
    "match_i",
    "combine",
    "from_either",
    "to_either",
    "from_nullable",
    "get_or_else",
    "get_or_else_w",
    "get_tag",
)
