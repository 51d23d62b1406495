"""
AsyncStateSN
============

NotInitiated | Loading | Success: как AsyncStateS, но с явным "ещё не начато".
"""

from __future__ import annotations

import typing
from collections.abc import Callable, Sequence

from kungfu import Option, Result

from ._family import Family
from .base import Loading, NotInitiated, Success, Tag, loading, not_initiated, success

# ============================================================================
# Definitions
# ============================================================================

type AsyncStateSN[T] = NotInitiated | Loading | Success[T]

_F = Family("AsyncStateSN", frozenset({Tag.NOT_INITIATED, Tag.LOADING, Tag.SUCCESS}))


# ============================================================================
# Refinements
# ============================================================================


def is_success[T](state: AsyncStateSN[T]) -> typing.TypeGuard[Success[T]]:
    return _F.has_tag(state, Tag.SUCCESS)


def is_loading[T](state: AsyncStateSN[T]) -> typing.TypeGuard[Loading]:
    return _F.has_tag(state, Tag.LOADING)


def is_not_initiated[T](state: AsyncStateSN[T]) -> typing.TypeGuard[NotInitiated]:
    return _F.has_tag(state, Tag.NOT_INITIATED)


# ============================================================================
# Instance operations
# ============================================================================


def map[A, B](f: Callable[[A], B]) -> Callable[[AsyncStateSN[A]], AsyncStateSN[B]]:
    def run(state: AsyncStateSN[A]) -> AsyncStateSN[B]:
        return _F.map(f, state)

    return run


def chain[A, B](f: Callable[[A], AsyncStateSN[B]]) -> Callable[[AsyncStateSN[A]], AsyncStateSN[B]]:
    """Composes computations in sequence; NotInitiated and Loading short-circuit."""

    def run(state: AsyncStateSN[A]) -> AsyncStateSN[B]:
        return _F.chain(f, state)

    return run


# ============================================================================
# Fold
# ============================================================================


def match_i[T, B](
    state: AsyncStateSN[T],
    *,
    not_initiated: Callable[[], B],
    loading: Callable[[], B],
    success: Callable[[T], B],
) -> B:
    return _F.match(
        state,
        {
            Tag.NOT_INITIATED: not_initiated,
            Tag.LOADING: loading,
            Tag.SUCCESS: success,
        },
    )


def match[T, B](
    *,
    not_initiated: Callable[[], B],
    loading: Callable[[], B],
    success: Callable[[T], B],
) -> Callable[[AsyncStateSN[T]], B]:
    def run(state: AsyncStateSN[T]) -> B:
        return match_i(state, not_initiated=not_initiated, loading=loading, success=success)

    return run


# ============================================================================
# Multi-state
# ============================================================================


@typing.overload
def combine[A1, A2, B](
    states: tuple[AsyncStateSN[A1], AsyncStateSN[A2]],
    fn: Callable[[A1, A2], B],
    /,
) -> AsyncStateSN[B]: ...


@typing.overload
def combine[A1, A2, A3, B](
    states: tuple[AsyncStateSN[A1], AsyncStateSN[A2], AsyncStateSN[A3]],
    fn: Callable[[A1, A2, A3], B],
    /,
) -> AsyncStateSN[B]: ...


@typing.overload
def combine[A1, A2, A3, A4, B](
    states: tuple[AsyncStateSN[A1], AsyncStateSN[A2], AsyncStateSN[A3], AsyncStateSN[A4]],
    fn: Callable[[A1, A2, A3, A4], B],
    /,
) -> AsyncStateSN[B]: ...


def combine(
    states: Sequence[AsyncStateSN[typing.Any]],
    fn: Callable[..., typing.Any],
    /,
) -> AsyncStateSN[typing.Any]:
    """First Loading, else first NotInitiated, else Success(fn(*values))."""
    return _F.combine(states, fn)


# ============================================================================
# kungfu interop
# ============================================================================


def from_option[T](option: Option[T]) -> AsyncStateSN[T]:
    """Nothing -> Loading, Some(a) -> Success(a)."""
    return _F.from_option(option)


def to_option[T](state: AsyncStateSN[T]) -> Option[T]:
    return _F.to_option(state)


def to_either[T, E](state: AsyncStateSN[T], on_loading: Callable[[], E]) -> Result[T, E]:
    """Success -> Ok; Loading and NotInitiated -> Error(on_loading())."""
    return _F.to_either(state, on_loading)


# ============================================================================
# Python interop
# ============================================================================


def from_nullable[T](value: T | None) -> AsyncStateSN[T]:
    """None -> Loading, anything else -> Success."""
    return _F.from_nullable(loading(), value)


def get_or_else[T](on_other: Callable[[], T]) -> Callable[[AsyncStateSN[T]], T]:
    def run(state: AsyncStateSN[T]) -> T:
        return _F.get_or_else(on_other, state)

    return run


def get_or_else_w[T, B](on_other: Callable[[], B]) -> Callable[[AsyncStateSN[T]], T | B]:
    def run(state: AsyncStateSN[T]) -> T | B:
        return _F.get_or_else(on_other, state)

    return run


def get_tag(state: AsyncStateSN[typing.Any]) -> Tag:
    return _F.get_tag(state)


__all__ = (
    "AsyncStateSN",
    "not_initiated",
    "loading",
    "success",
    "is_success",
    "is_loading",
    "is_not_initiated",
    "map",
    "chain",
    "match",
    "match_i",
    "combine",
    "from_option",
    "to_option",
    "to_either",
    "from_nullable",
    "get_or_else",
    "get_or_else_w",
    "get_tag",
)
