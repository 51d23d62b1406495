"""
AsyncStateS
===========

Loading | Success: ошибок нет или они обрабатываются в другом месте.

Typical for optional or cached lookups where "no value yet" and "still
loading" mean the same thing. kungfu.Option converts in both directions.
"""

from __future__ import annotations

import typing
from collections.abc import Callable, Sequence

from kungfu import Option, Result

from ._family import Family
from .base import Loading, Success, Tag, loading, success

# ============================================================================
# Definitions
# ============================================================================

type AsyncStateS[T] = Loading | Success[T]

_F = Family("AsyncStateS", frozenset({Tag.LOADING, Tag.SUCCESS}))


# ============================================================================
# Refinements
# ============================================================================


def is_success[T](state: AsyncStateS[T]) -> typing.TypeGuard[Success[T]]:
    return _F.has_tag(state, Tag.SUCCESS)


def is_loading[T](state: AsyncStateS[T]) -> typing.TypeGuard[Loading]:
    return _F.has_tag(state, Tag.LOADING)


# ============================================================================
# Instance operations
# ============================================================================


def map[A, B](f: Callable[[A], B]) -> Callable[[AsyncStateS[A]], AsyncStateS[B]]:
    def run(state: AsyncStateS[A]) -> AsyncStateS[B]:
        return _F.map(f, state)

    return run


def chain[A, B](f: Callable[[A], AsyncStateS[B]]) -> Callable[[AsyncStateS[A]], AsyncStateS[B]]:
    def run(state: AsyncStateS[A]) -> AsyncStateS[B]:
        return _F.chain(f, state)

    return run


# ============================================================================
# Fold
# ============================================================================


def match_i[T, B](
    state: AsyncStateS[T],
    *,
    loading: Callable[[], B],
    success: Callable[[T], B],
) -> B:
    return _F.match(state, {Tag.LOADING: loading, Tag.SUCCESS: success})


def match[T, B](
    *,
    loading: Callable[[], B],
    success: Callable[[T], B],
) -> Callable[[AsyncStateS[T]], B]:
    def run(state: AsyncStateS[T]) -> B:
        return match_i(state, loading=loading, success=success)

    return run


# ============================================================================
# Multi-state
# ============================================================================


@typing.overload
def combine[A1, A2, B](
    states: tuple[AsyncStateS[A1], AsyncStateS[A2]],
    fn: Callable[[A1, A2], B],
    /,
) -> AsyncStateS[B]: ...


@typing.overload
def combine[A1, A2, A3, B](
    states: tuple[AsyncStateS[A1], AsyncStateS[A2], AsyncStateS[A3]],
    fn: Callable[[A1, A2, A3], B],
    /,
) -> AsyncStateS[B]: ...


@typing.overload
def combine[A1, A2, A3, A4, B](
    states: tuple[AsyncStateS[A1], AsyncStateS[A2], AsyncStateS[A3], AsyncStateS[A4]],
    fn: Callable[[A1, A2, A3, A4], B],
    /,
) -> AsyncStateS[B]: ...


def combine(
    states: Sequence[AsyncStateS[typing.Any]],
    fn: Callable[..., typing.Any],
    /,
) -> AsyncStateS[typing.Any]:
    """First Loading wins, otherwise Success(fn(*values))."""
    return _F.combine(states, fn)


# ============================================================================
# kungfu interop
# ============================================================================


def from_option[T](option: Option[T]) -> AsyncStateS[T]:
    """Nothing -> Loading, Some(a) -> Success(a)."""
    return _F.from_option(option)


def to_option[T](state: AsyncStateS[T]) -> Option[T]:
    return _F.to_option(state)


def to_either[T, E](state: AsyncStateS[T], on_loading: Callable[[], E]) -> Result[T, E]:
    """Success -> Ok, Loading -> Error(on_loading())."""
    return _F.to_either(state, on_loading)


# ============================================================================
# Python interop
# ============================================================================


def from_nullable[T](value: T | None) -> AsyncStateS[T]:
    """None -> Loading, anything else -> Success."""
    return _F.from_nullable(loading(), value)


def get_or_else[T](on_other: Callable[[], T]) -> Callable[[AsyncStateS[T]], T]:
    def run(state: AsyncStateS[T]) -> T:
        return _F.get_or_else(on_other, state)

    return run


def get_or_else_w[T, B](on_other: Callable[[], B]) -> Callable[[AsyncStateS[T]], T | B]:
    def run(state: AsyncStateS[T]) -> T | B:
        return _F.get_or_else(on_other, state)

    return run


def get_tag(state: AsyncStateS[typing.Any]) -> Tag:
    return _F.get_tag(state)


__all__ = (
    "AsyncStateS",
    "loading",
    "success",
    "is_success",
    "is_loading",
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
