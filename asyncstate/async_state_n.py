"""
AsyncStateN
===========

Полное семейство: NotInitiated | Loading | Success | Error.

Use when "never started" has to be told apart from "in flight", e.g. a form
submission that only runs on user action. This is the family the execution
controller publishes.

Usage:
    from asyncstate import async_state_n as ASN

    state = ASN.from_either(result)
    label = ASN.match_i(
        state,
        not_initiated=lambda: "press the button",
        loading=lambda: "saving...",
        success=lambda user: f"saved {user.name}",
        error=lambda err: f"failed: {err}",
    )
"""

from __future__ import annotations

import typing
from collections.abc import Callable, Sequence

from kungfu import Result

from ._family import Family
from .base import (
    Failure,
    Loading,
    NotInitiated,
    ReadyState,
    Success,
    Tag,
    error,
    loading,
    not_initiated,
    success,
)

# ============================================================================
# Definitions
# ============================================================================

type AsyncStateN[T, E] = NotInitiated | Loading | Success[T] | Failure[E]

_F = Family("AsyncStateN", frozenset(Tag))


# ============================================================================
# Refinements
# ============================================================================


def is_success[T, E](state: AsyncStateN[T, E]) -> typing.TypeGuard[Success[T]]:
    return _F.has_tag(state, Tag.SUCCESS)


def is_error[T, E](state: AsyncStateN[T, E]) -> typing.TypeGuard[Failure[E]]:
    return _F.has_tag(state, Tag.ERROR)


def is_loading[T, E](state: AsyncStateN[T, E]) -> typing.TypeGuard[Loading]:
    return _F.has_tag(state, Tag.LOADING)


def is_not_initiated[T, E](state: AsyncStateN[T, E]) -> typing.TypeGuard[NotInitiated]:
    return _F.has_tag(state, Tag.NOT_INITIATED)


def is_ready[T, E](state: AsyncStateN[T, E]) -> typing.TypeGuard[ReadyState[T, E]]:
    """Success or Error: the computation has terminated."""
    return _F.is_ready(state)


# ============================================================================
# Instance operations
# ============================================================================


def map[A, B](f: Callable[[A], B]) -> Callable[[AsyncStateN[A, typing.Any]], AsyncStateN[B, typing.Any]]:
    """
    Apply f to the Success value, leave every other state unchanged.

    f must not fail. For a step that can fail use chain().
    """

    def run(state: AsyncStateN[A, typing.Any]) -> AsyncStateN[B, typing.Any]:
        return _F.map(f, state)

    return run


def chain_w[A, B, E2](
    f: Callable[[A], AsyncStateN[B, E2]],
) -> Callable[[AsyncStateN[A, typing.Any]], AsyncStateN[B, typing.Any]]:
    """
    Less strict version of chain(): f may introduce its own error type.

    Resulting error type is the union of both.
    """

    def run(state: AsyncStateN[A, typing.Any]) -> AsyncStateN[B, typing.Any]:
        return _F.chain(f, state)

    return run


def chain[A, B, E](
    f: Callable[[A], AsyncStateN[B, E]],
) -> Callable[[AsyncStateN[A, E]], AsyncStateN[B, E]]:
    """
    Monadic bind (>>=).

    - On Success: returns f(value)
    - Otherwise: short-circuit, state returned as-is
    """
    return chain_w(f)


def map_left[E, E1](f: Callable[[E], E1]) -> Callable[[AsyncStateN[typing.Any, E]], AsyncStateN[typing.Any, E1]]:
    """Map over the error of an Error state."""

    def run(state: AsyncStateN[typing.Any, E]) -> AsyncStateN[typing.Any, E1]:
        return _F.map_left(f, state)

    return run


# ============================================================================
# Fold
# ============================================================================


def match_i[T, E, B](
    state: AsyncStateN[T, E],
    *,
    not_initiated: Callable[[], B],
    loading: Callable[[], B],
    success: Callable[[T], B],
    error: Callable[[E], B],
) -> B:
    """
    Fold the state with one handler per tag.

    All four handlers are required: leaving one out is rejected by the type
    checker at the call site (and by Python itself when called).
    """
    return _F.match(
        state,
        {
            Tag.NOT_INITIATED: not_initiated,
            Tag.LOADING: loading,
            Tag.SUCCESS: success,
            Tag.ERROR: error,
        },
    )


def match[T, E, B](
    *,
    not_initiated: Callable[[], B],
    loading: Callable[[], B],
    success: Callable[[T], B],
    error: Callable[[E], B],
) -> Callable[[AsyncStateN[T, E]], B]:
    """Curried match_i(): handlers now, state later."""

    def run(state: AsyncStateN[T, E]) -> B:
        return match_i(
            state,
            not_initiated=not_initiated,
            loading=loading,
            success=success,
            error=error,
        )

    return run


# ============================================================================
# Multi-state
# ============================================================================


@typing.overload
def combine[A1, A2, E1, E2, B](
    states: tuple[AsyncStateN[A1, E1], AsyncStateN[A2, E2]],
    fn: Callable[[A1, A2], B],
    /,
) -> AsyncStateN[B, E1 | E2]: ...


@typing.overload
def combine[A1, A2, A3, E1, E2, E3, B](
    states: tuple[AsyncStateN[A1, E1], AsyncStateN[A2, E2], AsyncStateN[A3, E3]],
    fn: Callable[[A1, A2, A3], B],
    /,
) -> AsyncStateN[B, E1 | E2 | E3]: ...


@typing.overload
def combine[A1, A2, A3, A4, E1, E2, E3, E4, B](
    states: tuple[AsyncStateN[A1, E1], AsyncStateN[A2, E2], AsyncStateN[A3, E3], AsyncStateN[A4, E4]],
    fn: Callable[[A1, A2, A3, A4], B],
    /,
) -> AsyncStateN[B, E1 | E2 | E3 | E4]: ...


def combine(
    states: Sequence[AsyncStateN[typing.Any, typing.Any]],
    fn: Callable[..., typing.Any],
    /,
) -> AsyncStateN[typing.Any, typing.Any]:
    """
    Resolve 2-4 states into one.

    First Error wins, then first Loading, then first NotInitiated.
    When all are Success: Success(fn(*values)).
    """
    return _F.combine(states, fn)


# ============================================================================
# kungfu interop
# ============================================================================


def from_either[T, E](result: Result[T, E]) -> AsyncStateN[T, E]:
    """Ok(a) -> Success(a), Error(e) -> Error(e)."""
    return _F.from_either(result)


def to_either[T, E, L](
    state: AsyncStateN[T, E],
    on_loading: Callable[[], L] | None = None,
) -> Result[T, E | L]:
    """
    Success -> Ok, Error -> Error.

    Loading and NotInitiated become Error(on_loading()). Without on_loading
    they raise NotReadyError: only pass a ready state in that case.
    """
    return _F.to_either(state, on_loading)


# ============================================================================
# Python interop
# ============================================================================


def from_nullable[T, E](default: E) -> Callable[[T | None], AsyncStateN[T, E]]:
    """
    Takes a default error and a nullable value: None becomes Error(default),
    anything else becomes Success.
    """

    def run(value: T | None) -> AsyncStateN[T, E]:
        return _F.from_nullable(error(default), value)

    return run


# Version of from_nullable for the NotInitiated-aware family
from_nullable_n = from_nullable


def get_or_else[T](on_other: Callable[[], T]) -> Callable[[AsyncStateN[T, typing.Any]], T]:
    def run(state: AsyncStateN[T, typing.Any]) -> T:
        return _F.get_or_else(on_other, state)

    return run


def get_or_else_w[T, B](on_other: Callable[[], B]) -> Callable[[AsyncStateN[T, typing.Any]], T | B]:
    """Less strict get_or_else(): fallback may be of another type."""

    def run(state: AsyncStateN[T, typing.Any]) -> T | B:
        return _F.get_or_else(on_other, state)

    return run


def get_tag(state: AsyncStateN[typing.Any, typing.Any]) -> Tag:
    return _F.get_tag(state)


__all__ = (
    "AsyncStateN",
    # Constructors
    "not_initiated",
    "loading",
    "success",
    "error",
    # Refinements
    "is_success",
    "is_error",
    "is_loading",
    "is_not_initiated",
    "is_ready",
    # Instance operations
    "map",
    "chain",
    "chain_w",
    "map_left",
    # Fold
    "match",
    "match_i",
    # Multi-state
    "combine",
    # Interop
    "from_either",
    "to_either",
    "from_nullable",
    "from_nullable_n",
    "get_or_else",
    "get_or_else_w",
    "get_tag",
)
