"""
Variant definitions
===================

Четыре примитивных состояния асинхронного вычисления и их конструкторы.

Every family (AsyncStateN, AsyncState, AsyncStateS, AsyncStateSN) is a union
of some of these variants. The variants themselves are shared: a `Loading`
produced by one family is structurally identical to a `Loading` of another.
"""

from __future__ import annotations

import typing
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum


class Tag(StrEnum):
    """Discriminant of a state value."""

    NOT_INITIATED = "NotInitiated"
    LOADING = "Loading"
    SUCCESS = "Success"
    ERROR = "Error"


# ============================================================================
# Variants
# ============================================================================


@dataclass(frozen=True, slots=True)
class NotInitiated:
    """Computation never started."""

    type: typing.ClassVar[Tag] = Tag.NOT_INITIATED
    loading: typing.ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class Loading:
    """Computation started, outcome pending."""

    type: typing.ClassVar[Tag] = Tag.LOADING
    loading: typing.ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class Success[T]:
    """Computation completed with a value."""

    value: T

    type: typing.ClassVar[Tag] = Tag.SUCCESS
    loading: typing.ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class Failure[E]:
    """
    Computation completed with an error.

    NOTE: Tag is "Error". The class is not called Error to avoid clashing
          with kungfu.Error, which is the Left side of every Result here.
    """

    error: E

    type: typing.ClassVar[Tag] = Tag.ERROR
    loading: typing.ClassVar[bool] = False


type ReadyState[T, E] = Success[T] | Failure[E]

# Any variant, regardless of family
type AnyState = NotInitiated | Loading | Success[typing.Any] | Failure[typing.Any]


# ============================================================================
# Constructors
# ============================================================================

_NOT_INITIATED = NotInitiated()
_LOADING = Loading()


def not_initiated() -> NotInitiated:
    return _NOT_INITIATED


def loading() -> Loading:
    return _LOADING


def success[T](value: T) -> Success[T]:
    return Success(value)


def error[E](err: E) -> Failure[E]:
    return Failure(err)


# ============================================================================
# Serialization
# ============================================================================


def to_dict(state: AnyState) -> dict[str, typing.Any]:
    """
    Dump state into a plain dict discriminated by "type".

    Example:
        to_dict(success(42))     # {"type": "Success", "value": 42}
        to_dict(error("boom"))   # {"type": "Error", "error": "boom"}
        to_dict(loading())       # {"type": "Loading"}
    """
    match state:
        case Success(value):
            return {"type": str(Tag.SUCCESS), "value": value}
        case Failure(err):
            return {"type": str(Tag.ERROR), "error": err}
        case Loading() | NotInitiated():
            return {"type": str(state.type)}
        case _ as unreachable:
            typing.assert_never(unreachable)


def from_dict(data: Mapping[str, typing.Any]) -> AnyState:
    """Inverse of to_dict()."""
    try:
        tag = Tag(data["type"])
    except (KeyError, ValueError) as exc:
        raise ValueError(f"Not a serialized state: {data!r}") from exc

    match tag:
        case Tag.NOT_INITIATED:
            return not_initiated()
        case Tag.LOADING:
            return loading()
        case Tag.SUCCESS:
            if "value" not in data:
                raise ValueError("Serialized Success state has no 'value'")
            return success(data["value"])
        case Tag.ERROR:
            if "error" not in data:
                raise ValueError("Serialized Error state has no 'error'")
            return error(data["error"])
        case _ as unreachable:
            typing.assert_never(unreachable)


__all__ = (
    "Tag",
    "NotInitiated",
    "Loading",
    "Success",
    "Failure",
    "ReadyState",
    "AnyState",
    "not_initiated",
    "loading",
    "success",
    "error",
    "to_dict",
    "from_dict",
)
