"""Internal helpers for asyncstate.

Small functional utilities shared by the family modules.
pipe() is re-exported from the package root for call sites."""

from __future__ import annotations

import typing
from collections.abc import Callable


def identity[T](x: T) -> T:
    """Identity function: returns its argument unchanged."""
    return x


def pipe(value: typing.Any, *fns: Callable[[typing.Any], typing.Any]) -> typing.Any:
    """
    Thread value through fns left to right.

    Usage:
        pipe(
            ASN.from_either(result),
            ASN.map(lambda user: user.name),
            ASN.get_or_else(lambda: "anonymous"),
        )
    """
    for fn in fns:
        value = fn(value)
    return value


__all__ = (
    "identity",
    "pipe",
)
