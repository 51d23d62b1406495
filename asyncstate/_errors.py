from __future__ import annotations

import typing


class MissingHandlerError(Exception):
    """match() was given no handler for the tag of the state."""

    tag: str

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"No handler for {tag} state")


class ForeignStateError(Exception):
    """State has a tag that the family does not admit."""

    state: typing.Any
    family: str

    def __init__(self, state: typing.Any, family: str) -> None:
        self.state = state
        self.family = family
        super().__init__(f"{state!r} is not a member of {family}")


class NotReadyError(Exception):
    """to_either() on a pending state without an on_loading producer."""

    state: typing.Any

    def __init__(self, state: typing.Any) -> None:
        self.state = state
        super().__init__(f"Cannot convert {state!r} to Result without on_loading")


__all__ = ("ForeignStateError", "MissingHandlerError", "NotReadyError")
