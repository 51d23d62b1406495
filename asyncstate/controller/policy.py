"""
Controller configuration
========================

Политики поведения TaskController: reset и обработка исключений.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum


class ResetPolicy(StrEnum):
    """
    What reset() does to a call that is still in flight.

    - INVALIDATE: every in-flight call becomes stale, its outcome is dropped
    - KEEP_IN_FLIGHT: reset only changes what is displayed; the latest
      outstanding call may still publish its outcome when it completes
    """

    INVALIDATE = "invalidate"
    KEEP_IN_FLIGHT = "keep_in_flight"


@dataclass(frozen=True, slots=True)
class ControllerPolicy[E]:
    """
    TaskController configuration.

    on_exception: when set, an exception raised by the task function (or by
    awaiting its computation) is converted into Error(on_exception(exc))
    instead of propagating.
    """

    reset: ResetPolicy = ResetPolicy.INVALIDATE
    on_exception: Callable[[Exception], E] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.reset, ResetPolicy):
            raise ValueError(f"ControllerPolicy.reset must be a ResetPolicy, got {self.reset!r}")
        if self.on_exception is not None and not callable(self.on_exception):
            raise ValueError("ControllerPolicy.on_exception must be callable")

    @classmethod
    def trapping(
        cls,
        on_exception: Callable[[Exception], E],
        reset: ResetPolicy = ResetPolicy.INVALIDATE,
    ) -> ControllerPolicy[E]:
        """Convert raised exceptions into Error states."""
        return cls(reset=reset, on_exception=on_exception)


__all__ = ("ControllerPolicy", "ResetPolicy")
