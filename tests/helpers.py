from __future__ import annotations

import asyncio
import typing

from kungfu import Error, LazyCoroResult, Ok, Result


def outcome_of(result: Result[typing.Any, typing.Any]) -> tuple[str, typing.Any]:
    """Flatten a kungfu Result into a comparable tuple."""
    match result:
        case Ok(value):
            return ("ok", value)
        case Error(err):
            return ("error", err)
    raise AssertionError(f"not a Result: {result!r}")


def delayed[T, E](result: Result[T, E], seconds: float = 0.0) -> LazyCoroResult[T, E]:
    async def run() -> Result[T, E]:
        await asyncio.sleep(seconds)
        return result

    return LazyCoroResult(run)


class Gate:
    """Computation that completes only when the test opens it."""

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._result: Result[typing.Any, typing.Any] | None = None
        self._exc: Exception | None = None

    def open(self, result: Result[typing.Any, typing.Any]) -> None:
        self._result = result
        self._event.set()

    def fail(self, exc: Exception) -> None:
        self._exc = exc
        self._event.set()

    def computation(self) -> LazyCoroResult[typing.Any, typing.Any]:
        async def run() -> Result[typing.Any, typing.Any]:
            await self._event.wait()
            if self._exc is not None:
                raise self._exc
            assert self._result is not None
            return self._result

        return LazyCoroResult(run)


class GatedTask:
    """
    Task function whose every call gets its own Gate.

    calls[i] holds (args, kwargs) of the i-th call, gates[i] its Gate.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[tuple[typing.Any, ...], dict[str, typing.Any]]] = []
        self.gates: list[Gate] = []

    def __call__(self, *args: typing.Any, **kwargs: typing.Any) -> LazyCoroResult[typing.Any, typing.Any]:
        gate = Gate()
        self.calls.append((args, kwargs))
        self.gates.append(gate)
        return gate.computation()
