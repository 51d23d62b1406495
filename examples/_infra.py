from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from pathlib import Path

from kungfu import Error, LazyCoroResult, Ok, Result

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@dataclass(frozen=True, slots=True)
class ApiError(Exception):
    message: str
    transient: bool = False

    def __str__(self) -> str:  # pragma: no cover (examples only)
        return self.message


@dataclass(frozen=True, slots=True)
class User:
    id: int
    name: str


@dataclass(slots=True)
class FakeBackend:
    name: str
    delay_seconds: float = 0.0
    failures_before_ok: int = 0

    def fetch_user(self, user_id: int, delay_seconds: float | None = None) -> LazyCoroResult[User, ApiError]:
        """Deferred lookup: nothing happens until the controller awaits it."""

        async def run() -> Result[User, ApiError]:
            await asyncio.sleep(self.delay_seconds if delay_seconds is None else delay_seconds)
            if self.failures_before_ok > 0:
                self.failures_before_ok -= 1
                return Error(ApiError(f"{self.name}: unavailable", transient=True))
            return Ok(User(id=user_id, name=f"user:{user_id}@{self.name}"))

        return LazyCoroResult(run)


def banner(title: str) -> None:  # pragma: no cover (examples only)
    print(f"\n== {title} ==")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:  # pragma: no cover (examples only)
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s - %(message)s")
    asyncio.run(main())
