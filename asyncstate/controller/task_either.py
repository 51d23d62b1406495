"""
Execution controller
====================

Превращает функцию, возвращающую LazyCoroResult, в поток состояний AsyncStateN.

    controller = create_controller(fetch_user)
    controller.state            # NotInitiated()
    task = controller.execute(42)
    controller.state            # Loading()
    await task
    controller.state            # Success(User(...)) or Failure(...)

Only the outcome of the most recently issued execute()/retry() is ever
published. Earlier calls still run to completion (there is no cancellation),
but their outcomes are dropped when they arrive, whatever the order.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import typing
from collections.abc import Callable

from kungfu import Error, LazyCoroResult, Result

from .. import async_state_n as ASN
from ..async_state import AsyncState
from ..async_state_n import AsyncStateN
from .policy import ControllerPolicy, ResetPolicy
from .sink import StateCell, StateSink

logger = logging.getLogger(__name__)

type _Args = tuple[tuple[typing.Any, ...], dict[str, typing.Any]]


class TaskController[T, E, **P]:
    """
    Binds a task function to a state sink.

    Each execute() takes the next invocation id. A completion publishes only
    if its id is still the latest one; the compare and the publish happen
    under one lock.
    """

    __slots__ = ("_func", "_sink", "_policy", "_invocation_id", "_last_args", "_lock")

    def __init__(
        self,
        func: Callable[P, LazyCoroResult[T, E]],
        initial_state: AsyncStateN[T, E] | None = None,
        *,
        sink: StateSink[AsyncStateN[T, E]] | None = None,
        policy: ControllerPolicy[E] | None = None,
    ) -> None:
        start: AsyncStateN[T, E] = initial_state if initial_state is not None else ASN.not_initiated()
        if sink is None:
            sink = StateCell(start)
        elif initial_state is not None:
            sink.set(initial_state)

        self._func = func
        self._sink = sink
        self._policy: ControllerPolicy[E] = policy if policy is not None else ControllerPolicy()
        self._invocation_id = 0
        self._last_args: _Args | None = None
        self._lock = threading.RLock()

    @property
    def state(self) -> AsyncStateN[T, E]:
        return self._sink.get()

    @property
    def sink(self) -> StateSink[AsyncStateN[T, E]]:
        return self._sink

    @property
    def policy(self) -> ControllerPolicy[E]:
        return self._policy

    @property
    def invocation_id(self) -> int:
        """Id of the most recent invocation, 0 before the first one."""
        return self._invocation_id

    @property
    def last_args(self) -> _Args | None:
        """(args, kwargs) of the most recent invocation, reused by retry()."""
        return self._last_args

    def execute(self, *args: P.args, **kwargs: P.kwargs) -> asyncio.Task[Result[T, E]]:
        """
        Start a new invocation and publish Loading.

        Returns the pending task; awaiting it yields the raw outcome whether
        or not it was published. Requires a running event loop.
        """
        loop = asyncio.get_running_loop()
        with self._lock:
            self._invocation_id += 1
            invocation_id = self._invocation_id
            self._sink.set(ASN.loading())
            self._last_args = (args, kwargs)

        logger.debug("execute #%d args=%r kwargs=%r", invocation_id, args, kwargs)
        computation = self._start(*args, **kwargs)
        return loop.create_task(self._settle(invocation_id, computation))

    def retry(self) -> asyncio.Task[Result[T, E]] | None:
        """Run execute() again with the last arguments; no-op before the first call."""
        last_args = self._last_args
        if last_args is None:
            logger.debug("retry ignored: nothing executed yet")
            return None
        args, kwargs = last_args
        return self.execute(*args, **kwargs)  # type: ignore[arg-type]

    def reset(self) -> None:
        """Publish NotInitiated right away, in-flight calls are handled per ResetPolicy."""
        with self._lock:
            if self._policy.reset is ResetPolicy.INVALIDATE:
                self._invocation_id += 1
            self._sink.set(ASN.not_initiated())
        logger.debug("reset (policy=%s)", self._policy.reset)

    # Internals

    def _start(self, *args: P.args, **kwargs: P.kwargs) -> LazyCoroResult[T, E]:
        on_exception = self._policy.on_exception
        if on_exception is None:
            return self._func(*args, **kwargs)
        try:
            return self._func(*args, **kwargs)
        except Exception as exc:
            logger.debug("task function raised %r, trapped as Error", exc)
            return Error(on_exception(exc)).to_async()

    async def _settle(self, invocation_id: int, computation: LazyCoroResult[T, E]) -> Result[T, E]:
        on_exception = self._policy.on_exception
        try:
            outcome = await computation
        except Exception as exc:
            if on_exception is None:
                raise
            logger.debug("computation #%d raised %r, trapped as Error", invocation_id, exc)
            outcome = Error(on_exception(exc))

        self._commit(invocation_id, outcome)
        return outcome

    def _commit(self, invocation_id: int, outcome: Result[T, E]) -> bool:
        with self._lock:
            latest = self._invocation_id
            if invocation_id != latest:
                logger.debug("discarding stale completion #%d (latest is #%d)", invocation_id, latest)
                return False
            if self._policy.reset is ResetPolicy.INVALIDATE and ASN.is_not_initiated(self._sink.get()):
                logger.debug("discarding completion #%d: slot was reset", invocation_id)
                return False
            state = ASN.from_either(outcome)
            self._sink.set(state)
        logger.debug("published #%d: %r", invocation_id, state)
        return True

    def __repr__(self) -> str:
        return f"TaskController(state={self.state!r}, invocation_id={self._invocation_id})"


class ImmediateTaskController[T, E]:
    """
    Runs its task function once, with no arguments, on construction.

    Starts from Loading and never goes back to NotInitiated (no reset), so the
    state is an AsyncState. Only retry() is exposed.
    """

    __slots__ = ("_controller", "_task")

    def __init__(
        self,
        func: Callable[[], LazyCoroResult[T, E]],
        *,
        sink: StateSink[AsyncStateN[T, E]] | None = None,
        policy: ControllerPolicy[E] | None = None,
    ) -> None:
        self._controller: TaskController[T, E, []] = TaskController(
            func,
            ASN.loading(),
            sink=sink,
            policy=policy,
        )
        self._task = self._controller.execute()

    @property
    def state(self) -> AsyncState[T, E]:
        return typing.cast("AsyncState[T, E]", self._controller.state)

    @property
    def task(self) -> asyncio.Task[Result[T, E]]:
        """Task of the invocation started on construction."""
        return self._task

    def retry(self) -> asyncio.Task[Result[T, E]] | None:
        return self._controller.retry()

    def __repr__(self) -> str:
        return f"ImmediateTaskController(state={self.state!r})"


def create_controller[T, E, **P](
    func: Callable[P, LazyCoroResult[T, E]],
    initial_state: AsyncStateN[T, E] | None = None,
    *,
    sink: StateSink[AsyncStateN[T, E]] | None = None,
    policy: ControllerPolicy[E] | None = None,
) -> TaskController[T, E, P]:
    """
    Create a controller for func.

    Example:
        def fetch_user(user_id: int) -> LazyCoroResult[User, APIError]: ...

        users = create_controller(fetch_user)
        await users.execute(42)
        users.retry()
        users.reset()
    """
    return TaskController(func, initial_state, sink=sink, policy=policy)


def create_immediate_controller[T, E](
    func: Callable[[], LazyCoroResult[T, E]],
    *,
    sink: StateSink[AsyncStateN[T, E]] | None = None,
    policy: ControllerPolicy[E] | None = None,
) -> ImmediateTaskController[T, E]:
    """Create a controller that has already started func() ("run once on mount")."""
    return ImmediateTaskController(func, sink=sink, policy=policy)


__all__ = (
    "TaskController",
    "ImmediateTaskController",
    "create_controller",
    "create_immediate_controller",
)
