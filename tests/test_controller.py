"""Tests for TaskController: publishing, staleness, retry, reset, policies."""

import asyncio
import logging

import pytest
from kungfu import Error, Ok

from asyncstate import (
    ControllerPolicy,
    ResetPolicy,
    StateCell,
    TaskController,
    create_controller,
)
from asyncstate import async_state_n as ASN

from helpers import delayed, outcome_of

CONTROLLER_LOGGER = "asyncstate.controller.task_either"


def record(controller):
    published = []
    controller.sink.subscribe(published.append)
    return published


class TestLifecycle:
    def test_starts_not_initiated(self, gated):
        controller = create_controller(gated)
        assert controller.state == ASN.not_initiated()
        assert controller.invocation_id == 0
        assert controller.last_args is None
        assert gated.calls == []

    def test_initial_state_is_published(self, gated):
        assert create_controller(gated, ASN.success("cached")).state == ASN.success("cached")

    def test_initial_state_is_pushed_into_given_sink(self, gated):
        cell = StateCell(ASN.not_initiated())
        controller = create_controller(gated, ASN.loading(), sink=cell)
        assert controller.sink is cell
        assert cell.get() == ASN.loading()

    @pytest.mark.asyncio
    async def test_execute_publishes_loading_then_outcome(self, gated):
        controller = create_controller(gated)
        published = record(controller)

        task = controller.execute(42, verbose=True)
        assert controller.state == ASN.loading()
        assert gated.calls == [((42,), {"verbose": True})]
        assert controller.last_args == ((42,), {"verbose": True})

        gated.gates[0].open(Ok("answer"))
        assert outcome_of(await task) == ("ok", "answer")
        assert controller.state == ASN.success("answer")
        assert published == [ASN.loading(), ASN.success("answer")]

    @pytest.mark.asyncio
    async def test_failure_is_data_not_exception(self, gated):
        controller = create_controller(gated)
        task = controller.execute()
        gated.gates[0].open(Error("not found"))
        assert outcome_of(await task) == ("error", "not found")
        assert controller.state == ASN.error("not found")

    def test_execute_outside_event_loop_raises(self, gated):
        controller = create_controller(gated)
        with pytest.raises(RuntimeError):
            controller.execute()
        assert controller.state == ASN.not_initiated()
        assert gated.calls == []


class TestStaleness:
    @pytest.mark.asyncio
    async def test_fast_second_call_overtakes_slow_first(self):
        def fetch(label, seconds):
            return delayed(Ok(label), seconds)

        controller = create_controller(fetch)
        published = record(controller)

        slow = controller.execute("slow", 0.05)
        fast = controller.execute("fast", 0.01)
        await asyncio.gather(slow, fast)

        assert published == [ASN.loading(), ASN.success("fast")]
        assert controller.state == ASN.success("fast")

    @pytest.mark.asyncio
    async def test_stale_completion_does_not_change_state(self, gated, caplog):
        caplog.set_level(logging.DEBUG, logger=CONTROLLER_LOGGER)
        controller = create_controller(gated)

        first = controller.execute(1)
        second = controller.execute(2)

        gated.gates[0].open(Ok("first"))
        assert outcome_of(await first) == ("ok", "first")
        assert controller.state == ASN.loading()
        assert "discarding stale completion #1 (latest is #2)" in caplog.text

        gated.gates[1].open(Ok("second"))
        await second
        assert controller.state == ASN.success("second")

    @pytest.mark.asyncio
    async def test_stale_completion_after_newer_one_landed(self, gated):
        controller = create_controller(gated)
        first = controller.execute(1)
        second = controller.execute(2)

        gated.gates[1].open(Error("second failed"))
        await second
        gated.gates[0].open(Ok("first"))
        await first

        assert controller.state == ASN.error("second failed")
        assert controller.invocation_id == 2


class TestRetry:
    def test_retry_before_execute_is_noop(self, gated):
        controller = create_controller(gated)
        assert controller.retry() is None
        assert controller.state == ASN.not_initiated()
        assert controller.invocation_id == 0
        assert gated.calls == []

    @pytest.mark.asyncio
    async def test_retry_reuses_last_arguments(self, gated):
        controller = create_controller(gated)
        task = controller.execute("user-1", page=2)
        gated.gates[0].open(Error("timeout"))
        await task
        assert controller.state == ASN.error("timeout")

        retried = controller.retry()
        assert retried is not None
        assert controller.state == ASN.loading()
        assert gated.calls == [(("user-1",), {"page": 2})] * 2

        gated.gates[1].open(Ok("user"))
        await retried
        assert controller.state == ASN.success("user")

    @pytest.mark.asyncio
    async def test_retry_supersedes_in_flight_call(self, gated):
        controller = create_controller(gated)
        first = controller.execute("x")
        retried = controller.retry()

        gated.gates[1].open(Ok("retried"))
        await retried
        gated.gates[0].open(Ok("original"))
        await first

        assert controller.state == ASN.success("retried")


class TestReset:
    @pytest.mark.asyncio
    async def test_reset_is_immediate(self, gated):
        controller = create_controller(gated)
        task = controller.execute()
        controller.reset()
        assert controller.state == ASN.not_initiated()

        gated.gates[0].open(Ok("late"))
        await task

    @pytest.mark.asyncio
    async def test_invalidate_drops_in_flight_outcome(self, gated):
        controller = create_controller(gated)
        published = record(controller)
        task = controller.execute()
        controller.reset()

        gated.gates[0].open(Ok("late"))
        assert outcome_of(await task) == ("ok", "late")
        assert controller.state == ASN.not_initiated()
        assert published == [ASN.loading(), ASN.not_initiated()]

    @pytest.mark.asyncio
    async def test_invalidate_drops_outcome_after_external_reset(self, gated, caplog):
        caplog.set_level(logging.DEBUG, logger=CONTROLLER_LOGGER)
        controller = create_controller(gated)
        task = controller.execute()
        controller.sink.set(ASN.not_initiated())

        gated.gates[0].open(Ok("late"))
        await task
        assert controller.state == ASN.not_initiated()
        assert "slot was reset" in caplog.text

    @pytest.mark.asyncio
    async def test_keep_in_flight_lets_outstanding_call_land(self, gated):
        controller = create_controller(gated, policy=ControllerPolicy(reset=ResetPolicy.KEEP_IN_FLIGHT))
        task = controller.execute()
        controller.reset()
        assert controller.state == ASN.not_initiated()

        gated.gates[0].open(Ok("late"))
        await task
        assert controller.state == ASN.success("late")

    @pytest.mark.asyncio
    async def test_execute_after_reset_publishes(self, gated):
        controller = create_controller(gated)
        stale = controller.execute()
        controller.reset()
        task = controller.execute()
        gated.gates[1].open(Ok("fresh"))
        await task
        gated.gates[0].open(Ok("stale"))
        await stale
        assert controller.state == ASN.success("fresh")

    @pytest.mark.asyncio
    async def test_retry_after_reset_uses_cached_arguments(self, gated):
        controller = create_controller(gated)
        first = controller.execute("q")
        controller.reset()
        retried = controller.retry()
        assert gated.calls[-1] == (("q",), {})

        for gate in gated.gates:
            gate.open(Ok("done"))
        await asyncio.gather(first, retried)
        assert controller.state == ASN.success("done")


class TestExceptions:
    @pytest.mark.asyncio
    async def test_synchronous_raise_propagates_by_default(self):
        def broken():
            raise RuntimeError("bug")

        controller = create_controller(broken)
        with pytest.raises(RuntimeError, match="bug"):
            controller.execute()

    @pytest.mark.asyncio
    async def test_raise_inside_computation_propagates_through_task(self, gated):
        controller = create_controller(gated)
        task = controller.execute()
        gated.gates[0].fail(ValueError("boom"))
        with pytest.raises(ValueError, match="boom"):
            await task
        assert controller.state == ASN.loading()

    @pytest.mark.asyncio
    async def test_trapping_policy_converts_synchronous_raise(self):
        def broken():
            raise RuntimeError("bug")

        controller = create_controller(broken, policy=ControllerPolicy.trapping(str))
        task = controller.execute()
        assert outcome_of(await task) == ("error", "bug")
        assert controller.state == ASN.error("bug")

    @pytest.mark.asyncio
    async def test_trapping_policy_converts_computation_raise(self, gated):
        controller = create_controller(gated, policy=ControllerPolicy(on_exception=lambda exc: type(exc).__name__))
        task = controller.execute()
        gated.gates[0].fail(KeyError("k"))
        await task
        assert controller.state == ASN.error("KeyError")

    @pytest.mark.asyncio
    async def test_trapped_stale_failure_is_still_discarded(self, gated):
        controller = create_controller(gated, policy=ControllerPolicy.trapping(str))
        first = controller.execute()
        second = controller.execute()
        gated.gates[0].fail(RuntimeError("stale"))
        await first
        assert controller.state == ASN.loading()
        gated.gates[1].open(Ok("ok"))
        await second
        assert controller.state == ASN.success("ok")


class TestPolicy:
    def test_defaults(self):
        policy = ControllerPolicy()
        assert policy.reset is ResetPolicy.INVALIDATE
        assert policy.on_exception is None

    def test_rejects_unknown_reset_policy(self):
        with pytest.raises(ValueError):
            ControllerPolicy(reset="sometimes")  # type: ignore[arg-type]

    def test_rejects_non_callable_on_exception(self):
        with pytest.raises(ValueError):
            ControllerPolicy(on_exception="str")  # type: ignore[arg-type]

    def test_controller_exposes_policy(self, gated):
        policy = ControllerPolicy(reset=ResetPolicy.KEEP_IN_FLIGHT)
        assert TaskController(gated, policy=policy).policy is policy
