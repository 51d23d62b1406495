from __future__ import annotations

from _infra import FakeBackend, banner, run

from asyncstate import async_state as AS, create_immediate_controller


async def main() -> None:
    banner("03_retry_and_combine: run on mount, retry on failure, combine two views")

    flaky = FakeBackend(name="flaky", delay_seconds=0.01, failures_before_ok=1)
    steady = FakeBackend(name="steady", delay_seconds=0.02)

    profile = create_immediate_controller(lambda: flaky.fetch_user(1))
    friend = create_immediate_controller(lambda: steady.fetch_user(2))
    await profile.task
    await friend.task

    page = AS.match(
        loading=lambda: "loading...",
        success=lambda text: text,
        error=lambda err: f"error: {err} (press retry)",
    )

    def both():
        return AS.combine((profile.state, friend.state), lambda a, b: f"{a.name} + {b.name}")

    print(page(both()))

    retried = profile.retry()
    if retried is not None:
        await retried
    print(page(both()))


if __name__ == "__main__":
    run(main)
