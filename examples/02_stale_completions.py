from __future__ import annotations

import asyncio

from _infra import FakeBackend, banner, run

from asyncstate import create_controller


async def main() -> None:
    banner("02_stale_completions: a slow first call never overwrites a fast second one")

    api = FakeBackend(name="api")
    users = create_controller(api.fetch_user)
    users.sink.subscribe(lambda state: print(f"published: {state!r}"))

    slow = users.execute(1, delay_seconds=0.05)
    fast = users.execute(2, delay_seconds=0.01)
    await asyncio.gather(slow, fast)

    print(f"final: {users.state!r}")


if __name__ == "__main__":
    run(main)
