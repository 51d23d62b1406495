from __future__ import annotations

from _infra import ApiError, User, banner, run

from asyncstate import async_state_n as ASN, pipe
from kungfu import Error, Ok


def render(state: ASN.AsyncStateN[User, ApiError]) -> str:
    # One handler per tag: forgetting one fails at the call site, not at runtime.
    return ASN.match_i(
        state,
        not_initiated=lambda: "[ load profile ]",
        loading=lambda: "loading...",
        success=lambda user: f"hello, {user.name}",
        error=lambda err: f"could not load: {err}",
    )


async def main() -> None:
    banner("01_quickstart: from_either + map + match")

    for state in (
        ASN.not_initiated(),
        ASN.loading(),
        ASN.from_either(Ok(User(id=1, name="ada"))),
        ASN.from_either(Error(ApiError("timeout"))),
    ):
        print(render(state))

    name = pipe(
        ASN.from_either(Ok(User(id=2, name="grace"))),
        ASN.map(lambda user: user.name.title()),
        ASN.get_or_else(lambda: "anonymous"),
    )
    print(f"plain value at the boundary: {name}")


if __name__ == "__main__":
    run(main)
