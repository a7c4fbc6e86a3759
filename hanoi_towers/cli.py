from __future__ import annotations

import sys
from typing import Callable, NamedTuple

from hanoi_towers import render, session


class Command(NamedTuple):
    summary: str
    run: Callable[[list[str] | None], int]


COMMANDS: dict[str, Command] = {
    "solve": Command(
        "Create a puzzle and print every state while solving it", session.main
    ),
    "render": Command(
        "Turn a session recording into html, ascii or png frames", render.main
    ),
}


def usage() -> str:
    width = max(len(name) for name in COMMANDS) + 4
    rows = [f"  {name:<{width}}{cmd.summary}" for name, cmd in COMMANDS.items()]
    return "\n".join(
        [
            "usage: hanoi-towers <command> [options]",
            "",
            "commands:",
            *rows,
            "",
            "Run 'hanoi-towers help <command>' for the options of one command.",
        ]
    )


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    name = args[0] if args else "help"
    rest = args[1:]

    if name in {"help", "-h", "--help"}:
        if not rest:
            print(usage())
            return 0
        # `help solve` is `solve --help`
        name, rest = rest[0], ["--help"]

    command = COMMANDS.get(name)
    if command is None:
        print(f"hanoi-towers: unknown command {name!r}", file=sys.stderr)
        print(usage(), file=sys.stderr)
        return 2
    return command.run(rest)


if __name__ == "__main__":
    raise SystemExit(main())
