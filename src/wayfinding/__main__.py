"""Entry point for ``python -m wayfinding``.

The first argument names a subcommand; everything after it is handed to that
subcommand untouched, e.g. ``python -m wayfinding cli route map.geojson a b``.
"""

import asyncio
import sys

from . import cli

COMMANDS = {
    "cli": "Route, inspect and classify wayfinding maps",
}


def usage() -> str:
    lines = ["Usage: python -m wayfinding <command> [args...]", "", "Available commands:"]
    lines.extend(f"  {name} - {summary}" for name, summary in COMMANDS.items())
    return "\n".join(lines)


def main():
    if len(sys.argv) < 2:
        print(usage())
        sys.exit(1)

    command = sys.argv.pop(1)

    if command not in COMMANDS:
        print(f"Unknown command: {command}")
        print(f"Available commands: {', '.join(COMMANDS)}")
        sys.exit(1)

    sys.exit(asyncio.run(cli.main()))


if __name__ == "__main__":
    main()
