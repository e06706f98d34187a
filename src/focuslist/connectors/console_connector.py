# src/focuslist/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import format_views
from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

EXIT_COMMANDS = frozenset({"/exit", "/quit"})

# Commands that can change what the listing shows.
_REDRAW_AFTER = frozenset(
    {"add", "edit", "done", "today", "recur", "rm", "delete", "tag", "all", "import", "import-recurring"}
)


def _stamp(text: str) -> str:
    ts = datetime.now().astimezone().strftime("%H:%M:%S")
    return f"[{ts}] {text}"


def _read_line() -> str | None:
    """Next input line, or None when the user closed stdin or pressed Ctrl+C."""
    try:
        return input("\n> ").strip()
    except EOFError:
        logger.info("stdin closed")
    except KeyboardInterrupt:
        print()
        logger.info("interrupted")
    return None


def to_command(line: str) -> str:
    """Plain text is shorthand for /add."""
    return line if line.startswith("/") else "/add " + line


def dispatch(state: AppState, line: str) -> str | None:
    """Run one console line through the command registry; never raises."""
    try:
        return command_registry.handle(state, line, emit=lambda text: print(_stamp(text), flush=True))
    except Exception:
        logger.exception("Command failed: %s", line)
        return "Internal error while handling a command. See the log file for details."


def run_console_loop(state: AppState) -> None:
    app_name = str(getattr(state.settings, "app_name", "focuslist"))
    logger.info("Console started with %d tasks", state.store.count())

    print(_stamp(f"[{app_name}] Type a task to add it. Use /help for commands, /exit to quit.\n"))
    print(format_views(state.views()))

    while True:
        line = _read_line()
        if line is None:
            break
        if not line:
            continue
        if line.lower() in EXIT_COMMANDS:
            break

        command = to_command(line)
        reply = dispatch(state, command)
        if reply is not None:
            print(_stamp(reply))

        name = command[1:].split(maxsplit=1)[0].lower() if len(command) > 1 else ""
        if name in _REDRAW_AFTER:
            print()
            print(format_views(state.views()))

    logger.info("Console stopped with %d tasks", state.store.count())
