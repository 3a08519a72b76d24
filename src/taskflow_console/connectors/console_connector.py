# src/taskflow_console/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import create_session, registry as command_registry, render_list, render_stats
from ..core.ports import NoticeLevel
from ..core.state import AppState

logger = logging.getLogger(__name__)

_NOTICE_TAGS = {"success": "OK", "error": "ERROR", "info": "INFO"}


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def print_notice(level: NoticeLevel, message: str) -> None:
    _print_ts(f"[{_NOTICE_TAGS.get(level, level.upper())}] {message}")


async def run_console_loop(
    state: AppState,
    *,
    read_line: Callable[[str], str] = input,
) -> None:
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "TaskFlow"))
    session = create_session(state, print_notice)

    logger.info("Console connector started.")
    _print_ts(f"[{app_name}] Loading...")
    await session.controller.load_data()
    _print_ts(f"[{app_name}] {render_stats(session.controller)}")
    print(render_list(session))
    _print_ts("Use /help for commands. Use /exit to quit.\n")

    while True:
        theme = "dark" if session.controller.dark_mode else "light"
        try:
            user_input = (await asyncio.to_thread(read_line, f"{app_name} ({theme}) > ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = await command_registry.handle(session, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is None:
            reply = "Commands start with '/'. Use /help to list them."
        print(reply)

    logger.info("Console connector finished.")
