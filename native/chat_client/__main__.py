from __future__ import annotations

import logging
from typing import Callable

from chat_client.context import ClientContext
from chat_client.models import Message, MessageRole

HELP_TEXT = "Commands: /clear, /url [address], /signout, /help, /quit"


def _format(message: Message) -> str:
    speaker = "you" if message.role == MessageRole.USER else "assistant"
    return f"[{speaker}] {message.content}"


def run_console(
    ctx: ClientContext,
    read_line: Callable[[str], str] = input,
    write_line: Callable[[str], None] = print,
) -> None:
    if not ctx.auth.is_signed_in:
        user = ctx.auth.sign_in_anonymously()
        write_line(f"Signed in anonymously as {user.id}")

    session = ctx.new_session()
    replay = session.start()
    if replay is not None:
        replay.join()
    for message in session.messages:
        write_line(_format(message))

    while True:
        try:
            line = read_line("> ")
        except EOFError:
            return
        command = line.strip()
        if not command:
            continue

        if command in ("/quit", "/exit"):
            return
        if command == "/help":
            write_line(HELP_TEXT)
            continue
        if command == "/clear":
            session.clear()
            write_line(_format(session.messages[-1]))
            continue
        if command == "/signout":
            ctx.auth.sign_out()
            write_line("Signed out.")
            return
        if command.startswith("/url"):
            address = command[len("/url"):].strip()
            if address:
                ctx.config.api_url = address
            write_line(f"Relay address: {ctx.config.api_url}")
            continue

        session.current_input = line
        if session.send_current_input():
            write_line(_format(session.messages[-1]))
        elif session.error_message:
            write_line(f"! {session.error_message}")


def main() -> None:
    logging.basicConfig(level=logging.WARNING, format="[%(asctime)s] %(levelname)s - %(message)s")
    run_console(ClientContext.create())


if __name__ == "__main__":
    main()
