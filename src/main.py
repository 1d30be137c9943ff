"""Interactive terminal chat with the technical assistant."""

import argparse
import asyncio
import textwrap
from pathlib import Path

from assistant import Conversation, load_knowledge_table
from assistant.config import (
    DEFAULT_CONFIG_PATH,
    configure_logging,
    knowledge_source,
    load_config,
    typing_delay_seconds,
)
from assistant.types import Message

GREETING_MESSAGE = "Hello! I'm your technical assistant. Ask me about C++, Python, or other technical topics!"
RESET_COMMAND = "/reset"


def format_bot_message(message: Message) -> str:
    lines = [f"bot> {message.content}"]
    if message.code:
        lines.append(textwrap.indent(message.code, "    "))
    return "\n".join(lines)


def main() -> None:
    parser = argparse.ArgumentParser(description="Chat with the programming knowledge assistant.")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Path to config file.")
    parser.add_argument("--data", default=None, help="Path to knowledge JSONL file.")
    args = parser.parse_args()

    config = load_config(args.config)
    configure_logging(config)
    data_path = knowledge_source(config, args.data)
    if not Path(data_path).exists():
        print(f"Knowledge data not found: {data_path}")
        print("Generate it with scripts/preprocess.py or pass --data.")
        return

    table = load_knowledge_table(data_path)
    conversation = Conversation(table, typing_delay=typing_delay_seconds(config))

    print(f"bot> {GREETING_MESSAGE}")
    print(f"Type '{RESET_COMMAND}' to start over, 'exit' to quit.")
    while True:
        try:
            user_input = input("you> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break
        command = user_input.strip().lower()
        if command in {"exit", "quit"}:
            break
        if command == RESET_COMMAND:
            conversation.clear()
            print("bot> Conversation cleared.")
            continue
        if conversation.typing_delay and user_input.strip():
            print("bot is typing...")
        message = asyncio.run(conversation.asubmit(user_input))
        if message is not None:
            print(format_bot_message(message))


if __name__ == "__main__":
    main()
