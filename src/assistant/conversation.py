import asyncio
import uuid
from typing import List, Optional, Tuple

from loguru import logger

from .responder import respond
from .text import is_blank
from .types import KnowledgeTable, Message, Reply


def _new_id() -> str:
    return uuid.uuid4().hex


class Conversation:
    """Append-only message log for one chat session.

    Blank submissions are ignored. ``asubmit`` waits ``typing_delay``
    seconds before the bot reply lands, with ``is_typing`` set meanwhile.
    """

    def __init__(self, table: KnowledgeTable, typing_delay: float = 0.0) -> None:
        self.table = table
        self.typing_delay = max(typing_delay, 0.0)
        self.is_typing = False
        self._messages: List[Message] = []

    @property
    def messages(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def clear(self) -> None:
        self._messages.clear()
        self.is_typing = False

    def submit(self, text: str) -> Optional[Message]:
        if is_blank(text):
            return None
        self._append_user(text)
        return self._append_bot(respond(text, self.table))

    async def asubmit(self, text: str) -> Optional[Message]:
        if is_blank(text):
            return None
        self._append_user(text)
        self.is_typing = True
        try:
            if self.typing_delay:
                await asyncio.sleep(self.typing_delay)
            reply = respond(text, self.table)
        finally:
            self.is_typing = False
        return self._append_bot(reply)

    def _append_user(self, text: str) -> Message:
        message = Message(id=_new_id(), content=text, is_bot=False)
        self._messages.append(message)
        logger.debug(f"user> {text!r}")
        return message

    def _append_bot(self, reply: Reply) -> Message:
        message = Message(id=_new_id(), content=reply.content, is_bot=True, code=reply.code)
        self._messages.append(message)
        logger.debug(f"bot> {reply.content[:60]!r}{' [code]' if reply.code else ''}")
        return message
