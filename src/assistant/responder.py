"""Keyword responder: maps free-form text onto the knowledge table.

Matching is a two-level, case-insensitive substring scan. The first
language whose name occurs in the text is committed to; within it the
first topic key that occurs wins. A language match with no topic match
answers with an overview of that language's topics, and no later
language is tried.
"""

from typing import Iterable

from .text import normalize_text
from .types import KnowledgeTable, Reply

FALLBACK_MESSAGE = (
    "I can help you with C++ and Python programming. "
    "Try asking about specific topics like 'C++ pointers' or 'Python generators'!"
)


def build_overview(language: str, topic_names: Iterable[str]) -> str:
    topics_list = ", ".join(topic_names)
    return (
        f"I can help you with {language}! "
        f"Here are some topics I know about: {topics_list}. What would you like to learn?"
    )


def respond(user_text: str, table: KnowledgeTable) -> Reply:
    text = normalize_text(user_text)

    for language, topics in table:
        if normalize_text(language) not in text:
            continue
        for key, record in topics.items():
            if normalize_text(key) in text:
                return Reply(content=record.description, code=record.examples)
        return Reply(content=build_overview(language, (record.topic for record in topics.values())))

    return Reply(content=FALLBACK_MESSAGE)
