from .conversation import Conversation
from .loader import load_knowledge_table
from .responder import FALLBACK_MESSAGE, respond
from .types import KnowledgeTable, Message, Reply, TopicRecord

__all__ = [
    "Conversation",
    "FALLBACK_MESSAGE",
    "KnowledgeTable",
    "Message",
    "Reply",
    "TopicRecord",
    "load_knowledge_table",
    "respond",
]
