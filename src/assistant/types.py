from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class TopicRecord:
    topic: str
    description: str
    examples: Optional[str] = None


@dataclass(frozen=True)
class Reply:
    content: str
    code: Optional[str] = None


@dataclass
class Message:
    id: str
    content: str
    is_bot: bool
    code: Optional[str] = None


class KnowledgeTable:
    """Ordered, read-only mapping of language -> topic key -> TopicRecord.

    Iteration order is the order the entries were given in and decides
    which entry wins when several match.
    """

    def __init__(self, entries: Iterable[Tuple[str, Iterable[Tuple[str, TopicRecord]]]]) -> None:
        languages: Dict[str, Mapping[str, TopicRecord]] = {}
        for language, topics in entries:
            if language in languages:
                raise ValueError(f"Duplicate language: {language}")
            bucket: Dict[str, TopicRecord] = {}
            for key, record in topics:
                if key in bucket:
                    raise ValueError(f"Duplicate topic key '{key}' for language {language}")
                bucket[key] = record
            languages[language] = MappingProxyType(bucket)
        self._languages: Mapping[str, Mapping[str, TopicRecord]] = MappingProxyType(languages)

    def __iter__(self) -> Iterator[Tuple[str, Mapping[str, TopicRecord]]]:
        return iter(self._languages.items())

    def __len__(self) -> int:
        return len(self._languages)

    def languages(self) -> List[str]:
        return list(self._languages)

    def topics(self, language: str) -> Mapping[str, TopicRecord]:
        return self._languages[language]

    def get(self, language: str, topic_key: str) -> Optional[TopicRecord]:
        return self._languages.get(language, {}).get(topic_key)

    def topic_count(self) -> int:
        return sum(len(topics) for topics in self._languages.values())
