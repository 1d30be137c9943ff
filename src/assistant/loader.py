import json
from pathlib import Path
from typing import Dict, List, Tuple

from loguru import logger

from .types import KnowledgeTable, TopicRecord

REQUIRED_FIELDS = ("language", "topic_key", "topic", "description")


def load_knowledge_table(path: str) -> KnowledgeTable:
    data_path = Path(path)
    if not data_path.exists():
        raise FileNotFoundError(f"Knowledge data not found: {data_path}")

    grouped: Dict[str, List[Tuple[str, TopicRecord]]] = {}
    seen = set()
    with data_path.open("r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
            except json.JSONDecodeError as exc:
                raise ValueError(f"{data_path}:{lineno}: invalid JSON ({exc.msg})") from exc
            if not isinstance(record, dict):
                raise ValueError(f"{data_path}:{lineno}: expected an object")
            missing = [name for name in REQUIRED_FIELDS if not record.get(name)]
            if missing:
                raise ValueError(f"{data_path}:{lineno}: missing {', '.join(missing)}")
            for name in REQUIRED_FIELDS:
                if not isinstance(record[name], str):
                    raise ValueError(f"{data_path}:{lineno}: {name} must be a string")
            if record.get("examples") is not None and not isinstance(record["examples"], str):
                raise ValueError(f"{data_path}:{lineno}: examples must be a string or null")

            language = record["language"]
            topic_key = record["topic_key"]
            if (language, topic_key) in seen:
                raise ValueError(f"{data_path}:{lineno}: duplicate topic '{topic_key}' for {language}")
            seen.add((language, topic_key))

            grouped.setdefault(language, []).append(
                (
                    topic_key,
                    TopicRecord(
                        topic=record["topic"],
                        description=record["description"],
                        examples=record.get("examples") or None,
                    ),
                )
            )

    table = KnowledgeTable(grouped.items())
    logger.debug(f"Loaded {table.topic_count()} topics across {len(table)} languages from {data_path}")
    return table
