import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.append(str(SRC))

from assistant.types import KnowledgeTable, Reply, TopicRecord  # noqa: E402


def make_table():
    return KnowledgeTable(
        [
            ("Go", [("channels", TopicRecord("Channels", "pipes")), ("goroutines", TopicRecord("Goroutines", "threads"))]),
            ("Rust", [("ownership", TopicRecord("Ownership", "borrowing", "let a = b;"))]),
        ]
    )


def test_order_is_preserved():
    table = make_table()
    assert table.languages() == ["Go", "Rust"]
    assert list(table.topics("Go")) == ["channels", "goroutines"]
    assert [language for language, _ in table] == ["Go", "Rust"]
    assert len(table) == 2
    assert table.topic_count() == 3


def test_get():
    table = make_table()
    assert table.get("Rust", "ownership").examples == "let a = b;"
    assert table.get("Rust", "lifetimes") is None
    assert table.get("Zig", "comptime") is None


def test_duplicate_language_rejected():
    with pytest.raises(ValueError, match="Duplicate language"):
        KnowledgeTable([("Go", []), ("Go", [])])


def test_duplicate_topic_rejected():
    record = TopicRecord("Channels", "pipes")
    with pytest.raises(ValueError, match="Duplicate topic key"):
        KnowledgeTable([("Go", [("channels", record), ("channels", record)])])


def test_table_is_read_only():
    table = make_table()
    with pytest.raises(TypeError):
        table.topics("Go")["select"] = TopicRecord("Select", "multiplexing")


def test_records_are_frozen():
    record = TopicRecord("Channels", "pipes")
    with pytest.raises(AttributeError):
        record.topic = "Other"
    assert Reply("hi").code is None
