import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.append(str(SRC))

from assistant.config import (  # noqa: E402
    DEFAULT_KNOWLEDGE_SOURCE,
    knowledge_source,
    load_config,
    typing_delay_seconds,
)


def test_bundled_config_loads():
    cfg = load_config(str(ROOT / "config" / "assistant.json"))
    assert cfg["knowledge"]["source"] == DEFAULT_KNOWLEDGE_SOURCE
    assert typing_delay_seconds(cfg) == pytest.approx(0.4)


def test_yaml_config(tmp_path):
    path = tmp_path / "assistant.yaml"
    path.write_text("conversation:\n  typing_delay_ms: 250\n", encoding="utf-8")
    cfg = load_config(str(path))
    assert typing_delay_seconds(cfg) == pytest.approx(0.25)


def test_empty_yaml_is_empty_config(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)) == {}


def test_missing_config(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.json"))


def test_unsupported_format(tmp_path):
    path = tmp_path / "assistant.toml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported config format"):
        load_config(str(path))


def test_non_mapping_root(tmp_path):
    path = tmp_path / "list.json"
    path.write_text(json.dumps([1, 2]), encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_config(str(path))


def test_defaults_and_overrides():
    assert knowledge_source({}) == DEFAULT_KNOWLEDGE_SOURCE
    assert knowledge_source({"knowledge": {"source": "a.jsonl"}}, "b.jsonl") == "b.jsonl"
    assert typing_delay_seconds({}) == 0.0
    assert typing_delay_seconds({"conversation": {"typing_delay_ms": -5}}) == 0.0
