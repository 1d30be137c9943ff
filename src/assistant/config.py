import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

DEFAULT_CONFIG_PATH = "config/assistant.json"
DEFAULT_KNOWLEDGE_SOURCE = "data/programming_knowledge.jsonl"


def load_config(path: str) -> Dict[str, Any]:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()
    with config_path.open("r", encoding="utf-8") as f:
        if suffix == ".json":
            data = json.load(f)
        elif suffix in {".yml", ".yaml"}:
            try:
                import yaml  # type: ignore
            except ImportError as exc:
                raise ImportError("YAML config requires PyYAML") from exc
            data = yaml.safe_load(f)
        else:
            raise ValueError(f"Unsupported config format: {config_path.suffix}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a mapping: {config_path}")
    return data


def knowledge_source(config: Dict[str, Any], override: Optional[str] = None) -> str:
    return override or config.get("knowledge", {}).get("source", DEFAULT_KNOWLEDGE_SOURCE)


def typing_delay_seconds(config: Dict[str, Any]) -> float:
    delay_ms = config.get("conversation", {}).get("typing_delay_ms", 0)
    return max(float(delay_ms), 0.0) / 1000.0


def configure_logging(config: Dict[str, Any]) -> None:
    level = config.get("logging", {}).get("level", "INFO")
    logger.remove()
    logger.add(sys.stderr, level=str(level).upper())
