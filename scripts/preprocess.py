"""
Convert spreadsheet-authored topics into the JSONL knowledge table.

Input: every .xlsx and .csv file in --input_dir, with columns
  language, topic_key, topic, description, examples (optional)
Rows are emitted in file order, then row order; that order is the match
precedence at runtime. Rows missing a required cell are skipped.

Output JSONL schema (one object per line):
{
  "language": str,
  "topic_key": str,
  "topic": str,
  "description": str,
  "examples": str | null
}

Usage:
  python scripts/preprocess.py --input_dir data --output data/programming_knowledge.jsonl
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Dict, List

import pandas as pd

REQUIRED_COLUMNS = ("language", "topic_key", "topic", "description")


def _to_str(x: object) -> str:
    if x is None:
        return ""
    if isinstance(x, float) and pd.isna(x):
        return ""
    return str(x).strip()


def _build_record(row: pd.Series) -> Dict | None:
    record: Dict = {name: _to_str(row.get(name)) for name in REQUIRED_COLUMNS}
    if not all(record.values()):
        return None
    # examples keep their inner indentation; only trailing blank lines go
    examples = row.get("examples")
    if examples is None or (isinstance(examples, float) and pd.isna(examples)):
        record["examples"] = None
    else:
        record["examples"] = str(examples).rstrip() or None
    return record


def read_frame(path: Path) -> pd.DataFrame:
    if path.suffix.lower() == ".csv":
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    else:
        df = pd.read_excel(path, dtype=str)
    df.columns = [str(c).strip().lower() for c in df.columns]
    return df


def process_file(path: Path) -> List[Dict]:
    df = read_frame(path)
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{path.name}: missing columns {', '.join(missing)}")
    records: List[Dict] = []
    for _, row in df.iterrows():
        record = _build_record(row)
        if record is not None:
            records.append(record)
    return records


def collect_records(input_dir: Path) -> List[Dict]:
    sources = sorted(p for p in input_dir.iterdir() if p.is_file() and p.suffix.lower() in {".xlsx", ".csv"})
    records: List[Dict] = []
    for path in sources:
        records.extend(process_file(path))
    return records


def write_jsonl(records: List[Dict], output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as w:
        for obj in records:
            json.dump(obj, w, ensure_ascii=False)
            w.write("\n")


def main() -> None:
    parser = argparse.ArgumentParser(description="Convert XLSX/CSV topic sheets to the JSONL knowledge table.")
    parser.add_argument("--input_dir", default="data", help="Directory containing .xlsx or .csv files")
    parser.add_argument("--output", default="data/programming_knowledge.jsonl", help="Output JSONL file path")
    args = parser.parse_args()

    input_dir = Path(args.input_dir)
    records = collect_records(input_dir)
    if not records:
        print(f"No topic rows found in {input_dir}")
        return

    output_path = Path(args.output)
    write_jsonl(records, output_path)
    print(f"Wrote {len(records)} topics to {output_path}")


if __name__ == "__main__":
    main()
