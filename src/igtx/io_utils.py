"""I/O utilities for JSON, JSONL and report serialization (orjson)."""
from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

import orjson

if TYPE_CHECKING:
    from igtx.parsing_types import ParseReport

PRETTY_OPTS = orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS


def utc_now_iso() -> str:
    """Current UTC timestamp in ISO-8601 format."""
    return datetime.now(UTC).isoformat()


def load_json(path: Path) -> Any:
    return orjson.loads(path.read_bytes())


def save_json(obj: Any, path: Path, *, pretty: bool = True) -> None:
    """Save an object as JSON; keys are always sorted."""
    path.parent.mkdir(parents=True, exist_ok=True)
    opts = PRETTY_OPTS if pretty else orjson.OPT_SORT_KEYS
    path.write_bytes(orjson.dumps(obj, option=opts))


def load_jsonl(path: Path) -> list[dict[str, Any]]:
    """Load a JSON Lines file (one JSON object per line). Blank lines skipped."""
    records: list[dict[str, Any]] = []
    for line in path.read_bytes().split(b"\n"):
        line = line.strip()
        if line:
            records.append(orjson.loads(line))
    return records


def dumps_report(report: ParseReport, *, pretty: bool = True) -> bytes:
    """Serialize a ParseReport; dates come out as ``YYYY-MM-DD``."""
    opts = PRETTY_OPTS if pretty else orjson.OPT_SORT_KEYS
    return orjson.dumps(report.as_dict(), option=opts)
