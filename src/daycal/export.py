from __future__ import annotations

import json
from pathlib import Path
from typing import List, Tuple

from .models import Event, parse_day_key
from .store import DayEventStore

CSV_HEADER = "Date,Name,Start Time,End Time,Description,Type"
EXPORT_FORMATS = ("json", "csv")

Selection = List[Tuple[str, List[Event]]]


def select_month(store: DayEventStore, year: int, month: int) -> Selection:
    """Days of ``year``/``month`` that have events, in store order."""
    selected: Selection = []
    for key, events in store.items():
        try:
            d = parse_day_key(key)
        except ValueError:
            continue
        if d.year == year and d.month == month:
            selected.append((key, events))
    return selected


def to_json(selection: Selection) -> str:
    payload = [[key, [e.to_dict() for e in events]] for key, events in selection]
    return json.dumps(payload, indent=2, ensure_ascii=False)


def from_json(text: str) -> Selection:
    return [(str(key), [Event.from_dict(item) for item in events]) for key, events in json.loads(text)]


def _csv_row(key: str, e: Event) -> str:
    # Only the description is quoted; embedded quotes are left as-is.
    return f'{key},{e.name},{e.start_time},{e.end_time},"{e.description or ""}",{e.type}'


def to_csv(selection: Selection) -> str:
    lines = [CSV_HEADER]
    for key, events in selection:
        lines.extend(_csv_row(key, e) for e in events)
    return "\n".join(lines) + "\n"


def write_export(selection: Selection, directory: str | Path, fmt: str) -> Path:
    fmt = fmt.lower()
    if fmt == "json":
        text = to_json(selection)
    elif fmt == "csv":
        text = to_csv(selection)
    else:
        raise ValueError(f"Unsupported export format: {fmt!r} (expected one of {', '.join(EXPORT_FORMATS)})")

    out_dir = Path(directory).expanduser()
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / f"events.{fmt}"
    out_path.write_text(text, encoding="utf-8")
    return out_path
