from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List
import yaml

from .models import DEFAULT_EVENT_TYPE
from .month import DEFAULT_TYPE_COLORS
from .state import STATE_PATH_DEFAULT

@dataclass
class StorageConfig:
    path: str

@dataclass
class ExportConfig:
    directory: str

@dataclass
class EventsConfig:
    default_type: str
    types: Dict[str, List[int]] = field(default_factory=dict)

@dataclass
class DisplayConfig:
    width: int
    height: int

@dataclass
class LoggingConfig:
    level: str

@dataclass
class AppConfig:
    timezone: str
    storage: StorageConfig
    export: ExportConfig
    events: EventsConfig
    display: DisplayConfig
    logging: LoggingConfig

def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = data.get(name, {}) or {}
    if not isinstance(value, dict):
        raise ValueError(f"Config section {name!r} must be a mapping.")
    return value

def load_config(path: str | None) -> AppConfig:
    data: Dict[str, Any] = {}
    if path:
        p = Path(path).expanduser()
        if p.exists():
            data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config {path} must contain a YAML mapping.")

    storage = _section(data, "storage")
    export = _section(data, "export")
    events = _section(data, "events")
    display = _section(data, "display")
    logging_cfg = _section(data, "logging")

    types = events.get("types")
    if types is None:
        types = {name: list(color) for name, color in DEFAULT_TYPE_COLORS.items()}

    return AppConfig(
        timezone=str(data.get("timezone", "UTC")),
        storage=StorageConfig(
            path=str(storage.get("path", STATE_PATH_DEFAULT)),
        ),
        export=ExportConfig(
            directory=str(export.get("directory", ".")),
        ),
        events=EventsConfig(
            default_type=str(events.get("default_type", DEFAULT_EVENT_TYPE)),
            types={str(name): [int(c) for c in color] for name, color in types.items()},
        ),
        display=DisplayConfig(
            width=int(display.get("width", 1400)),
            height=int(display.get("height", 1000)),
        ),
        logging=LoggingConfig(
            level=str(logging_cfg.get("level", "WARNING")).upper(),
        ),
    )
