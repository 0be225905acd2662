from __future__ import annotations
from pathlib import Path
from typing import Any
import json
import logging
import os
import tempfile

from .engine import find_conflict, validate_event
from .errors import SchedulingError
from .store import DayEventStore

log = logging.getLogger(__name__)

STATE_PATH_DEFAULT = "~/.local/share/daycal/events.json"

def _check_invariants(store: DayEventStore) -> None:
    for key, events in store.items():
        for idx, event in enumerate(events):
            validate_event(event)
            conflict = find_conflict(events[:idx], event)
            if conflict is not None:
                raise ValueError(f"Events {conflict[1].name!r} and {event.name!r} on {key} overlap.")

def load_store(path: str | Path) -> DayEventStore:
    """Read the stored events; anything missing, malformed or invalid yields an empty store."""
    p = Path(path).expanduser()
    if not p.exists():
        return DayEventStore()
    try:
        data: Any = json.loads(p.read_text(encoding="utf-8"))
        store = DayEventStore.from_dict(data)
        _check_invariants(store)
        return store
    except (OSError, ValueError, KeyError, TypeError, SchedulingError) as e:
        log.warning("Ignoring unreadable event state at %s: %s", p, e)
        return DayEventStore()

def save_store(path: str | Path, store: DayEventStore) -> None:
    p = Path(path).expanduser()
    p.parent.mkdir(parents=True, exist_ok=True)
    payload = json.dumps(store.to_dict(), indent=2, ensure_ascii=False)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{p.name}.", suffix=".tmp", dir=str(p.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
        os.replace(tmp_name, p)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class PersistenceAdapter:
    """Full-snapshot persistence of a DayEventStore into a single JSON file.

    Until a non-empty store has been loaded or saved, saving an empty store is
    skipped so a not-yet-hydrated calendar never overwrites durable state.
    """

    def __init__(self, path: str | Path = STATE_PATH_DEFAULT) -> None:
        self.path = Path(path).expanduser()
        self._has_data = False

    def load(self) -> DayEventStore:
        store = load_store(self.path)
        if len(store):
            self._has_data = True
        log.debug("Loaded %d day(s) from %s", len(store), self.path)
        return store

    def save(self, store: DayEventStore) -> bool:
        if not len(store) and not self._has_data:
            log.debug("Store is empty and nothing was loaded; skipping save to %s", self.path)
            return False
        save_store(self.path, store)
        if len(store):
            self._has_data = True
        return True
