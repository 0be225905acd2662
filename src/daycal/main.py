from __future__ import annotations

import argparse
import logging
import os
import sys
from datetime import date, datetime, time
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from dotenv import load_dotenv

from .config import AppConfig, load_config
from .engine import SchedulingEngine
from .errors import SchedulingError
from .export import EXPORT_FORMATS, select_month, write_export
from .models import Event, day_key, parse_day_key
from .render import render_month
from .state import PersistenceAdapter

CONFIG_PATH_DEFAULT = "~/.config/daycal/config.yaml"


def _parse_hhmm(s: str) -> time:
    hh, mm = s.strip().split(":")
    return time(hour=int(hh), minute=int(mm))


def _normalize_time(s: Optional[str]) -> str:
    # Blank stays blank so the engine reports the missing field.
    if s is None or not s.strip():
        return ""
    try:
        return _parse_hhmm(s).strftime("%H:%M")
    except ValueError as e:
        raise ValueError(f"Invalid time {s!r}; expected HH:MM") from e


def _parse_day(s: str) -> str:
    try:
        return day_key(parse_day_key(s.strip()))
    except ValueError as e:
        raise ValueError(f"Invalid date {s!r}; expected YYYY-MM-DD") from e


def _parse_month(s: Optional[str], today: date) -> Tuple[int, int]:
    if not s:
        return today.year, today.month
    try:
        year, month = (int(p) for p in s.split("-"))
    except ValueError as e:
        raise ValueError(f"Invalid month {s!r}; expected YYYY-MM") from e
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month {s!r}; expected YYYY-MM")
    return year, month


def _today(cfg: AppConfig) -> date:
    try:
        tz = ZoneInfo(cfg.timezone)
    except ZoneInfoNotFoundError as e:
        raise ValueError(f"Unknown timezone {cfg.timezone!r} in config") from e
    return datetime.now(tz=tz).date()


def _format_event(index: int, e: Event) -> str:
    desc = f" - {e.description}" if e.description else ""
    return f"[{index}] {e.start_time}-{e.end_time} {e.name} ({e.type}){desc}"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="daycal", description="Personal day calendar with conflict-free scheduling")
    ap.add_argument("--config", default=None, help="YAML config path (env: DAYCAL_CONFIG)")
    ap.add_argument("--state", default=None, help="Event store path (env: DAYCAL_STATE)")
    ap.add_argument("--log-level", default=None)
    sub = ap.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add", help="Add an event to a day")
    add.add_argument("date")
    add.add_argument("name")
    add.add_argument("start")
    add.add_argument("end")
    add.add_argument("--description")
    add.add_argument("--type", dest="event_type")

    edit = sub.add_parser("edit", help="Edit the event at INDEX on a day")
    edit.add_argument("date")
    edit.add_argument("index", type=int)
    edit.add_argument("--name")
    edit.add_argument("--start")
    edit.add_argument("--end")
    edit.add_argument("--description")
    edit.add_argument("--type", dest="event_type")

    delete = sub.add_parser("delete", help="Delete the event at INDEX on a day")
    delete.add_argument("date")
    delete.add_argument("index", type=int)

    ls = sub.add_parser("list", help="List the events of a day")
    ls.add_argument("date")
    ls.add_argument("--search", default="", help="Only events whose name contains this keyword")

    export = sub.add_parser("export", help="Export one month to events.json or events.csv")
    export.add_argument("--month", help="YYYY-MM, defaults to the current month")
    export.add_argument("--format", choices=EXPORT_FORMATS, default="json")
    export.add_argument("--output-dir")

    render = sub.add_parser("render", help="Render a month grid image")
    render.add_argument("--month", help="YYYY-MM, defaults to the current month")
    render.add_argument("--selected", help="YYYY-MM-DD day to highlight")
    render.add_argument("--output", required=True)

    return ap


def _cmd_add(engine: SchedulingEngine, cfg: AppConfig, args: argparse.Namespace) -> None:
    day = _parse_day(args.date)
    event = Event(
        name=args.name.strip(),
        start_time=_normalize_time(args.start),
        end_time=_normalize_time(args.end),
        description=args.description,
        type=args.event_type or cfg.events.default_type,
    )
    engine.add_event(day, event)
    print(f"Event added successfully: {_format_event(len(engine.get(day)) - 1, event)}")


def _cmd_edit(engine: SchedulingEngine, args: argparse.Namespace) -> None:
    day = _parse_day(args.date)
    events = engine.get(day)
    current = events[args.index] if 0 <= args.index < len(events) else Event("", "", "")
    updated = Event(
        name=current.name if args.name is None else args.name.strip(),
        start_time=current.start_time if args.start is None else _normalize_time(args.start),
        end_time=current.end_time if args.end is None else _normalize_time(args.end),
        description=current.description if args.description is None else args.description,
        type=current.type if args.event_type is None else args.event_type,
    )
    engine.edit_event(day, args.index, updated)
    print(f"Event edited successfully: {_format_event(args.index, updated)}")


def _cmd_delete(engine: SchedulingEngine, args: argparse.Namespace) -> None:
    removed = engine.delete_event(_parse_day(args.date), args.index)
    print(f"Event deleted successfully: {removed.name}")


def _cmd_list(engine: SchedulingEngine, args: argparse.Namespace) -> None:
    day = _parse_day(args.date)
    matches = engine.search(day, args.search)
    if not matches:
        print("No events found.")
        return
    print(f"Events on {day} ({len(matches)}):")
    for idx, e in matches:
        print(f"  {_format_event(idx, e)}")


def _cmd_export(engine: SchedulingEngine, cfg: AppConfig, args: argparse.Namespace) -> None:
    year, month = _parse_month(args.month, _today(cfg))
    selection = select_month(engine.store, year, month)
    out_path = write_export(selection, args.output_dir or cfg.export.directory, args.format)
    print(f"Exported {sum(len(events) for _, events in selection)} event(s) to {out_path}")


def _cmd_render(engine: SchedulingEngine, cfg: AppConfig, args: argparse.Namespace) -> None:
    today = _today(cfg)
    year, month = _parse_month(args.month, today)
    selected = parse_day_key(_parse_day(args.selected)) if args.selected else None
    img = render_month(
        canvas_w=cfg.display.width,
        canvas_h=cfg.display.height,
        year=year,
        month=month,
        event_days=engine.days(),
        today=today,
        selected=selected,
        day_types={key: [e.type for e in events] for key, events in engine.store.items()},
        palette=cfg.events.types,
    )
    img.save(args.output)
    print(f"Rendered {year:04d}-{month:02d} to {args.output}")


def run(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = _build_parser().parse_args(argv)

    try:
        cfg = load_config(args.config or os.environ.get("DAYCAL_CONFIG") or CONFIG_PATH_DEFAULT)
    except (ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}")
        return 1
    _configure_logging(args.log_level or cfg.logging.level)

    state_path = args.state or os.environ.get("DAYCAL_STATE") or cfg.storage.path
    engine = SchedulingEngine.from_persistence(PersistenceAdapter(state_path))

    try:
        if args.command == "add":
            _cmd_add(engine, cfg, args)
        elif args.command == "edit":
            _cmd_edit(engine, args)
        elif args.command == "delete":
            _cmd_delete(engine, args)
        elif args.command == "list":
            _cmd_list(engine, args)
        elif args.command == "export":
            _cmd_export(engine, cfg, args)
        elif args.command == "render":
            _cmd_render(engine, cfg, args)
    except (SchedulingError, ValueError) as e:
        print(f"Error: {e}")
        return 1
    return 0


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
