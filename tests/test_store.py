from datetime import date

import pytest

from daycal.models import Event, day_key, parse_day_key
from daycal.store import DayEventStore


def test_setting_an_empty_sequence_removes_the_day():
    store = DayEventStore()
    store.set("2026-02-05", [Event("Gym", "07:00", "08:00")])

    store.set("2026-02-05", [])

    assert "2026-02-05" not in store
    assert store.get("2026-02-05") == []


def test_get_returns_a_copy():
    store = DayEventStore({"2026-02-05": [Event("Gym", "07:00", "08:00")]})

    store.get("2026-02-05").clear()

    assert len(store.get("2026-02-05")) == 1


def test_remove_missing_day_is_a_noop():
    store = DayEventStore()
    store.remove("2026-02-05")
    assert len(store) == 0


def test_day_key_is_zero_padded_and_sortable():
    keys = [day_key(date(2026, 10, 2)), day_key(date(2026, 2, 10)), day_key(date(999, 1, 1))]

    assert keys == ["2026-10-02", "2026-02-10", "0999-01-01"]
    assert sorted(keys) == ["0999-01-01", "2026-02-10", "2026-10-02"]


@pytest.mark.parametrize("bad", ["Thu Feb 05 2026", "2026-02", "2026-13-01", "2026-02-30", ""])
def test_parse_day_key_rejects_malformed_keys(bad):
    with pytest.raises(ValueError):
        parse_day_key(bad)


def test_event_wire_form_omits_missing_description():
    assert Event("Gym", "07:00", "08:00", type="Personal").to_dict() == {
        "name": "Gym",
        "startTime": "07:00",
        "endTime": "08:00",
        "type": "Personal",
    }
    assert Event.from_dict({"name": "Gym", "startTime": "07:00", "endTime": "08:00"}).type == "Work"


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "x",
        {"name": None, "startTime": "07:00", "endTime": "08:00"},
        {"name": "Gym", "startTime": 7, "endTime": "08:00"},
        {"name": "Gym", "startTime": "07:00"},
    ],
)
def test_event_from_dict_rejects_non_objects_and_non_string_fields(raw):
    with pytest.raises(ValueError):
        Event.from_dict(raw)
