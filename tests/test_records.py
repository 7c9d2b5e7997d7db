"""Tests des conversions d'enregistrements (frontière avec la persistance)."""

import pytest

from tactical.app.records import (
    default_records,
    normalize_rows,
    records_to_rows,
    unit_from_record,
    unit_to_record,
)
from tactical.engine.units import Unit


def test_unit_record_round_trip() -> None:
    unit = Unit(id="u-1", x=12.5, y=-3.0, rotation=-450.0, type="art", name="Battery")

    record = unit_to_record(unit)

    assert record == {
        "id": "u-1",
        "position": {"x": 12.5, "y": -3.0},
        "rotation": -450.0,
        "type": "art",
        "name": "Battery",
    }
    assert unit_from_record(record) == unit


@pytest.mark.parametrize(
    "record",
    [
        {"position": {"x": 1, "y": 2}, "rotation": 0},
        {"id": 1, "rotation": 0},
        {"id": 1, "position": {"x": 1}, "rotation": 0},
        {"id": 1, "position": {"x": 1, "y": 2}},
        {"id": 1, "position": None, "rotation": 0},
    ],
)
def test_unit_from_record_rejects_incomplete_records(record) -> None:
    with pytest.raises(ValueError):
        unit_from_record(record)


def test_normalize_rows_fills_defaults_by_index() -> None:
    rows = [
        {"id": 10, "position_x": 50, "position_y": 60, "rotation": 45, "type": "inf", "name": "A"},
        {"id": 11},
        {"position_x": None, "position_y": 0, "rotation": None, "name": ""},
    ]

    records = normalize_rows(rows)

    assert records[0] == {
        "id": 10,
        "position": {"x": 50.0, "y": 60.0},
        "rotation": 45.0,
        "type": "inf",
        "name": "A",
    }
    assert records[1]["position"] == {"x": 300.0, "y": 220.0}
    assert records[1]["name"] == "Unit 1"
    assert records[2]["id"] == 2
    assert records[2]["position"] == {"x": 400.0, "y": 220.0}
    assert records[2]["type"] == "default"


def test_records_to_rows_flattens_positions() -> None:
    rows = records_to_rows(default_records())

    assert rows[0] == {
        "id": 0,
        "position_x": 200.0,
        "position_y": 220.0,
        "rotation": 0.0,
        "type": "default",
        "name": "Unit 1",
    }
    assert len(rows) == 2


def test_default_records_are_fresh_copies() -> None:
    first = default_records()
    first[0]["position"]["x"] = -1.0

    assert default_records()[0]["position"]["x"] == 200.0


def test_unit_metadata_is_passed_through_unchanged() -> None:
    record = {"id": 4, "position": {"x": 0, "y": 0}, "rotation": 0, "type": None, "name": None}

    unit = unit_from_record(record)

    assert unit.type is None
    assert unit.name is None
    assert unit_to_record(unit)["name"] is None


def test_missing_metadata_gets_neutral_values() -> None:
    unit = unit_from_record({"id": 4, "position": {"x": 0, "y": 0}, "rotation": 0})

    assert (unit.type, unit.name) == ("default", "")
