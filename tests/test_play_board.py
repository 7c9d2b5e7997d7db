"""Tests du chargement et de l'écriture des lignes d'unités du lanceur."""

from __future__ import annotations

import json
import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

from play_board import load_records, parse_args, save_rows
from tactical.app.board_service import BoardService
from tactical.app.records import default_records
from tactical.engine.maneuvers import Maneuver


def test_saved_rows_reload_as_same_records(tmp_path) -> None:
    path = tmp_path / "units.json"

    save_rows(str(path), default_records())

    rows = json.loads(path.read_text(encoding="utf-8"))
    assert rows[1] == {
        "id": 1,
        "position_x": 300.0,
        "position_y": 220.0,
        "rotation": 0.0,
        "type": "default",
        "name": "Unit 2",
    }
    assert load_records(str(path)) == default_records()


def test_commit_rewrites_save_file(tmp_path) -> None:
    path = tmp_path / "units.json"
    service = BoardService()
    service.on_units_changed(lambda records: save_rows(str(path), records))
    service.initialize(default_records())

    assert not path.exists()

    service.apply_maneuver(0, Maneuver.QUARTER_RIGHT)

    rows = json.loads(path.read_text(encoding="utf-8"))
    assert (rows[0]["position_x"], rows[0]["position_y"]) == pytest.approx((300.0, 220.0))
    assert rows[0]["rotation"] == 90.0


def test_empty_units_file_falls_back_to_starter_units(tmp_path) -> None:
    path = tmp_path / "empty.json"
    path.write_text("[]", encoding="utf-8")

    assert load_records(str(path)) == default_records()
    assert load_records(None) == default_records()


def test_parse_args_defaults() -> None:
    args = parse_args([])

    assert args.units is None and args.save is None
    assert args.log_level == "INFO"
