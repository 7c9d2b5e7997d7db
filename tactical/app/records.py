"""Conversion entre unités et enregistrements externes.

Deux formes d'enregistrement sont manipulées:
- l'enregistrement du plateau: ``{id, position: {x, y}, rotation, type, name}``
  consommé par `BoardService.initialize` et émis vers `on_units_changed`;
- la ligne de persistance: ``{id, position_x, position_y, rotation, type, name}``
  telle que stockée par le collaborateur externe.

Le coeur ne fabrique aucune valeur par défaut: c'est `normalize_rows` (côté
appelant) qui complète les lignes incomplètes.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping

from tactical.engine.units import Unit

UnitRecord = Dict[str, Any]

DEFAULT_X = 200.0
DEFAULT_X_STEP = 100.0
DEFAULT_Y = 220.0
DEFAULT_TYPE = "default"


def unit_to_record(unit: Unit) -> UnitRecord:
    """Convertit une unité en enregistrement JSON-friendly."""

    return {
        "id": unit.id,
        "position": {"x": unit.x, "y": unit.y},
        "rotation": unit.rotation,
        "type": unit.type,
        "name": unit.name,
    }


def unit_from_record(record: Mapping[str, Any]) -> Unit:
    """Reconstruit une unité à partir d'un enregistrement du plateau.

    Raises:
        ValueError: if `id`, `position` or `rotation` is missing
    """

    try:
        unit_id = record["id"]
        position = record["position"]
        x, y = float(position["x"]), float(position["y"])
        rotation = float(record["rotation"])
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Enregistrement d'unité incomplet: {record!r}") from exc

    return Unit(
        id=unit_id,
        x=x,
        y=y,
        rotation=rotation,
        type=record.get("type", DEFAULT_TYPE),
        name=record.get("name", ""),
    )


def records_to_rows(records: Iterable[Mapping[str, Any]]) -> List[UnitRecord]:
    """Aplatit les enregistrements du plateau en lignes de persistance."""

    return [
        {
            "id": record["id"],
            "position_x": record["position"]["x"],
            "position_y": record["position"]["y"],
            "rotation": record["rotation"],
            "type": record.get("type") or DEFAULT_TYPE,
            "name": record.get("name") or f"Unit {record['id']}",
        }
        for record in records
    ]


def normalize_rows(rows: Iterable[Mapping[str, Any]]) -> List[UnitRecord]:
    """Complète des lignes de persistance et les convertit en enregistrements.

    Valeurs par défaut par index de ligne: x = 200 + 100 * idx, y = 220,
    rotation 0, type 'default', nom 'Unit {idx}'. Les valeurs nulles ou
    absentes sont remplacées, comme le ferait la page appelante.
    """

    records: List[UnitRecord] = []
    for idx, row in enumerate(rows):
        records.append(
            {
                "id": row.get("id") if row.get("id") is not None else idx,
                "position": {
                    "x": float(row.get("position_x") or DEFAULT_X + idx * DEFAULT_X_STEP),
                    "y": float(row.get("position_y") or DEFAULT_Y),
                },
                "rotation": float(row.get("rotation") or 0.0),
                "type": row.get("type") or DEFAULT_TYPE,
                "name": row.get("name") or f"Unit {idx}",
            }
        )
    return records


def default_records() -> List[UnitRecord]:
    """Deux unités de départ pour un cas sans unités."""

    return [
        {"id": 0, "position": {"x": 200.0, "y": 220.0}, "rotation": 0.0, "type": DEFAULT_TYPE, "name": "Unit 1"},
        {"id": 1, "position": {"x": 300.0, "y": 220.0}, "rotation": 0.0, "type": DEFAULT_TYPE, "name": "Unit 2"},
    ]


__all__ = [
    "UnitRecord",
    "unit_to_record",
    "unit_from_record",
    "records_to_rows",
    "normalize_rows",
    "default_records",
]
