"""Unités du plateau et registre ordonné (ENG).

Une `Unit` est un enregistrement immuable. Toute modification passe par un
remplacement complet de l'enregistrement (`dataclasses.replace`), ce qui
permet de détecter les changements par simple comparaison de valeurs.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Hashable, Iterable, Iterator, Optional, Tuple

from tactical.engine.geometry import Point

UnitId = Hashable


@dataclass(frozen=True)
class Unit:
    """Jeton rectangulaire posé sur le plateau.

    Args:
        id: Identifiant stable (opaque, hashable)
        x: Coordonnée monde du coin avant-gauche
        y: Coordonnée monde du coin avant-gauche
        rotation: Cap en degrés (0 = nord, sens horaire), jamais normalisé
        selected: True si l'unité est sélectionnée
        type: Métadonnée opaque, transmise telle quelle
        name: Métadonnée opaque, transmise telle quelle
    """

    id: UnitId
    x: float
    y: float
    rotation: float = 0.0
    selected: bool = False
    type: Any = "default"
    name: Any = ""

    @property
    def position(self) -> Point:
        return (self.x, self.y)

    def moved_to(self, position: Point, rotation: Optional[float] = None) -> "Unit":
        """Return a copy placed at `position` (and `rotation` if given)."""
        return replace(
            self,
            x=position[0],
            y=position[1],
            rotation=self.rotation if rotation is None else rotation,
        )


UnitUpdater = Callable[[Unit], Unit]


class UnitRegistry:
    """Collection ordonnée d'unités, mise à jour par copie.

    Les unités non concernées par une mise à jour sont conservées telles
    quelles (mêmes objets), seule l'unité ciblée est remplacée.
    """

    __slots__ = ("_units",)

    def __init__(self, units: Iterable[Unit] = ()) -> None:
        self._units: Tuple[Unit, ...] = tuple(units)

    @property
    def units(self) -> Tuple[Unit, ...]:
        return self._units

    def __iter__(self) -> Iterator[Unit]:
        return iter(self._units)

    def __len__(self) -> int:
        return len(self._units)

    def __contains__(self, unit_id: object) -> bool:
        return any(unit.id == unit_id for unit in self._units)

    def get(self, unit_id: UnitId) -> Optional[Unit]:
        """Return the unit with `unit_id`, or None if absent."""
        return next((unit for unit in self._units if unit.id == unit_id), None)

    @property
    def selected(self) -> Optional[Unit]:
        return next((unit for unit in self._units if unit.selected), None)

    def replace_all(self, units: Iterable[Unit]) -> None:
        """Remplace toute la collection."""
        self._units = tuple(units)

    def replace_unit(self, unit_id: UnitId, updater: UnitUpdater) -> bool:
        """Apply `updater` to the unit matching `unit_id`.

        Absent ids are ignored: late events for a removed unit must not
        interrupt the event loop.

        Returns:
            True if a unit was replaced, False otherwise
        """
        for index, unit in enumerate(self._units):
            if unit.id == unit_id:
                self._units = self._units[:index] + (updater(unit),) + self._units[index + 1:]
                return True
        return False

    def select_only(self, unit_id: Optional[UnitId]) -> None:
        """Select `unit_id` and deselect every other unit (None deselects all)."""
        self._units = tuple(
            unit if unit.selected == (unit.id == unit_id) else replace(unit, selected=unit.id == unit_id)
            for unit in self._units
        )


__all__ = ["UnitId", "Unit", "UnitUpdater", "UnitRegistry"]
