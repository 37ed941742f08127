"""Cell — a single tile in the farm grid.

A cell's tile kind is fixed when the world is built; only the plant
occupying it changes over the simulation's lifetime.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from growfield.plants.plant import Plant


class TileKind(Enum):
    """Fixed classification of a grid tile."""

    FIELD = "field"
    SEEDER_REST = "seeder_rest"
    STORAGE = "storage"


@dataclass
class Cell:
    """A single tile in the world grid.

    Attributes:
        x: Column position.
        y: Row position.
        kind: Tile designation (field or one of the stations).
        plant: The plant growing here, if any.  Stations never hold one.
    """

    x: int
    y: int
    kind: TileKind = TileKind.FIELD
    plant: Plant | None = None

    @property
    def is_empty_field(self) -> bool:
        """Return True if a seed could be planted here."""
        return self.kind is TileKind.FIELD and self.plant is None

    @property
    def has_ripe_plant(self) -> bool:
        """Return True if this is a field holding a ripe plant."""
        return (
            self.kind is TileKind.FIELD
            and self.plant is not None
            and self.plant.is_ripe
        )
