"""Behaviours — what each drone kind decides and does on arrival.

A behaviour owns the drone's load counter and two decisions:

- ``decide``: which cell to head for next, given where the drone is.
- ``on_arrive``: the effect of reaching that cell.

Neither behaviour locks cells.  Two drones may target the same cell;
whichever the engine updates first acts, and the other finds the cell
no longer suitable on arrival and simply re-decides.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

from growfield.world.cell import Cell, TileKind

if TYPE_CHECKING:
    from collections.abc import Callable

    from growfield.plants.plant import Plant
    from growfield.world.world import World


class Action(Enum):
    """Effect a drone had on the world when it reached its target."""

    PLANTED = auto()
    HARVESTED = auto()
    REFILLED = auto()
    UNLOADED = auto()
    RETARGETED = auto()


@dataclass(frozen=True)
class Arrival:
    """Outcome of one arrival.

    Attributes:
        action: What the drone did.
        cell: Coordinates of the cell it acted on.
        amount: Units moved (seeds sown, plants picked, cargo unloaded).
    """

    action: Action
    cell: tuple[int, int]
    amount: int = 0


@dataclass
class Seeder:
    """Plants seeds on empty fields; refills at the seeder rest station.

    Attributes:
        capacity: Maximum seeds carried.
        seeds: Seeds currently carried.
    """

    label = "Seeder"

    capacity: int
    seeds: int = field(init=False)

    def __post_init__(self) -> None:
        """Seeders leave their station fully stocked."""
        self.seeds = self.capacity

    @property
    def load(self) -> int:
        return self.seeds

    def describe(self) -> str:
        return f"seeds={self.seeds}/{self.capacity}"

    def decide(self, world: World, here: Cell) -> tuple[int, int]:
        """Pick the next target cell.

        Out of seeds, or no empty field left anywhere: go rest.
        Otherwise head for the nearest empty field.
        """
        if self.seeds <= 0:
            return world.seeder_rest
        target = world.nearest_cell(here, lambda c: c.is_empty_field)
        if target is None:
            return world.seeder_rest
        return target.x, target.y

    def on_arrive(
        self,
        cell: Cell,
        plant_factory: Callable[[], Plant],
    ) -> Arrival:
        """Refill at rest, or sow a seed if the field is still empty."""
        where = (cell.x, cell.y)
        if cell.kind is TileKind.SEEDER_REST:
            refilled = self.capacity - self.seeds
            self.seeds = self.capacity
            return Arrival(Action.REFILLED, where, refilled)
        if cell.is_empty_field and self.seeds > 0:
            cell.plant = plant_factory()
            self.seeds -= 1
            return Arrival(Action.PLANTED, where, 1)
        return Arrival(Action.RETARGETED, where)


@dataclass
class Harvester:
    """Picks ripe plants; unloads at the storage station.

    Attributes:
        capacity: Maximum cargo carried.
        cargo: Harvested units currently carried.
    """

    label = "Harvester"

    capacity: int
    cargo: int = 0

    @property
    def load(self) -> int:
        return self.cargo

    def describe(self) -> str:
        return f"cargo={self.cargo}/{self.capacity}"

    def decide(self, world: World, here: Cell) -> tuple[int, int]:
        """Pick the next target cell.

        Full, or nothing ripe anywhere: go to storage.
        Otherwise head for the nearest ripe plant.
        """
        if self.cargo >= self.capacity:
            return world.storage
        target = world.nearest_cell(here, lambda c: c.has_ripe_plant)
        if target is None:
            return world.storage
        return target.x, target.y

    def on_arrive(
        self,
        cell: Cell,
        plant_factory: Callable[[], Plant],
    ) -> Arrival:
        """Unload at storage, or pick the plant if it is still ripe."""
        where = (cell.x, cell.y)
        if cell.kind is TileKind.STORAGE:
            unloaded = self.cargo
            self.cargo = 0
            return Arrival(Action.UNLOADED, where, unloaded)
        if cell.has_ripe_plant and self.cargo < self.capacity:
            cell.plant = None
            self.cargo += 1
            return Arrival(Action.HARVESTED, where, 1)
        return Arrival(Action.RETARGETED, where)
