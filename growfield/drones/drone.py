"""Drone — an autonomous farm agent.

A drone is a ``Motion`` (where it is, how fast it travels) composed with
a behaviour strategy (``Seeder`` or ``Harvester``) that decides where to
go and what to do on arrival.  Every tick runs the same cycle:

1. With no target yet, ask the behaviour to decide one.
2. Move toward the target cell's centre.
3. On reaching it, apply the behaviour's arrival effect and decide the
   next target straight away.

Targets are cached between ticks, so the grid search behind ``decide``
only runs on arrival rather than every frame.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from growfield.drones.behaviours import Harvester, Seeder
from growfield.drones.motion import Motion

if TYPE_CHECKING:
    from collections.abc import Callable

    from growfield.drones.behaviours import Arrival
    from growfield.plants.plant import Plant
    from growfield.world.cell import Cell
    from growfield.world.world import World

logger = logging.getLogger(__name__)


class Behaviour(Protocol):
    """Capabilities a drone kind must provide."""

    label: str
    capacity: int

    @property
    def load(self) -> int: ...

    def describe(self) -> str: ...

    def decide(self, world: World, here: Cell) -> tuple[int, int]: ...

    def on_arrive(
        self,
        cell: Cell,
        plant_factory: Callable[[], Plant],
    ) -> Arrival: ...


@dataclass
class Drone:
    """A single drone agent.

    Attributes:
        behaviour: Decision strategy and load counter for this kind.
        motion: Position and movement state.
        target: Cell currently headed for, or None before the first
            decision.
    """

    behaviour: Behaviour
    motion: Motion
    target: tuple[int, int] | None = None

    @classmethod
    def seeder(
        cls,
        home: tuple[int, int],
        capacity: int,
        speed: float,
        tile_size: int,
    ) -> Drone:
        """Create a fully stocked seeder parked at ``home``."""
        motion = Motion(tile_size=tile_size, speed=speed)
        motion.place_at(*home)
        return cls(behaviour=Seeder(capacity=capacity), motion=motion)

    @classmethod
    def harvester(
        cls,
        home: tuple[int, int],
        capacity: int,
        speed: float,
        tile_size: int,
    ) -> Drone:
        """Create an empty harvester parked at ``home``."""
        motion = Motion(tile_size=tile_size, speed=speed)
        motion.place_at(*home)
        return cls(behaviour=Harvester(capacity=capacity), motion=motion)

    # -- Read surface --

    @property
    def x(self) -> float:
        return self.motion.x

    @property
    def y(self) -> float:
        return self.motion.y

    @property
    def capacity(self) -> int:
        return self.behaviour.capacity

    @property
    def load(self) -> int:
        return self.behaviour.load

    @property
    def status(self) -> str:
        """Human-readable one-line summary, e.g. for a debug overlay."""
        if self.target is None:
            where = "(-,-)"
        else:
            where = f"({self.target[0]},{self.target[1]})"
        return f"{self.behaviour.label} {self.behaviour.describe()} target={where}"

    # -- Simulation --

    def decide(self, world: World) -> tuple[int, int]:
        """Choose and cache a new target from the drone's current cell."""
        here = world.cell_at(*self.motion.cell())
        self.target = self.behaviour.decide(world, here)
        return self.target

    def update(
        self,
        world: World,
        dt: float,
        plant_factory: Callable[[], Plant],
    ) -> Arrival | None:
        """Perform one tick of decision-making and movement.

        Args:
            world: The grid to search and act on.
            dt: Elapsed seconds for this tick.
            plant_factory: Creates the plant a seeder sows.

        Returns:
            The arrival outcome if the drone reached its target this
            tick, otherwise None.
        """
        tx, ty = self.target if self.target is not None else self.decide(world)
        self.motion.move_toward(tx, ty, dt)
        if not self.motion.at_centre_of(tx, ty):
            return None

        arrival = self.behaviour.on_arrive(world.cell_at(tx, ty), plant_factory)
        if arrival.amount:
            logger.debug(
                f"{self.behaviour.label} {arrival.action.name.lower()} "
                f"x{arrival.amount} at {arrival.cell}",
            )
        self.decide(world)
        return arrival
