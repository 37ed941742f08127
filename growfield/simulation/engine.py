"""SimulationEngine — the main tick loop.

Owns all simulation state and advances it by a real elapsed-time delta
in a fixed order:

1. Grow plants (every cell, row-major)
2. Update drones (creation order: all seeders, then all harvesters)

The drone order decides which drone wins when several head for the same
cell in the same tick.  A presentation layer drives ``advance`` once per
frame and reads ``world`` and ``drones`` to draw.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.random import Generator

from growfield.drones.behaviours import Action
from growfield.drones.drone import Drone
from growfield.plants.growth import PlantFactory, update_plants
from growfield.simulation.config import SimulationConfig
from growfield.world.world import World

logger = logging.getLogger(__name__)

# Float drift tolerated when comparing the clock against a target time
_CLOCK_EPSILON = 1e-9


@dataclass
class EngineStats:
    """Cumulative bookkeeping since the engine was built.

    Attributes:
        ticks: Number of ``advance`` calls.
        elapsed: Simulated seconds.
        planted: Seeds sown by seeders.
        sprinkled: Plants placed by ``sprinkle_plants``.
        harvested: Ripe plants picked by harvesters.
        stored: Units unloaded at storage.
    """

    ticks: int = 0
    elapsed: float = 0.0
    planted: int = 0
    sprinkled: int = 0
    harvested: int = 0
    stored: int = 0


@dataclass
class SimulationEngine:
    """Drives the farm forward one time delta at a time.

    Attributes:
        config: Validated simulation configuration.
        world: The farm grid.
        drones: All drones, in update order.
        plant_factory: Creates plants with per-plant growth timings.
        rng: Master random generator.
        stats: Cumulative counters.
    """

    config: SimulationConfig
    world: World = field(init=False)
    drones: list[Drone] = field(init=False, default_factory=list)
    plant_factory: PlantFactory = field(init=False)
    rng: Generator = field(init=False)
    stats: EngineStats = field(init=False, default_factory=EngineStats)

    def __post_init__(self) -> None:
        """Validate config, then build world, RNG, and drone fleets.

        Raises:
            ConfigError: If the configuration is invalid.
        """
        cfg = self.config
        cfg.validate()

        seed = cfg.seed if cfg.seed >= 0 else None
        self.rng = np.random.default_rng(seed)
        self.world = World(
            width=cfg.grid_cols,
            height=cfg.grid_rows,
            seeder_rest=tuple(cfg.seeder_rest_pos),
            storage=tuple(cfg.storage_pos),
            allow_diagonals=cfg.allow_diagonals,
        )
        self.plant_factory = PlantFactory(config=cfg, rng=self.rng)

        for _ in range(cfg.seeder_count):
            self.drones.append(
                Drone.seeder(
                    home=self.world.seeder_rest,
                    capacity=cfg.seeder_capacity,
                    speed=cfg.seeder_speed,
                    tile_size=cfg.tile_size,
                ),
            )
        for _ in range(cfg.harvester_count):
            self.drones.append(
                Drone.harvester(
                    home=self.world.storage,
                    capacity=cfg.harvester_capacity,
                    speed=cfg.harvester_speed,
                    tile_size=cfg.tile_size,
                ),
            )

        logger.info(
            f"Built {cfg.grid_cols}x{cfg.grid_rows} farm with "
            f"{cfg.seeder_count} seeders, {cfg.harvester_count} harvesters "
            f"(seed={'random' if seed is None else seed})",
        )

    def advance(self, delta_seconds: float) -> None:
        """Advance the simulation by ``delta_seconds`` of real time.

        Large deltas are accepted: each plant still grows at most one
        stage per call, and drones snap straight onto their target.

        Args:
            delta_seconds: Elapsed seconds since the previous call.

        Raises:
            ValueError: If ``delta_seconds`` is negative.
        """
        if delta_seconds < 0:
            msg = f"delta_seconds must be >= 0, got {delta_seconds}"
            raise ValueError(msg)

        # 1. Plants
        update_plants(self.world, delta_seconds)

        # 2. Drones
        for drone in self.drones:
            arrival = drone.update(self.world, delta_seconds, self.plant_factory)
            if arrival is None:
                continue
            match arrival.action:
                case Action.PLANTED:
                    self.stats.planted += arrival.amount
                case Action.HARVESTED:
                    self.stats.harvested += arrival.amount
                case Action.UNLOADED:
                    self.stats.stored += arrival.amount

        self.stats.ticks += 1
        self.stats.elapsed += delta_seconds

    def run(self, seconds: float, dt: float = 1.0 / 60.0) -> None:
        """Advance in steps of ``dt`` until ``seconds`` more have elapsed.

        Args:
            seconds: Total simulated time.
            dt: Step size in seconds.
        """
        self.run_until(self.stats.elapsed + seconds, dt)

    def run_until(self, elapsed: float, dt: float = 1.0 / 60.0) -> None:
        """Advance in steps of ``dt`` until the clock reaches ``elapsed``.

        The last step is shortened so the clock lands on ``elapsed``
        rather than overshooting or stopping short of it.

        Args:
            elapsed: Target simulated time in seconds.
            dt: Step size in seconds.

        Raises:
            ValueError: If ``dt`` is not positive.
        """
        if dt <= 0:
            msg = f"dt must be positive, got {dt}"
            raise ValueError(msg)
        while self.stats.elapsed < elapsed - _CLOCK_EPSILON:
            self.advance(min(dt, elapsed - self.stats.elapsed))

    def sprinkle_plants(self, count: int) -> int:
        """Scatter up to ``count`` fresh plants on random empty fields.

        Each plant gets ``config.sprinkle_attempts`` random cell picks;
        a plant whose picks all land on stations or occupied fields is
        dropped without error.

        Args:
            count: Number of plants requested.

        Returns:
            Number of plants actually created.
        """
        created = 0
        for _ in range(max(0, count)):
            for _ in range(self.config.sprinkle_attempts):
                x = int(self.rng.integers(0, self.world.width))
                y = int(self.rng.integers(0, self.world.height))
                cell = self.world.cells[y][x]
                if cell.is_empty_field:
                    cell.plant = self.plant_factory()
                    created += 1
                    break

        self.stats.sprinkled += created
        logger.debug(f"Sprinkled {created}/{count} plants")
        return created

    def census(self) -> dict[str, Any]:
        """Summarise the current farm state.

        Returns:
            A mapping with plant counts per stage, ripe and empty field
            counts, and the cumulative stats.
        """
        stages: Counter[int] = Counter()
        empty = 0
        for cell in self.world.iter_cells():
            if cell.plant is not None:
                stages[cell.plant.stage] += 1
            elif cell.is_empty_field:
                empty += 1

        ripe_stage = self.config.plant_growth_stages - 1
        return {
            "tick": self.stats.ticks,
            "elapsed": self.stats.elapsed,
            "plants": sum(stages.values()),
            "by_stage": [stages[s] for s in range(ripe_stage + 1)],
            "ripe": stages[ripe_stage],
            "empty_fields": empty,
            "planted": self.stats.planted,
            "sprinkled": self.stats.sprinkled,
            "harvested": self.stats.harvested,
            "stored": self.stats.stored,
        }
