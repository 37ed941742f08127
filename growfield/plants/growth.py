"""Plant creation and per-tick growth.

Separated from ``plant.py`` so that the state machine stays free of
configuration and randomness: the factory decides each new plant's
duration table, and ``update_plants`` drives every plant in the world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from growfield.plants.plant import Plant, PlantType

if TYPE_CHECKING:
    from numpy.random import Generator

    from growfield.simulation.config import SimulationConfig
    from growfield.world.world import World

BASIC_SPECIES = "basic"


@dataclass
class PlantFactory:
    """Creates plants of the configured species.

    Attributes:
        config: Simulation configuration (stage count and durations).
        rng: Random generator used for per-plant duration tables.
        plant_type: The shared species description.
    """

    config: SimulationConfig
    rng: Generator
    plant_type: PlantType = field(init=False)

    def __post_init__(self) -> None:
        """Derive the species from the configured stage settings."""
        stages = self.config.plant_growth_stages
        fixed = self.config.stage_seconds
        if fixed is not None:
            reference = tuple(float(s) for s in fixed[:stages])
        else:
            # Placeholder; each plant draws its own table.
            reference = (1.0,) * stages
        self.plant_type = PlantType(
            id=BASIC_SPECIES,
            stages=stages,
            stage_seconds=reference,
        )

    def stage_durations(self) -> list[float]:
        """Return a fresh duration-per-stage table.

        Uses the fixed table when one is configured, otherwise draws
        each stage uniformly from ``[stage_seconds_min, stage_seconds_max)``.
        """
        if self.config.stage_seconds is not None:
            return list(self.plant_type.stage_seconds)
        lo = self.config.stage_seconds_min
        hi = self.config.stage_seconds_max
        draws = self.rng.uniform(lo, hi, size=self.plant_type.stages)
        return [float(d) for d in draws]

    def __call__(self) -> Plant:
        """Create a new stage-0 plant."""
        return Plant(type=self.plant_type, stage_seconds=self.stage_durations())


def update_plants(world: World, dt: float) -> None:
    """Advance every plant in the world by ``dt`` seconds.

    Cells are visited in row-major order.

    Args:
        world: The world whose plants should grow.
        dt: Elapsed seconds for this tick.
    """
    for cell in world.iter_cells():
        if cell.plant is not None:
            cell.plant.update(dt)
