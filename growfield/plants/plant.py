"""Plant — per-cell growth state machine.

A plant advances through ``stages`` discrete growth phases.  The last
stage is *ripe* and terminal: once there, the plant waits for a
harvester and never changes again.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PlantType:
    """Static description of a plant species.

    Attributes:
        id: Species identifier.
        stages: Number of growth stages (at least 2).
        stage_seconds: Reference duration of each stage in seconds.
    """

    id: str
    stages: int
    stage_seconds: tuple[float, ...]


@dataclass
class Plant:
    """A single plant growing in a field cell.

    Attributes:
        type: The species this plant belongs to.
        stage_seconds: This plant's own duration-per-stage table.
        stage: Current growth stage (0 = seed, ``stages - 1`` = ripe).
        timer: Seconds accumulated within the current stage.
    """

    type: PlantType
    stage_seconds: list[float] = field(default_factory=list)
    stage: int = 0
    timer: float = 0.0

    @property
    def is_ripe(self) -> bool:
        """Return True once the plant has reached its terminal stage."""
        return self.stage >= self.type.stages - 1

    def update(self, dt: float) -> None:
        """Accumulate ``dt`` seconds of growth.

        Excess time past the stage boundary carries into the next
        stage, but a single call advances at most one stage.

        Args:
            dt: Elapsed seconds since the previous update.
        """
        if self.is_ripe:
            return
        self.timer += dt
        duration = self.stage_seconds[self.stage]
        if self.timer >= duration:
            self.timer -= duration
            self.stage = min(self.stage + 1, self.type.stages - 1)
