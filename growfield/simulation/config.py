"""Config — load simulation parameters from YAML files.

All tunable constants (grid size, station placement, drone fleets,
plant growth timings) live in YAML and are parsed into a typed
dataclass here.  The engine validates the config once at construction
and never mutates it afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

_INT_FIELDS = (
    "seed",
    "grid_cols",
    "grid_rows",
    "tile_size",
    "seeder_count",
    "seeder_capacity",
    "harvester_count",
    "harvester_capacity",
    "plant_growth_stages",
    "sprinkle_attempts",
)
_FLOAT_FIELDS = (
    "seeder_speed",
    "harvester_speed",
    "stage_seconds_min",
    "stage_seconds_max",
)


class ConfigError(ValueError):
    """Raised when a configuration cannot describe a valid farm."""


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        seed: RNG seed for deterministic replay.  A negative value
            requests non-reproducible randomness.
        grid_cols: Number of grid columns.
        grid_rows: Number of grid rows.
        tile_size: Pixel size of one cell; drone positions and speeds
            are expressed in this unit.
        seeder_rest_pos: ``(x, y)`` of the seeder refill station.
        storage_pos: ``(x, y)`` of the harvester unload station.
        seeder_count: Number of seeder drones.
        seeder_capacity: Seeds a seeder carries when full.
        seeder_speed: Seeder travel speed in tiles per second.
        harvester_count: Number of harvester drones.
        harvester_capacity: Plants a harvester carries before unloading.
        harvester_speed: Harvester travel speed in tiles per second.
        plant_growth_stages: Growth stages per plant, ripe included.
        stage_seconds: Fixed duration-per-stage table.  When None each
            plant draws its own table from the min/max range below.
        stage_seconds_min: Lower bound of a randomised stage duration.
        stage_seconds_max: Upper bound of a randomised stage duration.
        allow_diagonals: Use 8-neighbour adjacency in grid searches.
        sprinkle_attempts: Random placements tried per sprinkled plant.
    """

    seed: int = 42
    grid_cols: int = 20
    grid_rows: int = 12
    tile_size: int = 32

    # Stations
    seeder_rest_pos: tuple[int, int] = (1, 1)
    storage_pos: tuple[int, int] = (18, 10)

    # Drone fleets
    seeder_count: int = 5
    seeder_capacity: int = 5
    seeder_speed: float = 4.0
    harvester_count: int = 3
    harvester_capacity: int = 5
    harvester_speed: float = 4.2

    # Plant growth
    plant_growth_stages: int = 4
    stage_seconds: tuple[float, ...] | None = None
    stage_seconds_min: float = 2.5
    stage_seconds_max: float = 6.0

    allow_diagonals: bool = False
    sprinkle_attempts: int = 200

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Keys missing from the file keep their defaults; unknown keys
        are rejected.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ConfigError: If the file has unknown keys or mistyped values.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SimulationConfig:
        """Build a config from a plain mapping (e.g. parsed YAML).

        Raises:
            ConfigError: On unknown keys or values of the wrong type.
        """
        if not isinstance(data, dict):
            msg = f"config must be a mapping, got {type(data).__name__}"
            raise ConfigError(msg)
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            msg = f"unknown config keys: {', '.join(unknown)}"
            raise ConfigError(msg)

        values = dict(data)
        for key in ("seeder_rest_pos", "storage_pos"):
            if key in values:
                values[key] = _as_point(key, values[key])
        for key in _INT_FIELDS:
            if key in values:
                values[key] = _as_number(key, values[key], int)
        for key in _FLOAT_FIELDS:
            if key in values:
                values[key] = _as_number(key, values[key], float)
        if values.get("stage_seconds") is not None:
            values["stage_seconds"] = _as_durations(values["stage_seconds"])
        return cls(**values)

    def validate(self) -> None:
        """Check that the configuration describes a buildable farm.

        Raises:
            ConfigError: On the first problem found.
        """
        for name in _INT_FIELDS:
            _as_number(name, getattr(self, name), int)
        for name in _FLOAT_FIELDS:
            _as_number(name, getattr(self, name), float)
        if not isinstance(self.allow_diagonals, bool):
            msg = f"allow_diagonals must be true or false, got {self.allow_diagonals!r}"
            raise ConfigError(msg)
        if self.grid_cols <= 0 or self.grid_rows <= 0:
            msg = f"grid must be positive, got {self.grid_cols}x{self.grid_rows}"
            raise ConfigError(msg)
        if self.tile_size <= 0:
            msg = f"tile_size must be positive, got {self.tile_size}"
            raise ConfigError(msg)

        for name in ("seeder_rest_pos", "storage_pos"):
            x, y = _as_point(name, getattr(self, name))
            if not (0 <= x < self.grid_cols and 0 <= y < self.grid_rows):
                msg = (
                    f"{name} ({x}, {y}) out of bounds for "
                    f"{self.grid_cols}x{self.grid_rows}"
                )
                raise ConfigError(msg)
        if tuple(self.seeder_rest_pos) == tuple(self.storage_pos):
            msg = f"stations must be distinct, both at {self.storage_pos}"
            raise ConfigError(msg)

        for name in ("seeder_count", "harvester_count"):
            if getattr(self, name) < 0:
                msg = f"{name} must not be negative"
                raise ConfigError(msg)
        for name in (
            "seeder_capacity",
            "harvester_capacity",
            "seeder_speed",
            "harvester_speed",
        ):
            if getattr(self, name) <= 0:
                msg = f"{name} must be positive, got {getattr(self, name)}"
                raise ConfigError(msg)

        if self.plant_growth_stages < 2:
            msg = f"plant_growth_stages must be >= 2, got {self.plant_growth_stages}"
            raise ConfigError(msg)
        if self.stage_seconds is not None:
            durations = _as_durations(self.stage_seconds)
            if len(durations) < self.plant_growth_stages:
                msg = (
                    f"stage_seconds has {len(durations)} entries, "
                    f"need {self.plant_growth_stages}"
                )
                raise ConfigError(msg)
            if any(s <= 0 for s in durations):
                msg = "stage_seconds entries must be positive"
                raise ConfigError(msg)
        if self.stage_seconds_min <= 0:
            msg = f"stage_seconds_min must be positive, got {self.stage_seconds_min}"
            raise ConfigError(msg)
        if self.stage_seconds_max < self.stage_seconds_min:
            msg = (
                f"stage_seconds_max ({self.stage_seconds_max}) is below "
                f"stage_seconds_min ({self.stage_seconds_min})"
            )
            raise ConfigError(msg)

        if self.sprinkle_attempts < 1:
            msg = f"sprinkle_attempts must be >= 1, got {self.sprinkle_attempts}"
            raise ConfigError(msg)


def _as_point(name: str, value: Any) -> tuple[int, int]:
    """Coerce a YAML ``[x, y]`` pair into a coordinate tuple."""
    try:
        x, y = value
        return int(x), int(y)
    except (TypeError, ValueError) as exc:
        msg = f"{name} must be an [x, y] pair, got {value!r}"
        raise ConfigError(msg) from exc


def _as_number(name: str, value: Any, kind: type) -> Any:
    """Check that ``value`` is a number of the given kind and return it as one."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        msg = f"{name} must be a number, got {value!r}"
        raise ConfigError(msg)
    if kind is int and not float(value).is_integer():
        msg = f"{name} must be a whole number, got {value!r}"
        raise ConfigError(msg)
    return kind(value)


def _as_durations(value: Any) -> tuple[float, ...]:
    """Coerce a YAML list of stage durations into a tuple of floats."""
    if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
        msg = f"stage_seconds must be a list of numbers, got {value!r}"
        raise ConfigError(msg)
    return tuple(_as_number("stage_seconds", s, float) for s in value)
