"""Shared fixtures for the Growfield test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from growfield.plants.growth import PlantFactory
from growfield.simulation.config import SimulationConfig
from growfield.world.world import World


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def small_world() -> World:
    """An 8x8 world with stations at opposite corners."""
    return World(width=8, height=8, seeder_rest=(0, 0), storage=(7, 7))


@pytest.fixture
def default_config() -> SimulationConfig:
    """Default simulation config (no YAML file needed)."""
    return SimulationConfig()


@pytest.fixture
def tiny_config() -> SimulationConfig:
    """3x3 farm: rest at (0, 0), storage at (2, 2), one seeder, no harvesters.

    Stage timings are long so sown seeds stay at stage 0 for the
    duration of a test.
    """
    return SimulationConfig(
        seed=7,
        grid_cols=3,
        grid_rows=3,
        seeder_rest_pos=(0, 0),
        storage_pos=(2, 2),
        seeder_count=1,
        seeder_capacity=1,
        harvester_count=0,
        stage_seconds=(1000.0, 1000.0, 1000.0, 1000.0),
    )


@pytest.fixture
def fixed_factory(rng: Generator) -> PlantFactory:
    """A plant factory producing 3-stage plants with 1 s stages."""
    cfg = SimulationConfig(plant_growth_stages=3, stage_seconds=(1.0, 1.0, 1.0))
    return PlantFactory(config=cfg, rng=rng)
