"""Entry point for ``python -m growfield``.

Loads the YAML config, builds a simulation engine, and runs it headless
for a fixed span of simulated time, logging a farm census once per
simulated second.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from growfield.simulation.config import SimulationConfig
from growfield.simulation.engine import SimulationEngine

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)

logger = logging.getLogger("growfield")


def main(argv: list[str] | None = None) -> None:
    """Parse CLI args, create engine, drive it."""
    parser = argparse.ArgumentParser(
        prog="growfield",
        description="Growfield - seeder/harvester drone farm simulator",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--seconds",
        type=float,
        default=30.0,
        help="Simulated seconds to run (default: 30)",
    )
    parser.add_argument(
        "--dt",
        type=float,
        default=1.0 / 60.0,
        help="Seconds per tick (default: 1/60)",
    )
    parser.add_argument(
        "--sprinkle",
        type=int,
        default=0,
        help="Plants to scatter at random before starting (default: 0)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = SimulationConfig.from_yaml(args.config)
    engine = SimulationEngine(config=config)
    if args.sprinkle:
        engine.sprinkle_plants(args.sprinkle)

    # Census once per whole simulated second, plus once at the end
    marks = [float(s) for s in range(1, int(args.seconds) + 1)]
    if not marks or marks[-1] < args.seconds:
        marks.append(args.seconds)
    for mark in marks:
        engine.run_until(mark, dt=args.dt)
        _log_census(engine)

    for drone in engine.drones:
        logger.info(drone.status)


def _log_census(engine: SimulationEngine) -> None:
    c = engine.census()
    logger.info(
        f"t={c['elapsed']:.1f}s plants={c['plants']} ripe={c['ripe']} "
        f"empty={c['empty_fields']} planted={c['planted']} "
        f"harvested={c['harvested']} stored={c['stored']}",
    )


if __name__ == "__main__":
    main()
