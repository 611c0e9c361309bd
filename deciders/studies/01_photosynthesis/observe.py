"""
Study 01: Photosynthesis

Run: python -m deciders.studies.01_photosynthesis.observe

Watch a plant live through a few days.
No hypotheses yet, just observation.
"""

from __future__ import annotations
import argparse
import asyncio
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import List, Optional, Union
import numpy as np
import yaml

from deciders.core.action import Action
from deciders.core.decider import Decider, DeciderConfig
from deciders.core.rhythm import Rhythm, RhythmConfig
from deciders.core.sensor import Sensor, SensorConfig
from deciders.environments.day_cycle import DayCycle, DayCycleConfig
from deciders.observations.visualize import save_action_report

logger = logging.getLogger(__name__)


@dataclass
class StudyConfig:
    """Timing and sensor settings for the study."""
    duration: float = 20.0          # Seconds of observation
    day_period: float = 5.0         # Seconds between day and night
    sweep_period: float = 0.016     # Seconds between sensor sweeps
    action_period: float = 0.25     # Seconds between actions
    light_tolerance: float = 0.0
    light_granularity: float = 0.0
    power_tolerance: float = 0.02
    power_granularity: float = 0.05
    seed: Optional[int] = None

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> StudyConfig:
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown study config keys: {sorted(unknown)}")
        return cls(**data)

    def seed_streams(self) -> List[np.random.SeedSequence]:
        """Independent child seeds: light sensor, power sensor, action choice."""
        return np.random.SeedSequence(self.seed).spawn(3)


class Plant(Decider):
    """A decider with an energy store and a window onto the world."""

    def __init__(self, world: DayCycle, config: Optional[DeciderConfig] = None):
        super().__init__(config or DeciderConfig(name="plant"))
        self.world = world
        self._energy = 1.0

    def energy(self, amount: Optional[float] = None) -> float:
        """Adjust energy by amount (clamped to [0, 1]) and return it."""
        if amount:
            self._energy = min(1.0, max(0.0, self._energy + amount))
        return self._energy

    @property
    def energy_level(self) -> float:
        return self._energy


# ==================== Actions ====================

def sit_there(plant: Plant, companion: Optional[str] = None) -> None:
    logger.info(f"{plant.name} not doing anything" + (f" with {companion}" if companion else ""))


def look_outside(plant: Plant) -> None:
    light = plant.world.is_light_outside
    logger.info(f"It {'is' if light else 'is not'} light out")
    plant.factors["is_light_outside"] = light


def photosynthesize(plant: Plant) -> None:
    plant.energy(-0.1)
    if plant.world.is_light_outside:
        plant.energy(0.5)
    plant.factors["energy_level"] = plant.energy()
    logger.info(f"{plant.name} energy: {plant.energy():.2f}")


def build_plant(world: DayCycle, config: Optional[StudyConfig] = None) -> Plant:
    """A plant with light and power sensors and its three actions."""
    config = config or StudyConfig()
    plant = Plant(world)
    light_seed, power_seed, _ = config.seed_streams()

    plant.add_sensor(Sensor(SensorConfig(
        label="light_sensor",
        spectra=["is_light_outside"],
        tolerance=config.light_tolerance,
        granularity=config.light_granularity,
        world=world,
        seed=light_seed,
    )))
    plant.add_sensor(Sensor(SensorConfig(
        label="power_sensor",
        spectra=["energy_level"],
        tolerance=config.power_tolerance,
        granularity=config.power_granularity,
        world=plant,
        seed=power_seed,
    )))

    plant.add_action(Action("sit_there", sit_there))
    plant.add_action(Action("look_outside", look_outside))
    plant.add_action(Action("photosynthesize", photosynthesize))

    return plant


async def observe(config: StudyConfig) -> Plant:
    """Run the day cycle, the sensor sweep and a random action beat."""
    world = DayCycle(DayCycleConfig(period=config.day_period))
    plant = build_plant(world, config)
    rng = np.random.default_rng(config.seed_streams()[2])
    names = list(plant.actions)

    def act() -> None:
        plant.consider()
        plant.invoke(names[rng.integers(len(names))])

    rhythms = [
        world.rhythm(),
        Rhythm(plant.read_sensors, RhythmConfig(period=config.sweep_period), name="sensor_sweep"),
        Rhythm(act, RhythmConfig(period=config.action_period), name="act"),
    ]

    for rhythm in rhythms:
        rhythm.start()
    try:
        await asyncio.sleep(config.duration)
    finally:
        for rhythm in rhythms:
            await rhythm.stop()

    return plant


def report(plant: Plant) -> None:
    """Print what each action met and what followed."""
    for action in plant.actions.values():
        print(f"\n{action.name}: {len(action)} instances")
        if not action.instances:
            continue

        for factor, entry in action.aggregate("values").items():
            print(f"  {factor:>18}: mean={entry.mean:.3f} "
                  f"range=[{entry.min:.3f}, {entry.max:.3f}] n={entry.count}")

        print("  Profiles:")
        for summary in action.summarize():
            signature = ", ".join(f"{f}:{t:+d}" for f, t in summary.profile.items()) or "(none)"
            outcome = ", ".join(
                f"{f} {entry.mean:+.3f}" for f, entry in summary.outcome.items()
            ) or "no change"
            print(f"    [{signature}] -> {outcome}")


def run_study(
    config: Optional[StudyConfig] = None,
    plot_prefix: Optional[str] = None
) -> Plant:
    """
    Observe a plant.

    Watch:
    - What each action meets (aggregate)
    - Which circumstances recur (profiles)
    - What follows from each (summaries)
    """
    config = config or StudyConfig()

    print("=" * 50)
    print("Study 01: Photosynthesis")
    print("=" * 50)
    print(f"\nObserving for {config.duration}s "
          f"(day period {config.day_period}s, action every {config.action_period}s)")

    plant = asyncio.run(observe(config))

    print("\n" + "=" * 50)
    print("Observations")
    print("=" * 50)
    report(plant)

    if plot_prefix:
        save_action_report(plant.actions["photosynthesize"], "energy_level", plot_prefix)
        print(f"\nPlots saved with prefix {plot_prefix}")

    print("\n" + "=" * 50)
    print("Study complete. What did you observe?")
    print("=" * 50)

    return plant


def main():
    parser = argparse.ArgumentParser(description="Photosynthesis Observation Study")
    parser.add_argument("--duration", type=float, default=None, help="Seconds to observe")
    parser.add_argument("--config", type=str, default=None, help="YAML study config")
    parser.add_argument("--plot", type=str, default=None, help="Save plots with this prefix")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)

    config = StudyConfig.from_yaml(args.config) if args.config else StudyConfig()
    if args.duration is not None:
        config.duration = args.duration

    run_study(config, plot_prefix=args.plot)


if __name__ == "__main__":
    main()
