"""
core/sensor.py

No sense is perfect.

Granularity is the range a reported value stands for:
a granularity of 5 reports the sensed value rounded to
the nearest multiple of 5. Tolerance is how consistent
the sensor is: a random offset of up to +/- tolerance.

Assume an objective world value of 8.531:
- granularity 3, tolerance 0.01 always reports 9
- granularity 0.01, tolerance 3 might report 6.23, 10.98 or 8.21
- granularity 1, tolerance 1 might report 8, 9 or 10

Inspired by:
- Receptor thresholds and sensory noise
- ADC quantization
"""

from __future__ import annotations
import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union
import numpy as np


@dataclass
class SensorConfig:
    """What a sensor watches and how well it sees."""
    label: str = "sensor"
    spectra: Union[str, List[str]] = field(default_factory=list)
    tolerance: float = 0.0          # +/- uniform noise
    granularity: float = 0.0        # Rounding step, 0 = none
    world: Any = None               # Mapping or object read by attribute
    seed: Optional[Union[int, np.random.SeedSequence]] = None

    def __post_init__(self):
        if isinstance(self.spectra, str):
            self.spectra = [self.spectra]
        else:
            self.spectra = list(self.spectra)
        if self.tolerance < 0:
            raise ValueError(f"tolerance must be >= 0, got {self.tolerance}")
        if self.granularity < 0:
            raise ValueError(f"granularity must be >= 0, got {self.granularity}")


class Sensor:
    """
    A noisy, quantized reader of world attributes.

    Calling the sensor reads every spectrum fresh. No memory,
    no retries. A spectrum the world doesn't have reads as nan
    and stays nan through the arithmetic.
    """

    def __init__(self, config: Optional[SensorConfig] = None):
        self.config = config or SensorConfig()
        self.label = self.config.label
        self.spectra = self.config.spectra
        self.tolerance = self.config.tolerance
        self.granularity = self.config.granularity
        self.world = self.config.world
        self.rng = np.random.default_rng(self.config.seed)

    def __call__(self) -> Dict[str, float]:
        return {
            spectrum: self._apply_granularity(self._apply_tolerance(self._read(spectrum)))
            for spectrum in self.spectra
        }

    def _read(self, spectrum: str) -> float:
        if self.world is None:
            return math.nan
        if isinstance(self.world, Mapping):
            value = self.world.get(spectrum, math.nan)
        else:
            value = getattr(self.world, spectrum, math.nan)
        return float(value)

    def _apply_tolerance(self, value: float) -> float:
        if self.tolerance == 0:
            return value
        return value + self.rng.uniform(-self.tolerance, self.tolerance)

    def _apply_granularity(self, value: float) -> float:
        if self.granularity == 0:
            return value
        # Halves round up
        return float(np.floor(value / self.granularity + 0.5) * self.granularity)

    def __repr__(self) -> str:
        return (
            f"Sensor(label={self.label}, spectra={self.spectra}, "
            f"tolerance={self.tolerance}, granularity={self.granularity})"
        )
