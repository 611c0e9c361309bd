"""
environments/day_cycle.py

A world with one fact in it: is it light outside?

Day turns to night on a fixed beat. Whoever looks
sees whatever is current at the moment of looking.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

from deciders.core.rhythm import Rhythm, RhythmConfig

logger = logging.getLogger(__name__)


@dataclass
class DayCycleConfig:
    """Configuration for the day cycle."""
    period: float = 5.0            # Seconds between day and night
    start_light: bool = True


class DayCycle:
    """The world: a light flag flipped on a timer."""

    def __init__(self, config: Optional[DayCycleConfig] = None):
        self.config = config or DayCycleConfig()
        self.is_light_outside = 1 if self.config.start_light else 0
        self.days = 0

    def toggle(self) -> int:
        """Flip day and night; returns the new light flag."""
        self.is_light_outside = 0 if self.is_light_outside else 1
        if self.is_light_outside:
            self.days += 1
        logger.debug(f"Day cycle: {'light' if self.is_light_outside else 'dark'}")
        return self.is_light_outside

    def rhythm(self) -> Rhythm:
        """A rhythm that toggles this world every period."""
        return Rhythm(self.toggle, RhythmConfig(period=self.config.period), name="day_cycle")

    def __repr__(self) -> str:
        return f"DayCycle(light={self.is_light_outside}, days={self.days})"
