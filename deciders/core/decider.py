"""
core/decider.py

A decider holds what it knows (factors), what it can do
(actions) and how it finds things out (sensors).

It doesn't choose yet. It gathers the experience that
choosing will one day need.
"""

from __future__ import annotations
import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .action import Action
from .sensor import Sensor

logger = logging.getLogger(__name__)


@dataclass
class DeciderConfig:
    """Configuration for a decider."""
    name: str = "decider"


class Decider:
    """
    Owner of a shared factor mapping, a set of actions and a set of sensors.

    Actions run with the decider as their context, so they read and
    write decider.factors. Sensor readings merge into the same mapping.

    Invocation and sensor merging share one lock per decider; callers
    on several threads never interleave a recording with a merge.
    """

    def __init__(self, config: Optional[DeciderConfig] = None):
        self.config = config or DeciderConfig()
        self.name = self.config.name
        self.factors: Dict[str, float] = {}
        self.actions: Dict[str, Action] = {}
        self.sensors: Dict[str, Sensor] = {}
        self._lock = threading.RLock()

    # ==================== Registration ====================

    def add_action(self, action: Action) -> bool:
        """
        Register an action under its name.

        The first registration of a name wins; later ones are ignored.
        Returns whether the action was registered.
        """
        if action.name in self.actions:
            logger.warning(
                f"{self.name}: action '{action.name}' already registered, ignoring"
            )
            return False
        self.actions[action.name] = action
        return True

    def add_sensor(self, sensor: Sensor) -> None:
        """Register a sensor under its label, replacing any previous one."""
        self.sensors[sensor.label] = sensor

    # ==================== Behavior ====================

    def invoke(self, name: str, *args: Any, **kwargs: Any) -> int:
        """Run a registered action against this decider's factors."""
        if name not in self.actions:
            raise KeyError(f"{self.name}: no action named '{name}'")
        with self._lock:
            return self.actions[name].invoke(self, *args, **kwargs)

    def read_sensors(self) -> Dict[str, float]:
        """
        Merge every sensor's readings into factors.

        Sensors are read in registration order; on a shared key
        the later sensor wins.
        """
        with self._lock:
            for sensor in self.sensors.values():
                self.factors.update(sensor())
            logger.debug(f"{self.name}: sensor sweep -> {self.factors}")
            return self.factors

    def consider(self, bias: Any = None) -> None:
        """
        Take stock before acting.

        For now this only refreshes the senses; bias is accepted
        for the choosing that doesn't exist yet.
        """
        self.read_sensors()

    def __repr__(self) -> str:
        return (
            f"Decider(name={self.name}, "
            f"actions={list(self.actions)}, "
            f"sensors={list(self.sensors)}, "
            f"factors={len(self.factors)})"
        )
