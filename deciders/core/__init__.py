"""
Core components of the deciders system.

- snapshot: Frozen copies of factor mappings
- action: Recorded actions and their statistics
- sensor: Noisy, quantized readings of the world
- decider: Owner of factors, actions and sensors
- rhythm: Periodic tasks
"""

from .snapshot import snapshot
from .action import (
    Action,
    AggregateEntry,
    AggregateMode,
    Instance,
    Profile,
    SummaryEntry,
    trend,
)
from .sensor import Sensor, SensorConfig
from .decider import Decider, DeciderConfig
from .rhythm import Rhythm, RhythmConfig

__all__ = [
    "snapshot",
    "Action",
    "AggregateEntry",
    "AggregateMode",
    "Instance",
    "Profile",
    "SummaryEntry",
    "trend",
    "Sensor",
    "SensorConfig",
    "Decider",
    "DeciderConfig",
    "Rhythm",
    "RhythmConfig",
]
