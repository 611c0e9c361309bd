"""
core/rhythm.py

Things happen on a beat: the day turns, the senses sweep.

A rhythm is a repeating callback on the asyncio loop.
One beat finishes before the next is scheduled, so a
rhythm never overlaps itself. Independent rhythms share
the loop's single thread, so none of them race on state.

Inspired by:
- Circadian rhythms
- Sensory sampling rates
"""

from __future__ import annotations
import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


@dataclass
class RhythmConfig:
    """Configuration for a periodic task."""
    period: float = 1.0    # Seconds between beats


class Rhythm:
    """
    A periodic task with explicit start and stop.

    The callback may be a plain function or a coroutine function.
    A failing beat is logged and the rhythm keeps going.
    """

    def __init__(
        self,
        callback: Callable[[], Any],
        config: Optional[RhythmConfig] = None,
        name: str = "rhythm"
    ):
        self.callback = callback
        self.config = config or RhythmConfig()
        if self.config.period <= 0:
            raise ValueError(f"period must be > 0, got {self.config.period}")
        self.name = name
        self.ticks = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the rhythm on the running event loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self.name)
        logger.debug(f"Rhythm '{self.name}' started (period={self.config.period}s)")

    async def stop(self) -> None:
        """Cancel the rhythm and wait for it to wind down."""
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.debug(f"Rhythm '{self.name}' stopped after {self.ticks} ticks")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.config.period)
            try:
                result = self.callback()
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception(f"Rhythm '{self.name}' beat failed")
            self.ticks += 1

    def __repr__(self) -> str:
        return (
            f"Rhythm(name={self.name}, period={self.config.period}, "
            f"ticks={self.ticks}, running={self.running})"
        )
