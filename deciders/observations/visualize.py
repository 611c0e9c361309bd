"""
observations/visualize.py

Watch what an action meets, and what follows.

You cannot understand what you do not watch.
Patience is methodology.

Inspired by:
- Scientific visualization
- Before/after photographs
"""

from __future__ import annotations
from typing import Optional, TYPE_CHECKING
import numpy as np

if TYPE_CHECKING:
    from deciders.core.action import Action


class ActionVisualizer:
    """
    Plots of one action's history.

    - plot_history: a factor before and after each instance
    - plot_profiles: how many instances each profile holds
    """

    def __init__(self, action: Action, figsize: tuple = (10, 4)):
        self.action = action
        self.figsize = figsize

        # Lazy import matplotlib
        self._plt = None
        self._fig = None
        self._ax = None

    def _setup_plot(self):
        """Initialize matplotlib figure."""
        import matplotlib.pyplot as plt
        self._plt = plt

        self._fig, self._ax = plt.subplots(figsize=self.figsize)
        self._ax.set_facecolor('#1a1a2e')
        self._fig.patch.set_facecolor('#16213e')

    def _reset_axes(self) -> None:
        if self._plt is None:
            self._setup_plot()
        self._ax.clear()
        self._ax.set_facecolor('#1a1a2e')
        self._ax.tick_params(colors='white')

    def plot_history(self, factor: str) -> None:
        """Plot a factor's value before and after every instance holding it."""
        self._reset_axes()

        indices = []
        before = []
        after = []
        for i, instance in enumerate(self.action.instances):
            if factor in instance.before:
                indices.append(i)
                before.append(instance.before[factor])
                after.append(instance.after.get(factor, np.nan))

        self._ax.plot(indices, before, 'o-', color='#4cc9f0', label='before')
        self._ax.plot(indices, after, 'o-', color='#f72585', label='after')
        self._ax.legend()
        self._ax.set_title(
            f"{self.action.name}: {factor} ({len(indices)} instances)",
            color='white', fontsize=12
        )

    def plot_profiles(self, by_factor: bool = False) -> None:
        """Bar chart of instance counts per profile."""
        self._reset_axes()

        profiles = self.action.profile(by_factor=by_factor)
        labels = [
            ", ".join(f"{f}:{t:+d}" for f, t in p.trends.items()) or "(none)"
            for p in profiles
        ]
        counts = np.array([len(p.indices) for p in profiles])

        self._ax.bar(np.arange(len(profiles)), counts, color='#4361ee')
        self._ax.set_xticks(np.arange(len(profiles)))
        self._ax.set_xticklabels(labels, rotation=30, ha='right', color='white')
        self._ax.set_title(
            f"{self.action.name}: {len(profiles)} profiles",
            color='white', fontsize=12
        )

    def save(self, path: str) -> None:
        """Save current figure to file."""
        if self._fig is not None:
            self._fig.savefig(path, dpi=150, facecolor=self._fig.get_facecolor())

    def close(self) -> None:
        """Close the visualization."""
        if self._plt is not None:
            self._plt.close(self._fig)
            self._plt = None
            self._fig = None
            self._ax = None


def save_action_report(action: Action, factor: str, path_prefix: str) -> None:
    """Save history and profile plots for an action."""
    viz = ActionVisualizer(action)
    try:
        viz.plot_history(factor)
        viz.save(f"{path_prefix}_{action.name}_history.png")
        viz.plot_profiles()
        viz.save(f"{path_prefix}_{action.name}_profiles.png")
    finally:
        viz.close()
