"""
core/action.py

An action is a deed with a memory.

Every time it is done, it remembers the world as it was
before and the world as it was after. Over many doings,
it learns what it usually meets, which circumstances recur,
and what tends to follow from each.

Inspired by:
- Operant conditioning (antecedent, behavior, consequence)
- Episodic memory traces
- Case-based reasoning
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .snapshot import snapshot

if TYPE_CHECKING:
    from .decider import Decider

logger = logging.getLogger(__name__)

# Width of the "normal" band, as a fraction of the distance
# between the mean and the observed extreme on each side.
TREND_BAND = 0.1

ABOVE_NORMAL = 1
NORMAL = 0
BELOW_NORMAL = -1


class AggregateMode(str, Enum):
    """What an aggregate is computed over."""
    VALUES = "values"    # before[f]
    DELTAS = "deltas"    # after[f] - before[f]

    @classmethod
    def parse(cls, mode: Union[str, AggregateMode]) -> AggregateMode:
        if isinstance(mode, cls):
            return mode
        try:
            return cls(mode)
        except ValueError:
            raise ValueError(
                f"Unknown aggregate mode: {mode!r} "
                f"(expected one of {[m.value for m in cls]})"
            ) from None


@dataclass(frozen=True, eq=False)
class Instance:
    """
    One execution of an action.

    The world before, the world after. Nothing else.
    Both sides are read-only copies; the live factors
    can change freely without rewriting the past.
    """
    before: Mapping[str, float]
    after: Mapping[str, float]

    def __post_init__(self):
        object.__setattr__(self, "before", MappingProxyType(snapshot(self.before)))
        object.__setattr__(self, "after", MappingProxyType(snapshot(self.after)))

    def delta(self, factor: str) -> Optional[float]:
        """Change in a factor across the execution, None if either side lacks it."""
        if factor not in self.before or factor not in self.after:
            return None
        return self.after[factor] - self.before[factor]


@dataclass
class AggregateEntry:
    """
    Running statistics for one factor.

    Updated one observation at a time; mean is always sum / count.
    """
    count: int = 0
    sum: float = 0.0
    mean: float = 0.0
    max: Optional[float] = None
    min: Optional[float] = None

    def observe(self, value: float) -> None:
        if self.max is None or value > self.max:
            self.max = value
        if self.min is None or value < self.min:
            self.min = value
        self.count += 1
        self.sum += value
        self.mean = self.sum / self.count

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "sum": self.sum,
            "mean": self.mean,
            "max": self.max,
            "min": self.min,
        }


@dataclass
class Profile:
    """
    A recurring circumstance.

    trends: factor -> +1 (above normal), 0 (normal), -1 (below normal)
    indices: positions of the matching instances, in execution order
    """
    trends: Dict[str, int]
    indices: List[int] = field(default_factory=list)

    def instances(self, action: Action) -> List[Instance]:
        return [action.instances[i] for i in self.indices]


@dataclass
class SummaryEntry:
    """A profile and what tends to follow from it."""
    profile: Dict[str, int]
    outcome: Dict[str, AggregateEntry]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "profile": dict(self.profile),
            "outcome": {f: entry.to_dict() for f, entry in self.outcome.items()},
        }


def trend(value: float, entry: AggregateEntry) -> int:
    """
    Classify a value against a factor's history.

    Normal is a band around the mean reaching TREND_BAND of the way
    toward max above and toward min below. Both edges are exclusive:
    a value sitting exactly on an edge is normal.
    """
    upper = entry.mean + TREND_BAND * (entry.max - entry.mean)
    lower = entry.mean - TREND_BAND * (entry.mean - entry.min)
    if value > upper:
        return ABOVE_NORMAL
    if value < lower:
        return BELOW_NORMAL
    return NORMAL


class Action:
    """
    A named operation on a decider's factors, with its full history.

    Principles embodied:
    - Memory is append-only; the past is not edited
    - Only completed deeds are remembered
    - Analysis is a pure function of history
    """

    def __init__(self, name: str, func: Callable[..., Any]):
        if not name:
            raise ValueError("An action needs a name")
        self.name = name
        self.func = func
        self.instances: List[Instance] = []

    @property
    def fname(self) -> str:
        return self.name

    # ==================== Recording ====================

    def invoke(self, context: Decider, *args: Any, **kwargs: Any) -> int:
        """
        Run the action against context.factors and record the instance.

        Returns the index of the new instance. If the wrapped function
        raises, nothing is recorded and the exception propagates.
        """
        before = snapshot(context.factors)
        try:
            self.func(context, *args, **kwargs)
        except Exception:
            logger.warning(f"Action '{self.name}' failed; no instance recorded")
            raise
        after = snapshot(context.factors)

        self.instances.append(Instance(before, after))
        index = len(self.instances) - 1
        logger.debug(f"Action '{self.name}' recorded instance {index}")
        return index

    def __call__(self, context: Decider, *args: Any, **kwargs: Any) -> int:
        return self.invoke(context, *args, **kwargs)

    # ==================== Analysis ====================

    def aggregate(
        self,
        mode: Union[str, AggregateMode] = AggregateMode.VALUES,
        subset: Optional[Sequence[Instance]] = None
    ) -> Dict[str, AggregateEntry]:
        """
        Per-factor statistics over the history (or a subset of it).

        Single pass. A factor enters the result on its first observation
        and only instances whose `before` holds the factor contribute.
        In deltas mode an instance must also hold it in `after`.
        """
        mode = AggregateMode.parse(mode)
        instances = self.instances if subset is None else subset

        aggregate: Dict[str, AggregateEntry] = {}
        for instance in instances:
            for factor in sorted(instance.before):
                if mode is AggregateMode.DELTAS:
                    value = instance.delta(factor)
                    if value is None:
                        continue
                else:
                    value = instance.before[factor]

                if factor not in aggregate:
                    aggregate[factor] = AggregateEntry()
                aggregate[factor].observe(value)

        return aggregate

    def profile(self, by_factor: bool = False) -> List[Profile]:
        """
        Group instances by how their circumstances compare to history.

        Each instance's `before` is classified factor by factor against
        the full-history values aggregate. By default an instance's
        signature covers all of its factors and it lands in exactly one
        profile. With by_factor, every (instance, factor) comparison is
        its own single-factor signature.

        Profiles are returned in the order they were first seen.
        """
        baseline = self.aggregate(AggregateMode.VALUES)

        profiles: List[Profile] = []
        by_signature: Dict[Tuple[Tuple[str, int], ...], Profile] = {}

        for index, instance in enumerate(self.instances):
            trends = {
                factor: trend(instance.before[factor], baseline[factor])
                for factor in sorted(instance.before)
            }
            if by_factor:
                signatures = [{factor: t} for factor, t in trends.items()]
            else:
                signatures = [trends]

            for signature in signatures:
                key = tuple(signature.items())
                profile = by_signature.get(key)
                if profile is None:
                    profile = Profile(trends=signature)
                    by_signature[key] = profile
                    profiles.append(profile)
                profile.indices.append(index)

        return profiles

    def summarize(self, by_factor: bool = False) -> List[SummaryEntry]:
        """
        Pair each profile with the deltas aggregate of its own instances.

        A factor the action removed from `after` keeps its place in the
        profile but contributes nothing to the outcome.
        """
        return [
            SummaryEntry(
                profile=dict(profile.trends),
                outcome=self.aggregate(AggregateMode.DELTAS, subset=profile.instances(self)),
            )
            for profile in self.profile(by_factor=by_factor)
        ]

    # ==================== Utilities ====================

    def __len__(self) -> int:
        return len(self.instances)

    def __repr__(self) -> str:
        return f"Action(name={self.name}, instances={len(self.instances)})"
