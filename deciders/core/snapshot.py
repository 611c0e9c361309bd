"""
core/snapshot.py

Freeze a moment. Later is not now.
"""

from __future__ import annotations
from typing import Dict, Mapping


def snapshot(factors: Mapping[str, float]) -> Dict[str, float]:
    """Independent shallow copy of a factor mapping (values are scalars)."""
    return dict(factors)
