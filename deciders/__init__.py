"""
Deciders: action histories for simple behavioral agents

Agents read a simulated world through imperfect sensors, act on
their own state, and remember every action as a before/after pair.
The history is summarized into per-factor statistics and grouped
into behavioral profiles.
"""

__version__ = "0.1.0"
