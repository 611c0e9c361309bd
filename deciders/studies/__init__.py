"""
Studies: Structured experiments for understanding.

Each study begins with observation, not hypothesis.

Study progression:
1. Photosynthesis - one plant, one day cycle, three actions
"""
