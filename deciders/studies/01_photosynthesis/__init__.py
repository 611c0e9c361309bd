"""
Study 01: Photosynthesis

A plant that can sit, look outside, or photosynthesize.

Questions to explore:
- What does each action usually meet?
- Which circumstances recur, and what follows from each?
- How much do noisy senses blur the profiles?
"""
