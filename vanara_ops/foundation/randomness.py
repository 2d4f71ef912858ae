"""Seedable randomness.

Every stochastic transition (drift, threat flips, noise detections,
telemetry walks) draws from one injected ``random.Random`` so a run can
be replayed exactly from its seed.
"""

from __future__ import annotations

import random


def make_rng(seed: int | None = None) -> random.Random:
    """Return a dedicated PRNG, seeded when *seed* is given."""
    return random.Random(seed)
