"""Seedable random source for the few non-deterministic outputs."""

from __future__ import annotations

import random


def make_rng(seed: int | None = None) -> random.Random:
    """Return a private Random instance, reproducible when *seed* is given."""
    return random.Random(seed)
