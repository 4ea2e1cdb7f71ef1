from __future__ import annotations

"""Randomness helpers for question selection and seeding."""

import os
import random
from typing import Optional


def seed_if_needed() -> Optional[int]:
    """Seed the RNG if the SEED env var is set; return the seed used."""
    seed = os.environ.get("SEED")
    if seed is None:
        return None
    try:
        s = int(seed)
    except ValueError:
        print(f"WARNING: Ignoring non-integer SEED '{seed}'.")
        return None
    random.seed(s)
    return s


def make_rng(seed: Optional[int] = None) -> random.Random:
    return random.Random(seed)
