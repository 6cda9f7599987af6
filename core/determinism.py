"""core/determinism.py — Seeded randomness for the street simulation.

Every transition that rolls dice takes a ``random.Random`` argument;
nothing in ``logic/`` touches the module-level ``random`` functions.
The session owns one RNG made here, so a run is replayable from its
seed.

Sub-streams (``derive_rng``) give independent sequences to systems
that should not perturb the gameplay stream, e.g. the headless
autopilot deciding which button to press.
"""

from __future__ import annotations

import random
import zlib

DEFAULT_SEED: int = 1991


def make_rng(seed: int | None = None) -> random.Random:
    """Return a fresh gameplay RNG (``DEFAULT_SEED`` when *seed* is None)."""
    if seed is None:
        seed = DEFAULT_SEED
    return random.Random(int(seed) & 0xFFFFFFFF)


def derive_seed(seed: int, tag: str) -> int:
    # crc32, never hash(): str hashing is salted per process.
    crc = zlib.crc32(tag.encode("utf-8")) & 0xFFFFFFFF
    return (int(seed) ^ crc) & 0xFFFFFFFF


def derive_rng(seed: int, tag: str) -> random.Random:
    """Independent RNG stream for *tag*, stable for a given base seed."""
    return random.Random(derive_seed(seed, tag))


def chance(rng: random.Random, p: float) -> bool:
    """Roll once; True with probability *p* (p <= 0 never, p >= 1 always)."""
    return rng.random() < p
