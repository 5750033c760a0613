"""Random DNA sequence generation."""

from __future__ import annotations

import random
from collections.abc import Iterable

BASES = "ACGT"


def _draw(rng: random.Random, length: int, lowercase: bool) -> str:
    if length < 0:
        raise ValueError(f"Sequence length must be non-negative, got {length}")
    bases = BASES.lower() if lowercase else BASES
    return "".join(rng.choices(bases, k=length))


def generate(length: int, seed: int | None = None, *, lowercase: bool = False) -> str:
    """Generate a uniformly random DNA sequence.

    Args:
        length: Number of bases.
        seed: RNG seed; None draws from system entropy (not reproducible).
        lowercase: Emit "acgt" instead of "ACGT".

    Returns:
        The sequence.
    """
    return _draw(random.Random(seed), length, lowercase)


def generate_many(
    lengths: Iterable[int], seed: int | None = None, *, lowercase: bool = False
) -> list[str]:
    """Generate one sequence per length from a single RNG stream."""
    rng = random.Random(seed)
    return [_draw(rng, n, lowercase) for n in lengths]
