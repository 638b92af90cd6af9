"""Seeded part length/origin sampler.

Each corruption method owns one :class:`PartSampler` with a private
``random.Random`` stream. Values are derived from raw 64-bit draws with a
modulo, so the same seed always yields the same lengths and origins.
"""

from __future__ import annotations

import random

import numpy as np

from korrupt.core.constants import DEFAULT_NOISE_DENSITY, SEED_BITS


class PartSampler:
    """Produces part lengths and part origins for one corruption method."""

    def __init__(self, minimum: int, maximum: int, rng: random.Random | int):
        """Initialize the sampler.

        Args:
            minimum: Smallest part length, in bits
            maximum: Largest part length, in bits (swapped with minimum
                if smaller)
            rng: Random stream to own, or an integer seed for a new one

        """
        if minimum > maximum:
            minimum, maximum = maximum, minimum
        self.minimum = minimum
        self.maximum = maximum
        self.is_fixed = minimum == maximum
        self.rng = rng if isinstance(rng, random.Random) else random.Random(rng)

    def next_u64(self) -> int:
        return self.rng.getrandbits(SEED_BITS)

    def get_len(self) -> int:
        """Return a part length in ``[minimum, maximum]``."""
        if self.is_fixed:
            return self.minimum
        return self.next_u64() % (self.maximum - self.minimum + 1) + self.minimum

    def get_origin(self, bound: int) -> int:
        """Return an origin in ``[0, bound]``."""
        return self.next_u64() % (max(bound, 0) + 1)

    def get_noise(
        self, length: int, density: float = DEFAULT_NOISE_DENSITY
    ) -> np.ndarray:
        """Return ``length`` random bits, each set with probability ``density``."""
        return np.fromiter(
            (self.rng.random() < density for _ in range(length)),
            dtype=np.uint8,
            count=length,
        )

    def __repr__(self) -> str:
        if self.is_fixed:
            return f"PartSampler(fixed={self.minimum})"
        return f"PartSampler(min={self.minimum}, max={self.maximum})"
