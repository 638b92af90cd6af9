"""Shared constants for corruption operations."""

from __future__ import annotations

from typing import Final

#: Bits per byte, buffers are MSB-first within each byte
BITS_PER_BYTE: Final[int] = 8

#: Seeds and sub-seeds are drawn as unsigned 64-bit integers
SEED_BITS: Final[int] = 64
MAX_SEED: Final[int] = (1 << SEED_BITS) - 1

#: Probability that addnoise flips a given bit
DEFAULT_NOISE_DENSITY: Final[float] = 0.5

# =============================================================================
# Output Path Templating
# =============================================================================

FILENAME_PLACEHOLDER: Final[str] = "@@filename@@"
SEED_PLACEHOLDER: Final[str] = "@@seed@@"
INDEX_PLACEHOLDER: Final[str] = "@@index@@"

DEFAULT_OUTPUT_TEMPLATE: Final[str] = f"/tmp/korrupt/{FILENAME_PLACEHOLDER}"
