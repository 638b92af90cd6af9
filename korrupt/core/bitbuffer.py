"""Bit-addressable buffer.

Holds input data as one numpy ``uint8`` element per bit (values 0/1),
most-significant bit first within each original byte. Corruption methods
work on slices of :attr:`BitBuffer.bits` in place; ``shorten`` is the only
operation that swaps the underlying array for a shorter one.
"""

from __future__ import annotations

import numpy as np

from korrupt.core.constants import BITS_PER_BYTE
from korrupt.core.exceptions import LengthError


class BitBuffer:
    """Growable/shrinkable sequence of bits."""

    def __init__(self, bits: np.ndarray | None = None):
        if bits is None:
            bits = np.zeros(0, dtype=np.uint8)
        self.bits: np.ndarray = np.asarray(bits, dtype=np.uint8)

    @classmethod
    def from_bytes(cls, data: bytes) -> BitBuffer:
        return cls(np.unpackbits(np.frombuffer(bytes(data), dtype=np.uint8)))

    def to_bytes(self) -> bytes:
        """Pack the bits back into bytes.

        Raises:
            LengthError: If the bit count is not a multiple of 8

        """
        if len(self.bits) % BITS_PER_BYTE != 0:
            raise LengthError(
                f"Bit buffer of length {len(self.bits)} is not byte-aligned",
                error_code="UNALIGNED_BUFFER",
                context={"bit_length": len(self.bits)},
            )
        return np.packbits(self.bits).tobytes()

    def delete(self, start: int, stop: int) -> int:
        """Remove bits ``[start, stop)`` and return how many were removed."""
        start = max(0, start)
        stop = min(stop, len(self.bits))
        if stop <= start:
            return 0
        self.bits = np.concatenate((self.bits[:start], self.bits[stop:]))
        return stop - start

    def copy(self) -> BitBuffer:
        return BitBuffer(self.bits.copy())

    def __len__(self) -> int:
        return len(self.bits)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitBuffer):
            return NotImplemented
        return bool(np.array_equal(self.bits, other.bits))

    def __repr__(self) -> str:
        return f"BitBuffer(len={len(self.bits)})"


def to_bits(data: bytes) -> BitBuffer:
    """Expand bytes into a bit buffer, 8 bits per byte, MSB first."""
    return BitBuffer.from_bytes(data)


def from_bits(buffer: BitBuffer) -> bytes:
    """Pack a bit buffer into bytes, MSB first.

    Raises:
        LengthError: If the buffer length is not a multiple of 8

    """
    return buffer.to_bytes()
