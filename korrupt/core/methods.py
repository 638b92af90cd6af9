"""Corruption method transforms.

One transform per :class:`~korrupt.core.types.CorruptionMethod` member,
registered in a dispatch table. Every transform mutates the buffer in
place for a single round and returns whether it changed anything worth
counting; degenerate samples (empty parts, exhausted regions) are no-ops.

Clamping rule shared by all methods: a sampled part length is clamped to
the region length, and its origin is drawn from
``[0, region.length - part_len]`` so the part never leaves the region.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from korrupt.core.bitbuffer import BitBuffer
from korrupt.core.constants import BITS_PER_BYTE, DEFAULT_NOISE_DENSITY
from korrupt.core.sampler import PartSampler
from korrupt.core.types import CorruptionMethod, Region


@dataclass
class RoundContext:
    """Everything a transform needs for one round."""

    buffer: BitBuffer
    region: Region
    sampler: PartSampler
    noise_density: float = DEFAULT_NOISE_DENSITY

    @property
    def bits(self) -> np.ndarray:
        return self.buffer.bits


def _sample_len(ctx: RoundContext) -> int:
    return min(ctx.sampler.get_len(), ctx.region.length)


def _sample_origin(ctx: RoundContext, part_len: int) -> int:
    """Absolute start of a part of ``part_len`` bits inside the region."""
    return ctx.region.start + ctx.sampler.get_origin(ctx.region.length - part_len)


def _sample_part(ctx: RoundContext) -> tuple[int, int] | None:
    part_len = _sample_len(ctx)
    if part_len <= 0:
        return None
    return _sample_origin(ctx, part_len), part_len


# =============================================================================
# Transforms
# =============================================================================


def _zeros(ctx: RoundContext) -> bool:
    part = _sample_part(ctx)
    if part is None:
        return False
    start, length = part
    ctx.bits[start : start + length] = 0
    return True


def _ones(ctx: RoundContext) -> bool:
    part = _sample_part(ctx)
    if part is None:
        return False
    start, length = part
    ctx.bits[start : start + length] = 1
    return True


def _flip(ctx: RoundContext) -> bool:
    part = _sample_part(ctx)
    if part is None:
        return False
    start, length = part
    ctx.bits[start : start + length] ^= 1
    return True


def _swap(ctx: RoundContext) -> bool:
    # Two lengths are drawn; the shorter one is used for both parts
    length = min(_sample_len(ctx), _sample_len(ctx))
    if length <= 0:
        return False
    first = _sample_origin(ctx, length)
    second = _sample_origin(ctx, length)
    first_bits = ctx.bits[first : first + length].copy()
    second_bits = ctx.bits[second : second + length].copy()
    ctx.bits[first : first + length] = second_bits
    ctx.bits[second : second + length] = first_bits
    return True


def _reverse(ctx: RoundContext) -> bool:
    part = _sample_part(ctx)
    if part is None:
        return False
    start, length = part
    ctx.bits[start : start + length] = ctx.bits[start : start + length][::-1].copy()
    return True


def _repeat(ctx: RoundContext) -> bool:
    part = _sample_part(ctx)
    if part is None:
        return False
    start, length = part
    end = start + length
    span = min(ctx.sampler.get_len(), ctx.region.stop - end)
    if span <= 0:
        return False
    ctx.bits[end : end + span] = np.resize(ctx.bits[start:end].copy(), span)
    return True


def _shorten(ctx: RoundContext) -> bool:
    """Delete a part of the region.

    The removed length is the sampled length rounded down to whole bytes.
    """
    length = _sample_len(ctx)
    length -= length % BITS_PER_BYTE
    if length <= 0:
        return False
    start = _sample_origin(ctx, length)
    return ctx.buffer.delete(start, start + length) > 0


def _addnoise(ctx: RoundContext) -> bool:
    part = _sample_part(ctx)
    if part is None:
        return False
    start, length = part
    ctx.bits[start : start + length] ^= ctx.sampler.get_noise(
        length, ctx.noise_density
    )
    return True


def _interference(ctx: RoundContext) -> bool:
    length = _sample_len(ctx)
    if length <= 0:
        return False
    target = _sample_origin(ctx, length)
    source = _sample_origin(ctx, length)
    source_bits = ctx.bits[source : source + length].copy()
    ctx.bits[target : target + length] ^= source_bits
    return True


def _rotate(ctx: RoundContext, direction: int) -> bool:
    part = _sample_part(ctx)
    if part is None:
        return False
    start, length = part
    intensity = min(ctx.sampler.get_len(), length)
    ctx.bits[start : start + length] = np.roll(
        ctx.bits[start : start + length], direction * intensity
    )
    return True


def _rrotate(ctx: RoundContext) -> bool:
    return _rotate(ctx, 1)


def _lrotate(ctx: RoundContext) -> bool:
    return _rotate(ctx, -1)


TRANSFORMS: dict[CorruptionMethod, Callable[[RoundContext], bool]] = {
    CorruptionMethod.ZEROS: _zeros,
    CorruptionMethod.ONES: _ones,
    CorruptionMethod.FLIP: _flip,
    CorruptionMethod.SWAP: _swap,
    CorruptionMethod.REVERSE: _reverse,
    CorruptionMethod.REPEAT: _repeat,
    CorruptionMethod.SHORTEN: _shorten,
    CorruptionMethod.ADDNOISE: _addnoise,
    CorruptionMethod.INTERFERENCE: _interference,
    CorruptionMethod.RROTATE: _rrotate,
    CorruptionMethod.LROTATE: _lrotate,
}


def apply_method(
    method: CorruptionMethod,
    buffer: BitBuffer,
    region: Region,
    sampler: PartSampler,
    noise_density: float = DEFAULT_NOISE_DENSITY,
) -> bool:
    """Apply one round of ``method`` to ``region`` of ``buffer``.

    Args:
        method: Corruption method to apply
        buffer: Buffer to mutate in place
        region: Target region, already clamped to the buffer
        sampler: The method's own part sampler
        noise_density: Flip probability used by ``addnoise``

    Returns:
        True if the round mutated the buffer, False if it was skipped

    """
    if region.is_empty:
        return False
    ctx = RoundContext(
        buffer=buffer, region=region, sampler=sampler, noise_density=noise_density
    )
    return TRANSFORMS[method](ctx)
