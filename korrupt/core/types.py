"""Korrupt Type Definitions.

Shared types used by the sampler, the corruption methods and the plan:
the closed set of corruption methods, target ranges and their clamped
regions, and the per-method length/round configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from korrupt.core.exceptions import ConfigError

# =============================================================================
# Corruption Methods
# =============================================================================


class CorruptionMethod(str, Enum):
    """Closed set of bit-region transformations."""

    ZEROS = "zeros"  # Set a part to 0
    ONES = "ones"  # Set a part to 1
    FLIP = "flip"  # Invert a part
    SWAP = "swap"  # Exchange two parts
    REVERSE = "reverse"  # Reverse bit order of a part
    REPEAT = "repeat"  # Tile a part over the bits following it
    SHORTEN = "shorten"  # Remove a part, shrinking the buffer
    ADDNOISE = "addnoise"  # XOR random bits into a part
    INTERFERENCE = "interference"  # XOR one part into another
    RROTATE = "rrotate"  # Circular right rotation of a part
    LROTATE = "lrotate"  # Circular left rotation of a part

    @classmethod
    def from_name(cls, name: str | CorruptionMethod) -> CorruptionMethod:
        """Resolve a method name, accepting the legacy cycle aliases.

        Raises:
            ConfigError: If the name is not a known method

        """
        if isinstance(name, CorruptionMethod):
            return name
        key = str(name).strip().lower()
        key = METHOD_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ConfigError(
                f"Unknown corruption method: {name!r}",
                error_code="UNKNOWN_METHOD",
                context={"valid_methods": method_names()},
            ) from None


#: Names used by earlier releases of the tool
METHOD_ALIASES: dict[str, str] = {
    "rcycle": CorruptionMethod.RROTATE.value,
    "lcycle": CorruptionMethod.LROTATE.value,
}


def method_names(include_aliases: bool = False) -> list[str]:
    """Return the method names accepted on the command line."""
    names = [method.value for method in CorruptionMethod]
    if include_aliases:
        names.extend(METHOD_ALIASES)
    return names


# =============================================================================
# Ranges
# =============================================================================


@dataclass(frozen=True)
class Range:
    """Caller-declared span of the buffer, in bits.

    ``start + length`` may run past the end of the buffer; it is clamped
    every round by :meth:`resolve`.
    """

    start: int
    length: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ConfigError(
                f"Range start must be non-negative, got {self.start}",
                error_code="INVALID_RANGE",
                context={"start": self.start, "length": self.length},
            )
        if self.length <= 0:
            raise ConfigError(
                f"Range length must be positive, got {self.length}",
                error_code="INVALID_RANGE",
                context={"start": self.start, "length": self.length},
            )

    @property
    def stop(self) -> int:
        return self.start + self.length

    def resolve(self, buffer_length: int) -> Region:
        """Clamp this range to a buffer of ``buffer_length`` bits."""
        start = min(self.start, buffer_length)
        return Region(start=start, stop=max(start, min(self.stop, buffer_length)))


@dataclass(frozen=True)
class Region:
    """A range clamped to the buffer's current length."""

    start: int
    stop: int

    @property
    def length(self) -> int:
        return self.stop - self.start

    @property
    def is_empty(self) -> bool:
        return self.stop <= self.start


# =============================================================================
# Method Configuration
# =============================================================================


@dataclass(frozen=True)
class LengthSpec:
    """Part length configuration: either fixed, or a min/max pair.

    A fixed length and a min/max pair are mutually exclusive, and min and
    max must be given together. ``minimum > maximum`` is accepted here and
    normalized by the sampler.
    """

    fixed: int | None = None
    minimum: int | None = None
    maximum: int | None = None

    def __post_init__(self) -> None:
        has_bounds = self.minimum is not None or self.maximum is not None
        if self.fixed is not None and has_bounds:
            raise ConfigError(
                "A fixed part length cannot be combined with min/max part lengths",
                error_code="INVALID_LENGTH_SPEC",
                context=self._context(),
            )
        if self.fixed is None and not has_bounds:
            raise ConfigError(
                "Either a fixed part length or min/max part lengths are required",
                error_code="INVALID_LENGTH_SPEC",
                context=self._context(),
            )
        if has_bounds and (self.minimum is None or self.maximum is None):
            raise ConfigError(
                "Min and max part lengths must be given together",
                error_code="INVALID_LENGTH_SPEC",
                context=self._context(),
            )
        for value in (self.fixed, self.minimum, self.maximum):
            if value is not None and value < 0:
                raise ConfigError(
                    f"Part lengths must be non-negative, got {value}",
                    error_code="INVALID_LENGTH_SPEC",
                    context=self._context(),
                )

    @classmethod
    def fixed_length(cls, length: int) -> LengthSpec:
        return cls(fixed=length)

    @classmethod
    def bounded(cls, minimum: int, maximum: int) -> LengthSpec:
        return cls(minimum=minimum, maximum=maximum)

    def bounds(self) -> tuple[int, int]:
        """Return the ``(min, max)`` pair handed to the sampler."""
        if self.fixed is not None:
            return self.fixed, self.fixed
        assert self.minimum is not None and self.maximum is not None
        return self.minimum, self.maximum

    def _context(self) -> dict[str, int | None]:
        return {"fixed": self.fixed, "minimum": self.minimum, "maximum": self.maximum}


@dataclass(frozen=True)
class MethodSpec:
    """One requested method with its round count and part length."""

    method: CorruptionMethod
    rounds: int
    length: LengthSpec

    def __post_init__(self) -> None:
        # Accept plain names; frozen dataclass needs object.__setattr__
        object.__setattr__(self, "method", CorruptionMethod.from_name(self.method))
        if self.rounds < 0:
            raise ConfigError(
                f"Round count must be non-negative, got {self.rounds}",
                error_code="INVALID_ROUNDS",
                context={"method": self.method.value, "rounds": self.rounds},
            )
