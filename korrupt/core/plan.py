"""Korrupt Corruption Plan.

Orchestrates corruption methods over target ranges of a bit buffer.

A plan is an ordered list of methods (each with a round count and a part
length configuration), an ordered list of ranges, and a master seed. At the
start of every run the master seed is used once to fork an independent
random stream per method, in declaration order; the master stream is then
dropped. The output is therefore a pure function of the seed, the ordered
methods and the ordered ranges.
"""

from __future__ import annotations

import random
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from korrupt.core.bitbuffer import BitBuffer, from_bits, to_bits
from korrupt.core.constants import DEFAULT_NOISE_DENSITY, MAX_SEED, SEED_BITS
from korrupt.core.exceptions import ConfigError
from korrupt.core.methods import apply_method
from korrupt.core.sampler import PartSampler
from korrupt.core.types import CorruptionMethod, LengthSpec, MethodSpec, Range
from korrupt.utils.logger import CorruptionEventLogger, get_logger

logger = get_logger(__name__)
event_logger = CorruptionEventLogger(logger)


@dataclass
class MethodConfig:
    """A method bound to its round count and its own sampler."""

    method: CorruptionMethod
    rounds: int
    part_gen: PartSampler


@dataclass
class CorruptionStats:
    """Counters for one run of a plan."""

    rounds_applied: int = 0
    rounds_skipped: int = 0
    bits_removed: int = 0
    method_counts: dict[str, int] = field(default_factory=dict)

    def record(self, method: CorruptionMethod, applied: bool) -> None:
        if applied:
            self.rounds_applied += 1
            self.method_counts[method.value] = (
                self.method_counts.get(method.value, 0) + 1
            )
        else:
            self.rounds_skipped += 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "rounds_applied": self.rounds_applied,
            "rounds_skipped": self.rounds_skipped,
            "bits_removed": self.bits_removed,
            "method_counts": dict(self.method_counts),
        }


class CorruptionPlan:
    """Ordered methods and ranges plus the seed that drives them.

    The builder methods return the plan so calls can be chained. Once a run
    has started the plan is frozen and further builder calls raise
    :class:`ConfigError`.
    """

    def __init__(
        self,
        seed: int | None = None,
        noise_density: float = DEFAULT_NOISE_DENSITY,
    ):
        self.methods: list[MethodSpec] = []
        self.ranges: list[Range] = []
        self.seed: int | None = None
        self.noise_density = DEFAULT_NOISE_DENSITY
        self.stats = CorruptionStats()
        self._frozen = False

        if seed is not None:
            self.set_seed(seed)
        self.set_noise_density(noise_density)

    # -------------------------------------------------------------------------
    # Builder
    # -------------------------------------------------------------------------

    def add_method(
        self,
        method: CorruptionMethod | str,
        rounds: int,
        length: LengthSpec,
    ) -> CorruptionPlan:
        self._check_mutable()
        self.methods.append(MethodSpec(method=method, rounds=rounds, length=length))
        return self

    def add_range(self, start: int | Range, length: int | None = None) -> CorruptionPlan:
        """Append a target range, given as a Range or as start and length bits."""
        self._check_mutable()
        if isinstance(start, Range):
            self.ranges.append(start)
        else:
            if length is None:
                raise ConfigError(
                    "Range length is required", error_code="INVALID_RANGE"
                )
            self.ranges.append(Range(start=start, length=length))
        return self

    def set_seed(self, seed: int) -> CorruptionPlan:
        self._check_mutable()
        if isinstance(seed, bool) or not isinstance(seed, int):
            raise ConfigError(
                f"Seed must be an integer, got {seed!r}", error_code="INVALID_SEED"
            )
        if not 0 <= seed <= MAX_SEED:
            raise ConfigError(
                f"Seed must fit in {SEED_BITS} unsigned bits, got {seed}",
                error_code="INVALID_SEED",
                context={"seed": seed},
            )
        self.seed = seed
        return self

    def set_noise_density(self, density: float) -> CorruptionPlan:
        self._check_mutable()
        if not 0.0 <= density <= 1.0:
            raise ConfigError(
                f"Noise density must be between 0 and 1, got {density}",
                error_code="INVALID_NOISE_DENSITY",
                context={"noise_density": density},
            )
        self.noise_density = float(density)
        return self

    def _check_mutable(self) -> None:
        if self._frozen:
            raise ConfigError(
                "Plan cannot be modified after a run has started",
                error_code="PLAN_FROZEN",
            )

    def validate(self) -> None:
        """Check that the plan is complete.

        Raises:
            ConfigError: If no seed, no method or no range was given

        """
        if self.seed is None:
            raise ConfigError("A seed is required", error_code="MISSING_SEED")
        if not self.methods:
            raise ConfigError(
                "At least one corruption method is required",
                error_code="MISSING_METHOD",
            )
        if not self.ranges:
            raise ConfigError(
                "At least one range is required", error_code="MISSING_RANGE"
            )

    def describe(self) -> dict[str, Any]:
        """JSON-safe summary used for logging."""
        return {
            "seed": self.seed,
            "noise_density": self.noise_density,
            "methods": [
                {
                    "method": spec.method.value,
                    "rounds": spec.rounds,
                    "min_len": spec.length.bounds()[0],
                    "max_len": spec.length.bounds()[1],
                }
                for spec in self.methods
            ],
            "ranges": [{"start": r.start, "length": r.length} for r in self.ranges],
        }

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    def fork_samplers(self) -> list[MethodConfig]:
        """Create one method config per method, each with its own stream.

        Sub-seeds are drawn from a master stream seeded with the plan seed,
        one per method in declaration order.
        """
        self.validate()
        master = random.Random(self.seed)
        configs = []
        for spec in self.methods:
            minimum, maximum = spec.length.bounds()
            sub_seed = master.getrandbits(SEED_BITS)
            configs.append(
                MethodConfig(
                    method=spec.method,
                    rounds=spec.rounds,
                    part_gen=PartSampler(minimum, maximum, random.Random(sub_seed)),
                )
            )
        return configs

    def apply(self, config: MethodConfig, buffer: BitBuffer, target: Range) -> None:
        """Apply one method ``config.rounds`` times to one range."""
        applied = 0
        for _ in range(config.rounds):
            # Resolve every round, shorten may have shrunk the buffer
            region = target.resolve(len(buffer))
            before = len(buffer)
            changed = apply_method(
                config.method,
                buffer,
                region,
                config.part_gen,
                noise_density=self.noise_density,
            )
            self.stats.bits_removed += before - len(buffer)
            self.stats.record(config.method, changed)
            applied += int(changed)

        logger.debug(
            "method_applied",
            method=config.method.value,
            range_start=target.start,
            range_length=target.length,
            rounds=config.rounds,
            applied=applied,
            skipped=config.rounds - applied,
        )

    def run(self, buffer: BitBuffer) -> BitBuffer:
        """Corrupt ``buffer`` in place and return it.

        Raises:
            ConfigError: If the plan is incomplete

        """
        configs = self.fork_samplers()
        self._frozen = True
        self.stats = CorruptionStats()

        assert self.seed is not None
        event_logger.log_run_started(self.seed, len(buffer))

        for target in self.ranges:
            for config in configs:
                self.apply(config, buffer, target)

        event_logger.log_run_completed(self.seed, self.stats.to_dict())
        return buffer


def _coerce_method(entry: MethodSpec | Mapping[str, Any]) -> MethodSpec:
    if isinstance(entry, MethodSpec):
        return entry
    if not isinstance(entry, Mapping):
        raise ConfigError(
            f"Invalid method entry {entry!r}: expected a MethodSpec or mapping",
            error_code="INVALID_METHOD_ENTRY",
        )
    try:
        name = entry.get("name", entry.get("method"))
        length = entry.get("length")
        if length is None:
            length = LengthSpec(
                fixed=entry.get("fixed"),
                minimum=entry.get("minimum"),
                maximum=entry.get("maximum"),
            )
        elif isinstance(length, Mapping):
            length = LengthSpec(**length)
        return MethodSpec(method=name, rounds=int(entry["rounds"]), length=length)
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigError(
            f"Invalid method entry {entry!r}: {e}",
            error_code="INVALID_METHOD_ENTRY",
        ) from e


def _coerce_range(entry: Range | tuple[int, int] | Mapping[str, int]) -> Range:
    if isinstance(entry, Range):
        return entry
    if isinstance(entry, Mapping):
        start = entry.get("start", entry.get("origin"))
        length = entry.get("length")
        if start is None or length is None:
            raise ConfigError(
                f"Invalid range entry {entry!r}", error_code="INVALID_RANGE"
            )
        entry = (start, length)
    try:
        start, length = entry
        return Range(start=int(start), length=int(length))
    except (TypeError, ValueError) as e:
        raise ConfigError(
            f"Invalid range entry {entry!r}: {e}", error_code="INVALID_RANGE"
        ) from e


def build_plan(
    seed: int | None,
    methods: Iterable[MethodSpec | Mapping[str, Any]],
    ranges: Iterable[Range | tuple[int, int] | Mapping[str, int]],
    noise_density: float = DEFAULT_NOISE_DENSITY,
) -> CorruptionPlan:
    """Build and validate a corruption plan.

    Args:
        seed: Master seed (unsigned 64-bit)
        methods: Method specs, or mappings with ``name``, ``rounds`` and
            either ``length`` or ``fixed``/``minimum``/``maximum``
        ranges: Ranges, ``(start, length)`` pairs, or mappings with
            ``start``/``origin`` and ``length`` (bits)
        noise_density: Flip probability used by ``addnoise``

    Returns:
        A validated plan ready to run

    Raises:
        ConfigError: If any part of the configuration is invalid or missing

    """
    plan = CorruptionPlan(noise_density=noise_density)
    if seed is not None:
        plan.set_seed(seed)
    for entry in methods:
        spec = _coerce_method(entry)
        plan.add_method(spec.method, spec.rounds, spec.length)
    for entry in ranges:
        plan.add_range(_coerce_range(entry))
    plan.validate()

    summary = plan.describe()
    event_logger.log_plan_built(
        summary["seed"], summary["methods"], summary["ranges"]
    )
    return plan


def run(plan: CorruptionPlan, data: bytes) -> bytes:
    """Corrupt ``data`` with ``plan`` and return the corrupted bytes.

    Raises:
        ConfigError: If the plan is incomplete
        LengthError: If the corrupted buffer is not byte-aligned

    """
    buffer = plan.run(to_bits(data))
    return from_bits(buffer)
