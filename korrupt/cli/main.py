"""Korrupt - Command Line Interface

Corrupts a file with a seeded plan of bit-level corruption methods and
writes the result (or several variants) to a templated output path.
"""

from __future__ import annotations

import argparse
import secrets
import sys
from pathlib import Path

from tqdm import tqdm

from korrupt.cli.output import read_input, render_output_path, write_output
from korrupt.cli.utils.argument_parser import create_parser
from korrupt.core.config import get_settings
from korrupt.core.constants import BITS_PER_BYTE, MAX_SEED, SEED_BITS
from korrupt.core.exceptions import ConfigError, LengthError
from korrupt.core.plan import CorruptionPlan, build_plan, run
from korrupt.core.types import LengthSpec, MethodSpec, Range
from korrupt.utils.logger import CorruptionEventLogger, configure_logging, get_logger

logger = get_logger(__name__)
event_logger = CorruptionEventLogger(logger)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERNAL_ERROR = 3
EXIT_INTERRUPTED = 130


# CLI Helper Functions
def format_file_size(size: int) -> str:
    """Format file size for CLI output.

    Args:
        size: Size in bytes

    Returns:
        Formatted string (e.g., "1.0 MB")

    """
    kb = 1024
    mb = kb * 1024
    gb = mb * 1024

    if size < kb:
        return f"{size} B"
    elif size < mb:
        return f"{size / kb:.1f} KB"
    elif size < gb:
        return f"{size / mb:.1f} MB"
    else:
        return f"{size / gb:.1f} GB"


def parse_methods(values: list[str]) -> list[str]:
    """Flatten repeated and comma-separated method names."""
    methods = [name.strip() for value in values for name in value.split(",")]
    return [name for name in methods if name]


def parse_int_list(value: str, option: str) -> list[int]:
    """Parse a comma-separated list of non-negative integers.

    Raises:
        ConfigError: If an item is not a non-negative integer

    """
    numbers = []
    for item in value.split(","):
        item = item.strip()
        if not item.isdecimal():
            raise ConfigError(
                f"{option} expects non-negative integers, got {item!r}",
                error_code="INVALID_ARGUMENT",
                context={"option": option, "value": value},
            )
        numbers.append(int(item))
    return numbers


def broadcast(values: list[int], count: int, option: str) -> list[int]:
    """Use a single value for every method, or one value per method.

    Raises:
        ConfigError: If the number of values matches neither

    """
    if len(values) == 1:
        return values * count
    if len(values) != count:
        raise ConfigError(
            f"{option} takes 1 or {count} values, got {len(values)}",
            error_code="INVALID_ARGUMENT",
            context={"option": option, "values": values, "methods": count},
        )
    return values


def parse_length_specs(
    fixed: str | None, minimum: str | None, maximum: str | None, count: int
) -> list[LengthSpec]:
    """Build one part length spec per method from the CLI options."""
    if fixed is not None and (minimum is not None or maximum is not None):
        raise ConfigError(
            "--fixedpartlen cannot be combined with --minpartlen/--maxpartlen",
            error_code="INVALID_LENGTH_SPEC",
        )
    if fixed is not None:
        fixed_lengths = broadcast(
            parse_int_list(fixed, "--fixedpartlen"), count, "--fixedpartlen"
        )
        return [LengthSpec.fixed_length(length) for length in fixed_lengths]
    if minimum is None or maximum is None:
        raise ConfigError(
            "Either --fixedpartlen or both --minpartlen and --maxpartlen are required",
            error_code="INVALID_LENGTH_SPEC",
        )
    minimums = broadcast(parse_int_list(minimum, "--minpartlen"), count, "--minpartlen")
    maximums = broadcast(parse_int_list(maximum, "--maxpartlen"), count, "--maxpartlen")
    return [LengthSpec.bounded(lo, hi) for lo, hi in zip(minimums, maximums)]


def parse_method_specs(args: argparse.Namespace) -> list[MethodSpec]:
    """Combine methods, rounds and part lengths into method specs."""
    methods = parse_methods(args.method)
    if not methods:
        raise ConfigError("No corruption method given", error_code="MISSING_METHOD")
    rounds = broadcast(parse_int_list(args.rounds, "--rounds"), len(methods), "--rounds")
    lengths = parse_length_specs(
        args.fixedpartlen, args.minpartlen, args.maxpartlen, len(methods)
    )
    return [
        MethodSpec(method=name, rounds=count, length=length)
        for name, count, length in zip(methods, rounds, lengths)
    ]


def parse_range(value: str, unit: str = "bits") -> Range:
    """Parse a ``START:LENGTH`` range, scaling bytes to bits.

    Raises:
        ConfigError: If the value is malformed or the length is zero

    """
    start, sep, length = value.partition(":")
    if not sep or not start.strip().isdecimal() or not length.strip().isdecimal():
        raise ConfigError(
            f"Range must be START:LENGTH, got {value!r}",
            error_code="INVALID_RANGE",
            context={"value": value},
        )
    scale = BITS_PER_BYTE if unit == "bytes" else 1
    return Range(start=int(start) * scale, length=int(length) * scale)


def parse_ranges(values: list[str] | None, unit: str, data_size: int) -> list[Range]:
    """Parse --range values; default to the whole input."""
    if values:
        return [parse_range(value, unit) for value in values]
    if data_size == 0:
        raise ConfigError("Input file is empty", error_code="EMPTY_INPUT")
    return [Range(start=0, length=data_size * BITS_PER_BYTE)]


def resolve_seed(seed: int | None) -> int:
    """Return the given seed, or a fresh random 64-bit one.

    Raises:
        ConfigError: If the seed is outside the unsigned 64-bit range

    """
    if seed is None:
        return secrets.randbits(SEED_BITS)
    if not 0 <= seed <= MAX_SEED:
        raise ConfigError(
            f"Seed must be between 0 and {MAX_SEED}, got {seed}",
            error_code="INVALID_SEED",
            context={"seed": seed},
        )
    return seed


def setup_logging(verbose: bool, log_format: str | None = None) -> None:
    """Configure logging from settings and CLI flags."""
    settings = get_settings()
    level = "DEBUG" if verbose else settings.log_level.value
    fmt = log_format or settings.log_format
    configure_logging(log_level=level, json_format=fmt == "json")


def corrupt_variants(
    plan_args: dict,
    data: bytes,
    input_path: Path,
    template: str,
    seed: int,
    count: int,
    show_progress: bool = False,
) -> list[Path]:
    """Build and run one plan per variant, writing each result.

    Variant ``i`` uses seed ``seed + i`` (wrapping at 2**64).
    """
    written = []
    indices = range(count)
    if show_progress:
        indices = tqdm(indices, total=count, unit="file", ncols=70)
    for index in indices:
        variant_seed = (seed + index) & MAX_SEED
        plan: CorruptionPlan = build_plan(variant_seed, **plan_args)
        corrupted = run(plan, data)
        path = write_output(
            render_output_path(template, input_path, variant_seed, index, count),
            corrupted,
        )
        event_logger.log_output_written(str(path), variant_seed, len(corrupted))
        written.append(path)
    return written


def main(argv: list[str] | None = None) -> int:
    """Execute a corruption run with the given command-line arguments."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose, args.log_format)
    settings = get_settings()

    try:
        if args.count < 1:
            raise ConfigError(
                f"--count must be at least 1, got {args.count}",
                error_code="INVALID_ARGUMENT",
            )
        input_path = Path(args.input)
        data = read_input(input_path, settings.max_input_mb * 1024 * 1024)
        plan_args = {
            "methods": parse_method_specs(args),
            "ranges": parse_ranges(args.ranges, args.range_unit, len(data)),
            "noise_density": (
                args.noise_density
                if args.noise_density is not None
                else settings.noise_density
            ),
        }
        seed = resolve_seed(args.seed)
        template = args.output or settings.output_template

        print(f"Input: {input_path.name} ({format_file_size(len(data))})")
        print(f"Seed:  {seed}")

        files = corrupt_variants(
            plan_args,
            data,
            input_path,
            template,
            seed,
            args.count,
            show_progress=not args.verbose and args.count >= 20,
        )

        for path in files[:10]:
            print(f"  [+] {path}")
        if len(files) > 10:
            print(f"  ... and {len(files) - 10} more")

    except ConfigError as e:
        logger.error("configuration_error", error=e.message, error_code=e.error_code)
        print(f"[ERROR] {e.message}", file=sys.stderr)
        return EXIT_ERROR
    except LengthError as e:
        logger.error("internal_error", error=e.message, context=e.context)
        print(f"[ERROR] Internal error: {e.message}", file=sys.stderr)
        return EXIT_INTERNAL_ERROR
    except OSError as e:
        logger.error("io_error", error=str(e))
        print(f"[ERROR] {e}", file=sys.stderr)
        return EXIT_ERROR
    except KeyboardInterrupt:
        print("\n[INTERRUPTED] Corruption stopped by user", file=sys.stderr)
        return EXIT_INTERRUPTED

    return EXIT_OK
