"""Argument Parser for Korrupt CLI.

Centralizes all command-line argument definitions.
"""

from __future__ import annotations

import argparse

from korrupt import __version__
from korrupt.core.types import method_names

# Version string for the CLI
VERSION = f"Korrupt v{__version__}"


def parse_seed(value: str) -> int:
    """Parse a seed given in decimal, hex (0x..) or binary (0b..)."""
    try:
        return int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid seed: {value!r}") from None


class ListMethodsAction(argparse.Action):
    """Print the available corruption methods and exit."""

    def __init__(
        self,
        option_strings: list[str],
        dest: str = argparse.SUPPRESS,
        default: str = argparse.SUPPRESS,
        help: str | None = None,
    ) -> None:
        super().__init__(
            option_strings=option_strings,
            dest=dest,
            default=default,
            nargs=0,
            help=help,
        )

    def __call__(self, parser, namespace, values, option_string=None):
        for name in method_names():
            print(name)
        parser.exit()


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser with all argument groups.

    """
    parser = argparse.ArgumentParser(
        prog="korrupt",
        description="Korrupt - A little corruption tool",
        epilog="""
Examples:
  # Flip 1-16 bit parts 10 times anywhere in the file
  %(prog)s input.bin -m flip -r 10 --minpartlen 1 --maxpartlen 16

  # Zero 8-bit parts 5 times, then reverse 32-bit parts twice, in bytes 16-79
  %(prog)s input.bin -m zeros,reverse -r 5,2 --fixedpartlen 8,32 \\
      --range 16:64 --range-unit bytes -s 1234

  # Generate 50 variants with consecutive seeds
  %(prog)s input.bin -m addnoise -r 3 --fixedpartlen 64 -c 50 \\
      -o ./out/@@seed@@-@@filename@@

Round counts and part lengths take one value for every method, or one
value per method in order. Ranges and part lengths are in bits.
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    _add_basic_args(parser)
    _add_method_args(parser)
    _add_range_args(parser)
    _add_output_args(parser)

    return parser


def _add_basic_args(parser: argparse.ArgumentParser) -> None:
    """Add input and general arguments."""
    parser.add_argument("input", help="Input file path")
    parser.add_argument(
        "-s",
        "--seed",
        type=parse_seed,
        metavar="SEED",
        help="Master seed (default: random, printed for replay)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging output"
    )
    parser.add_argument(
        "--log-format",
        choices=["json", "console"],
        help="Log output format (default: from settings)",
    )
    parser.add_argument(
        "--list-methods",
        action=ListMethodsAction,
        help="List corruption methods and exit",
    )
    parser.add_argument("--version", action="version", version=VERSION)


def _add_method_args(parser: argparse.ArgumentParser) -> None:
    """Add corruption method arguments."""
    group = parser.add_argument_group("corruption methods")
    group.add_argument(
        "-m",
        "--method",
        action="append",
        required=True,
        metavar="METHOD",
        help=(
            "Corruption method to use, repeatable or comma-separated: "
            f"{', '.join(method_names())}"
        ),
    )
    group.add_argument(
        "-r",
        "--rounds",
        required=True,
        metavar="N[,N...]",
        help="Number of rounds, one for every method or one per method",
    )
    group.add_argument(
        "--fixedpartlen",
        metavar="N[,N...]",
        help="Fixed part length in bits",
    )
    group.add_argument(
        "--minpartlen",
        metavar="N[,N...]",
        help="Minimum part length in bits (requires --maxpartlen)",
    )
    group.add_argument(
        "--maxpartlen",
        metavar="N[,N...]",
        help="Maximum part length in bits (requires --minpartlen)",
    )
    group.add_argument(
        "--noise-density",
        type=float,
        metavar="P",
        help="Probability that addnoise flips a bit (default: 0.5)",
    )


def _add_range_args(parser: argparse.ArgumentParser) -> None:
    """Add target range arguments."""
    group = parser.add_argument_group("target ranges")
    group.add_argument(
        "--range",
        action="append",
        dest="ranges",
        metavar="START:LENGTH",
        help="Region allowed to be corrupted, repeatable (default: whole input)",
    )
    group.add_argument(
        "--range-unit",
        choices=["bits", "bytes"],
        default="bits",
        help="Unit of --range values (default: bits)",
    )


def _add_output_args(parser: argparse.ArgumentParser) -> None:
    """Add output arguments."""
    group = parser.add_argument_group("output")
    group.add_argument(
        "-o",
        "--output",
        metavar="PATH",
        help="Output file path template (default: /tmp/korrupt/@@filename@@)",
    )
    group.add_argument(
        "-c",
        "--count",
        type=int,
        default=1,
        metavar="N",
        help="Number of variants to generate with consecutive seeds (default: 1)",
    )
