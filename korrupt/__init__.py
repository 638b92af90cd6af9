"""
Korrupt - A deterministic binary corruption tool.

Corrupts files at the bit level with seeded, reproducible mutations, to
feed other software malformed input for fuzz-testing and fault-injection.
"""

__version__ = "1.0.0"
__license__ = "MIT"

from korrupt.core.bitbuffer import BitBuffer, from_bits, to_bits
from korrupt.core.exceptions import ConfigError, KorruptError, LengthError
from korrupt.core.plan import CorruptionPlan, build_plan, run
from korrupt.core.types import CorruptionMethod, LengthSpec, MethodSpec, Range

__all__ = [
    "__version__",
    "__license__",
    "BitBuffer",
    "ConfigError",
    "CorruptionMethod",
    "CorruptionPlan",
    "KorruptError",
    "LengthError",
    "LengthSpec",
    "MethodSpec",
    "Range",
    "build_plan",
    "from_bits",
    "run",
    "to_bits",
]
