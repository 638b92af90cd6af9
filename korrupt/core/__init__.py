"""Corruption engine -- bit buffer, sampler, methods and plan."""

from .bitbuffer import BitBuffer, from_bits, to_bits
from .exceptions import ConfigError, KorruptError, LengthError
from .methods import apply_method
from .plan import CorruptionPlan, CorruptionStats, MethodConfig, build_plan, run
from .sampler import PartSampler
from .types import CorruptionMethod, LengthSpec, MethodSpec, Range, Region

__all__ = [
    "BitBuffer",
    "ConfigError",
    "CorruptionMethod",
    "CorruptionPlan",
    "CorruptionStats",
    "KorruptError",
    "LengthError",
    "LengthSpec",
    "MethodConfig",
    "MethodSpec",
    "PartSampler",
    "Range",
    "Region",
    "apply_method",
    "build_plan",
    "from_bits",
    "run",
    "to_bits",
]
