"""
Pytest configuration and shared fixtures for Korrupt tests.
"""

import tempfile
from collections.abc import Callable, Generator, Sequence
from pathlib import Path

import numpy as np
import pytest


class ScriptedSampler:
    """Sampler stand-in that returns pre-set lengths, origins and noise.

    Origins are checked against the bound the method asks for, so tests
    also verify that parts never leave their region.
    """

    def __init__(
        self,
        lengths: Sequence[int] = (),
        origins: Sequence[int] = (),
        noise: Sequence[int] = (),
    ):
        self.lengths = list(lengths)
        self.origins = list(origins)
        self.noise = list(noise)
        self.origin_bounds: list[int] = []

    def get_len(self) -> int:
        return self.lengths.pop(0)

    def get_origin(self, bound: int) -> int:
        origin = self.origins.pop(0)
        self.origin_bounds.append(bound)
        assert 0 <= origin <= bound, f"origin {origin} outside [0, {bound}]"
        return origin

    def get_noise(self, length: int, density: float = 0.5) -> np.ndarray:
        bits, self.noise = self.noise[:length], self.noise[length:]
        return np.array(bits, dtype=np.uint8)

    @property
    def exhausted(self) -> bool:
        return not self.lengths and not self.origins and not self.noise


@pytest.fixture
def scripted_sampler() -> Callable[..., ScriptedSampler]:
    """Factory for samplers with scripted draws."""
    return ScriptedSampler


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields:
        Path to temporary directory that will be cleaned up after test
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_data() -> bytes:
    """256 bytes covering every byte value."""
    return bytes(range(256))


@pytest.fixture
def sample_file(temp_dir: Path, sample_data: bytes) -> Path:
    """Create a small binary input file.

    Args:
        temp_dir: Temporary directory fixture
        sample_data: File contents

    Returns:
        Path to created file
    """
    file_path = temp_dir / "sample.bin"
    file_path.write_bytes(sample_data)
    return file_path
