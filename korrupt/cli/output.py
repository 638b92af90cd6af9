"""Input reading and output path templating for the CLI."""

from __future__ import annotations

from pathlib import Path

from korrupt.core.constants import (
    FILENAME_PLACEHOLDER,
    INDEX_PLACEHOLDER,
    SEED_PLACEHOLDER,
)
from korrupt.core.exceptions import ConfigError


def read_input(path: Path, max_bytes: int | None = None) -> bytes:
    """Read the file to corrupt.

    Raises:
        ConfigError: If the path is missing, not a file, or too large

    """
    if not path.exists():
        raise ConfigError(
            f"Input file '{path}' not found",
            error_code="INPUT_NOT_FOUND",
            context={"path": str(path)},
        )
    if not path.is_file():
        raise ConfigError(
            f"'{path}' is not a file",
            error_code="INPUT_NOT_FILE",
            context={"path": str(path)},
        )
    size = path.stat().st_size
    if max_bytes is not None and size > max_bytes:
        raise ConfigError(
            f"Input file '{path}' is {size} bytes, limit is {max_bytes}",
            error_code="INPUT_TOO_LARGE",
            context={"path": str(path), "size": size, "limit": max_bytes},
        )
    return path.read_bytes()


def render_output_path(
    template: str, input_path: Path, seed: int, index: int = 0, count: int = 1
) -> Path:
    """Expand an output template for one variant.

    ``@@filename@@`` becomes the input file name, ``@@seed@@`` the variant's
    seed and ``@@index@@`` its index. When several variants are requested
    and the template distinguishes neither, ``.<index>`` is appended.
    """
    distinct = SEED_PLACEHOLDER in template or INDEX_PLACEHOLDER in template
    rendered = (
        template.replace(FILENAME_PLACEHOLDER, input_path.name)
        .replace(SEED_PLACEHOLDER, str(seed))
        .replace(INDEX_PLACEHOLDER, str(index))
    )
    if count > 1 and not distinct:
        rendered = f"{rendered}.{index}"
    return Path(rendered)


def write_output(path: Path, data: bytes) -> Path:
    """Write corrupted data, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path
