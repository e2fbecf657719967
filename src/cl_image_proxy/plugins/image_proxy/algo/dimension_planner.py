"""Target dimension resolution for resize requests."""

import math

from ..schema import TargetDimensions

# Divisor applied to both axes when the request names no dimension.
DEFAULT_DOWNSCALE = 4


def round_half_away(value: float) -> int:
    """Nearest integer, ties away from zero (Python's round() ties to even)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def plan_dimensions(
    source_width: int,
    source_height: int,
    requested_width: int | None = None,
    requested_height: int | None = None,
) -> TargetDimensions:
    """
    Compute output dimensions from source size and the requested axes.

    Priority:
        1. width and height: used verbatim (may stretch)
        2. width only: height follows the source aspect ratio
        3. height only: width follows the source aspect ratio
        4. neither: each axis is the source axis // 4

    Every axis is clamped to at least 1 pixel.

    Raises:
        ValueError: If the source dimensions are not positive
    """
    if source_width < 1 or source_height < 1:
        raise ValueError(f"Source dimensions must be positive, got {source_width}x{source_height}")

    if requested_width is not None and requested_height is not None:
        width, height = requested_width, requested_height
    elif requested_width is not None:
        width = requested_width
        height = round_half_away(source_height * (requested_width / source_width))
    elif requested_height is not None:
        width = round_half_away(source_width * (requested_height / source_height))
        height = requested_height
    else:
        width = source_width // DEFAULT_DOWNSCALE
        height = source_height // DEFAULT_DOWNSCALE

    return TargetDimensions(width=max(1, width), height=max(1, height))
