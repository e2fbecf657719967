"""Convolution resampling of RGB8 buffers."""

import numpy as np
from loguru import logger
from PIL import Image

from ....common.config import ResizeFilter
from ..schema import DecodedImage, ResizeFailed, TargetDimensions


def resize_image(
    image: DecodedImage,
    target: TargetDimensions,
    resize_filter: ResizeFilter = ResizeFilter.LANCZOS,
) -> DecodedImage | ResizeFailed:
    """
    Scale an image to exactly ``target`` (up or down) with a fixed filter.

    Aspect ratio is not preserved here; the dimension planner decides it.

    Returns:
        New DecodedImage, or ResizeFailed if resampling raised
    """
    try:
        src = Image.fromarray(image.pixels)
        resized = src.resize((target.width, target.height), resize_filter.to_pil())
        pixels = np.asarray(resized, dtype=np.uint8)
    except (ValueError, MemoryError, OSError) as exc:
        logger.warning(
            f"Resampling {image.width}x{image.height} -> {target.width}x{target.height} failed: {exc}"
        )
        return ResizeFailed(detail="Resize image error")

    if pixels.shape != (target.height, target.width, 3):
        return ResizeFailed(detail="Resize image error: dimension mismatch")

    return DecodedImage.from_array(pixels)
