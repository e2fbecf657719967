"""Decode arbitrary image bytes to RGB8 and encode RGB8 to JPEG."""

from io import BytesIO

import numpy as np
from loguru import logger
from PIL import Image, UnidentifiedImageError

from ....common.errors import EncodeInvariantError
from ..schema import DecodeFailed, DecodedImage

JPEG_MIME_TYPE = "image/jpeg"


def decode_image(data: bytes) -> DecodedImage | DecodeFailed:
    """
    Decode any Pillow-readable image into an RGB8 buffer.

    Alpha and palette information is dropped by converting to RGB. Only the
    first frame of animated formats is used.

    Returns:
        DecodedImage on success, DecodeFailed for corrupt, unsupported or
        zero-sized input
    """
    if not data:
        return DecodeFailed(detail="Decode image error: empty source")

    try:
        with Image.open(BytesIO(data)) as img:
            img.load()
            if img.width < 1 or img.height < 1:
                return DecodeFailed(detail="Decode image error: zero-sized image")
            rgb = img if img.mode == "RGB" else img.convert("RGB")
            pixels = np.asarray(rgb, dtype=np.uint8)
    except (UnidentifiedImageError, Image.DecompressionBombError) as exc:
        logger.debug(f"Decode rejected input: {exc}")
        return DecodeFailed(detail="Decode image error")
    except (OSError, ValueError, SyntaxError) as exc:
        # Truncated or malformed streams surface as OSError/SyntaxError in Pillow plugins
        logger.debug(f"Decode failed mid-stream: {exc}")
        return DecodeFailed(detail="Decode image error")

    return DecodedImage.from_array(pixels)


def encode_jpeg(image: DecodedImage, quality: int | None = None) -> bytes:
    """
    Encode an RGB8 buffer as baseline JPEG.

    Args:
        image: Well-formed decoded image
        quality: JPEG quality (None = Pillow default)

    Raises:
        EncodeInvariantError: If Pillow fails on a well-formed buffer
    """
    save_kwargs: dict[str, object] = {}
    if quality is not None:
        save_kwargs["quality"] = quality

    buffer = BytesIO()
    try:
        Image.fromarray(image.pixels).save(buffer, format="JPEG", **save_kwargs)
    except (OSError, ValueError) as exc:
        raise EncodeInvariantError(image.width, image.height, exc) from exc

    return buffer.getvalue()
