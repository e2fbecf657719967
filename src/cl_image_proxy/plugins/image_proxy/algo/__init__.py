"""Image proxy algorithms."""

from .codec import JPEG_MIME_TYPE, decode_image, encode_jpeg
from .dimension_planner import plan_dimensions
from .resize_engine import resize_image
from .source_resolver import SourceResolver, join_remote_url

__all__ = [
    "JPEG_MIME_TYPE",
    "SourceResolver",
    "decode_image",
    "encode_jpeg",
    "join_remote_url",
    "plan_dimensions",
    "resize_image",
]
