"""Common module - configuration and error types."""

from .config import ProxyConfig, ResizeFilter
from .errors import EncodeInvariantError, ImageProxyError, InvalidDimensionsError

__all__ = [
    "ProxyConfig",
    "ResizeFilter",
    "ImageProxyError",
    "InvalidDimensionsError",
    "EncodeInvariantError",
]
