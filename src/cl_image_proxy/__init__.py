"""cl_image_proxy - On-demand image resizing proxy."""

__version__ = "0.1.0"

from .app import create_app
from .common.config import ProxyConfig, ResizeFilter
from .plugins.image_proxy.task import ImageProxyTask

__all__ = [
    "ImageProxyTask",
    "ProxyConfig",
    "ResizeFilter",
    "__version__",
    "create_app",
]
