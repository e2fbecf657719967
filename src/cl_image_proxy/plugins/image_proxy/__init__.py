"""Image proxy plugin."""

from .response_policy import build_response, plan_response
from .routes import create_router
from .schema import (
    DecodedImage,
    DecodeFailed,
    Outcome,
    PipelineMetrics,
    ResizeFailed,
    ResizeRequest,
    SourceBytes,
    SourceNotFound,
    Success,
    TargetDimensions,
)
from .task import ImageProxyTask

__all__ = [
    "ImageProxyTask",
    "create_router",
    "build_response",
    "plan_response",
    "DecodedImage",
    "DecodeFailed",
    "Outcome",
    "PipelineMetrics",
    "ResizeFailed",
    "ResizeRequest",
    "SourceBytes",
    "SourceNotFound",
    "Success",
    "TargetDimensions",
]
