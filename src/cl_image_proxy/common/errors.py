"""Exception types for cl_image_proxy.

Pipeline failures the client can observe (missing source, undecodable bytes,
resampling errors) travel as ``Outcome`` values, not exceptions. The types
here are reserved for broken invariants that must escalate.
"""


class ImageProxyError(Exception):
    """Base class for cl_image_proxy errors."""


class InvalidDimensionsError(ImageProxyError, ValueError):
    def __init__(self, width: int, height: int, detail: str | None = None):
        self.width: int = width
        self.height: int = height
        message = f"Invalid image dimensions {width}x{height}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class EncodeInvariantError(ImageProxyError, RuntimeError):
    """JPEG encoding failed on a well-formed pixel buffer."""

    def __init__(self, width: int, height: int, cause: Exception):
        self.width: int = width
        self.height: int = height
        super().__init__(f"JPEG encode failed for {width}x{height} RGB buffer: {cause}")
