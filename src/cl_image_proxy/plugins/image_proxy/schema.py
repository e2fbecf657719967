"""Image proxy request, intermediate and outcome schemas."""

from typing import ClassVar, Literal, Self

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator

from ...common.errors import InvalidDimensionsError

# ─────────────────────────────────────────────────────────────
# Request
# ─────────────────────────────────────────────────────────────


class ResizeRequest(BaseModel):
    """One inbound resize request, already de-aliased."""

    relative_path: str = Field(..., min_length=1, description="URL path of the source image")
    requested_width: int | None = Field(default=None, gt=0, description="Target width in pixels")
    requested_height: int | None = Field(default=None, gt=0, description="Target height in pixels")

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")


# ─────────────────────────────────────────────────────────────
# Pipeline values
# ─────────────────────────────────────────────────────────────


class SourceBytes(BaseModel):
    """Raw bytes obtained from one origin."""

    relative_path: str
    origin: Literal["local", "remote"]
    data: bytes

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)


class DecodedImage(BaseModel):
    """Row-major RGB8 pixel buffer of shape (height, width, 3)."""

    width: int
    height: int
    pixels: np.ndarray

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @model_validator(mode="after")
    def validate_buffer(self) -> "DecodedImage":
        if self.width < 1 or self.height < 1:
            raise InvalidDimensionsError(self.width, self.height)
        if self.pixels.dtype != np.uint8:
            raise InvalidDimensionsError(
                self.width, self.height, f"expected uint8 pixels, got {self.pixels.dtype}"
            )
        if self.pixels.shape != (self.height, self.width, 3):
            raise InvalidDimensionsError(
                self.width, self.height, f"pixel buffer has shape {self.pixels.shape}"
            )
        # Buffer is handed from stage to stage; nobody may write into it.
        self.pixels.flags.writeable = False
        return self

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> "DecodedImage":
        height, width = pixels.shape[:2]
        return cls(width=int(width), height=int(height), pixels=np.ascontiguousarray(pixels))


class TargetDimensions(BaseModel):
    width: int
    height: int

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_positive(self) -> "TargetDimensions":
        if self.width < 1 or self.height < 1:
            raise InvalidDimensionsError(self.width, self.height, "target must be at least 1x1")
        return self


# ─────────────────────────────────────────────────────────────
# Observability facts
# ─────────────────────────────────────────────────────────────


class PipelineMetrics(BaseModel):
    """Facts the shell logs for a processed request."""

    path: str
    original_width: int
    original_height: int
    resized_width: int
    resized_height: int
    fetch_ms: float = Field(..., ge=0)
    decode_ms: float = Field(..., ge=0)
    resize_ms: float = Field(..., ge=0)
    encode_ms: float = Field(..., ge=0)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    def log_line(self) -> str:
        return (
            f"Image processed path={self.path} "
            + f"original={self.original_width}x{self.original_height} "
            + f"resized={self.resized_width}x{self.resized_height} "
            + f"fetch={self.fetch_ms:.0f}ms decode={self.decode_ms:.0f}ms "
            + f"resize={self.resize_ms:.0f}ms encode={self.encode_ms:.0f}ms"
        )


# ─────────────────────────────────────────────────────────────
# Outcome
# ─────────────────────────────────────────────────────────────


class Success(BaseModel):
    kind: Literal["success"] = "success"
    body: bytes
    metrics: PipelineMetrics

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)


class FailedOutcome(BaseModel):
    """Facts known when the pipeline stopped early.

    Stages that do not know the request path leave it empty; the pipeline
    fills it in together with the timings measured so far.
    """

    path: str = ""
    detail: str
    fetch_ms: float | None = Field(default=None, ge=0)
    decode_ms: float | None = Field(default=None, ge=0)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    def with_facts(self, path: str, fetch_ms: float, decode_ms: float | None = None) -> Self:
        return self.model_copy(update={"path": path, "fetch_ms": fetch_ms, "decode_ms": decode_ms})

    def log_line(self) -> str:
        line = f"{self.detail} path={self.path}"
        if self.fetch_ms is not None:
            line += f" fetch={self.fetch_ms:.0f}ms"
        if self.decode_ms is not None:
            line += f" decode={self.decode_ms:.0f}ms"
        return line


class SourceNotFound(FailedOutcome):
    kind: Literal["source_not_found"] = "source_not_found"
    detail: str = "Image not found"


class DecodeFailed(FailedOutcome):
    kind: Literal["decode_failed"] = "decode_failed"
    detail: str = "Decode image error"


class ResizeFailed(FailedOutcome):
    kind: Literal["resize_failed"] = "resize_failed"
    detail: str = "Resize image error"


Outcome = Success | SourceNotFound | DecodeFailed | ResizeFailed
