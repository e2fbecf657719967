"""Static service configuration shared by every request."""

from enum import StrEnum
from pathlib import Path
from typing import ClassVar

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class ResizeFilter(StrEnum):
    NEAREST = "nearest"
    BOX = "box"
    BILINEAR = "bilinear"
    HAMMING = "hamming"
    BICUBIC = "bicubic"
    LANCZOS = "lanczos"

    def to_pil(self) -> Image.Resampling:
        return Image.Resampling[self.name]


class ProxyConfig(BaseModel):
    """Origins and service-wide settings.

    Built once at startup and captured by the pipeline; never mutated.

    Attributes:
        local_folder: Directory searched first for the requested path
        remote_cdn: Base URL fetched when the local lookup misses
        resize_filter: Resampling kernel used for every request
        jpeg_quality: Encoder quality (None = Pillow default)
        allowed_origin_suffix: CORS origins must end with this suffix
        request_timeout: Seconds before a request is abandoned
        connect_timeout: Seconds allowed to connect to the remote origin
    """

    local_folder: Path | None = None
    remote_cdn: str | None = None
    resize_filter: ResizeFilter = ResizeFilter.LANCZOS
    jpeg_quality: int | None = Field(default=None, ge=1, le=95)
    allowed_origin_suffix: str = ".remtori.com"
    request_timeout: float = Field(default=30.0, gt=0)
    connect_timeout: float = Field(default=1.0, gt=0)

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    @field_validator("remote_cdn")
    @classmethod
    def validate_remote_cdn(cls, v: str | None) -> str | None:
        if v is None:
            return v
        if not v.startswith(("http://", "https://")):
            raise ValueError("remote_cdn must be an http(s) URL")
        return v

    @model_validator(mode="after")
    def validate_origin_present(self) -> "ProxyConfig":
        if self.local_folder is None and self.remote_cdn is None:
            raise ValueError("Either 'remote_cdn' or 'local_folder' is required")
        return self
