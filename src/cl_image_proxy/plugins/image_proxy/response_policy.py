"""Map pipeline outcomes to HTTP status, cache directive and body."""

from typing import ClassVar

from fastapi import status
from fastapi.responses import Response
from pydantic import BaseModel, ConfigDict

from .algo.codec import JPEG_MIME_TYPE
from .schema import DecodeFailed, Outcome, ResizeFailed, SourceNotFound, Success

# s-maxage lifetimes in seconds for shared caches in front of the proxy
SUCCESS_MAX_AGE = 30 * 24 * 60 * 60
NOT_FOUND_MAX_AGE = 8 * 60 * 60
DECODE_FAILED_MAX_AGE = 7 * 24 * 60 * 60
RESIZE_FAILED_MAX_AGE = 8 * 60 * 60


def cache_control(max_age: int) -> str:
    return f"public, s-maxage={max_age}"


class ResponsePlan(BaseModel):
    status_code: int
    cache_control: str
    media_type: str
    body: bytes

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    def to_response(self) -> Response:
        return Response(
            content=self.body,
            status_code=self.status_code,
            media_type=self.media_type,
            headers={"Cache-Control": self.cache_control},
        )


def plan_response(outcome: Outcome) -> ResponsePlan:
    """
    Choose status, cache lifetime and body for an outcome.

    Undecodable sources are cached longest: non-image content at a path is
    unlikely to turn into an image, while missing files may appear later.
    """
    match outcome:
        case Success(body=body):
            return ResponsePlan(
                status_code=status.HTTP_200_OK,
                cache_control=cache_control(SUCCESS_MAX_AGE),
                media_type=JPEG_MIME_TYPE,
                body=body,
            )
        case SourceNotFound(detail=detail):
            return ResponsePlan(
                status_code=status.HTTP_404_NOT_FOUND,
                cache_control=cache_control(NOT_FOUND_MAX_AGE),
                media_type="text/plain",
                body=detail.encode(),
            )
        case DecodeFailed(detail=detail):
            return ResponsePlan(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                cache_control=cache_control(DECODE_FAILED_MAX_AGE),
                media_type="text/plain",
                body=detail.encode(),
            )
        case ResizeFailed(detail=detail):
            return ResponsePlan(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                cache_control=cache_control(RESIZE_FAILED_MAX_AGE),
                media_type="text/plain",
                body=detail.encode(),
            )
    raise TypeError(f"Unknown outcome: {outcome!r}")


def build_response(outcome: Outcome) -> Response:
    return plan_response(outcome).to_response()
