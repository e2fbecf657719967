"""Image proxy route factory."""

from typing import Annotated

from fastapi import APIRouter, Path, Query
from fastapi.responses import Response
from loguru import logger

from .response_policy import build_response
from .schema import DecodeFailed, ResizeFailed, ResizeRequest, SourceNotFound, Success
from .task import ImageProxyTask


def resolve_alias(long_value: int | None, short_value: int | None) -> int | None:
    """The long parameter name wins when both aliases are supplied."""
    return long_value if long_value is not None else short_value


def create_router(task: ImageProxyTask) -> APIRouter:
    """Create router serving resized images for any path.

    Args:
        task: Pipeline instance shared by every request

    Returns:
        Configured APIRouter with a single catch-all GET endpoint
    """
    router = APIRouter()

    @router.get("/{path:path}", response_class=Response)
    async def get_resized_image(
        path: Annotated[str, Path(description="Image path relative to the configured origins")],
        width: Annotated[int | None, Query(gt=0, description="Target width in pixels")] = None,
        w: Annotated[int | None, Query(gt=0, description="Alias of width")] = None,
        height: Annotated[int | None, Query(gt=0, description="Target height in pixels")] = None,
        h: Annotated[int | None, Query(gt=0, description="Alias of height")] = None,
    ) -> Response:
        """Fetch the image at ``path``, resize it and return a JPEG.

        Without width/height the image is scaled to a quarter of its size.
        With one of them the other follows the source aspect ratio.
        """
        request = ResizeRequest(
            relative_path=path or "/",
            requested_width=resolve_alias(width, w),
            requested_height=resolve_alias(height, h),
        )

        outcome = await task.run(request)

        match outcome:
            case Success(metrics=metrics):
                logger.info(metrics.log_line())
            case SourceNotFound():
                logger.info(outcome.log_line())
            case DecodeFailed() | ResizeFailed():
                logger.error(outcome.log_line())

        return build_response(outcome)

    # Mark function as used (accessed via FastAPI decorator)
    _ = get_resized_image

    return router
