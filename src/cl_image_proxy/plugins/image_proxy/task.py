"""Image proxy pipeline: fetch, decode, plan, resize, encode."""

import asyncio

import httpx

from ...common.config import ProxyConfig
from ...utils.profiling import StageTimer
from .algo.codec import decode_image, encode_jpeg
from .algo.dimension_planner import plan_dimensions
from .algo.resize_engine import resize_image
from .algo.source_resolver import SourceResolver
from .schema import (
    DecodeFailed,
    Outcome,
    PipelineMetrics,
    ResizeFailed,
    ResizeRequest,
    SourceBytes,
    SourceNotFound,
    Success,
)


class ImageProxyTask:
    """
    One-shot resize pipeline shared by all requests.

    Holds only read-only state: the configuration and the resolver (which
    wraps the pooled HTTP client). Every call to ``run`` owns its buffers.
    """

    task_type: str = "image_proxy"

    def __init__(self, config: ProxyConfig, client: httpx.AsyncClient | None = None):
        self.config: ProxyConfig = config
        self.resolver: SourceResolver = SourceResolver(config, client)

    async def run(self, request: ResizeRequest) -> Outcome:
        with StageTimer() as fetch_timer:
            source = await self.resolver.resolve(request.relative_path)

        if isinstance(source, SourceNotFound):
            return source.with_facts(request.relative_path, fetch_timer.elapsed_ms)

        # CPU-bound stages run in a worker thread
        return await asyncio.to_thread(self.process, request, source, fetch_timer.elapsed_ms)

    def process(self, request: ResizeRequest, source: SourceBytes, fetch_ms: float = 0.0) -> Outcome:
        """Run decode -> plan -> resize -> encode on already fetched bytes.

        Raises:
            EncodeInvariantError: If the encoder fails on a valid buffer
        """
        with StageTimer() as decode_timer:
            decoded = decode_image(source.data)
        if isinstance(decoded, DecodeFailed):
            return decoded.with_facts(request.relative_path, fetch_ms, decode_timer.elapsed_ms)

        target = plan_dimensions(
            decoded.width,
            decoded.height,
            request.requested_width,
            request.requested_height,
        )

        with StageTimer() as resize_timer:
            resized = resize_image(decoded, target, self.config.resize_filter)
        if isinstance(resized, ResizeFailed):
            return resized.with_facts(request.relative_path, fetch_ms, decode_timer.elapsed_ms)

        with StageTimer() as encode_timer:
            body = encode_jpeg(resized, self.config.jpeg_quality)

        return Success(
            body=body,
            metrics=PipelineMetrics(
                path=request.relative_path,
                original_width=decoded.width,
                original_height=decoded.height,
                resized_width=resized.width,
                resized_height=resized.height,
                fetch_ms=fetch_ms,
                decode_ms=decode_timer.elapsed_ms,
                resize_ms=resize_timer.elapsed_ms,
                encode_ms=encode_timer.elapsed_ms,
            ),
        )
