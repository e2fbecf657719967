"""FastAPI application factory for the image proxy."""

import asyncio
import re
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from loguru import logger

from . import __version__
from .common.config import ProxyConfig
from .plugins.image_proxy.routes import create_router
from .plugins.image_proxy.task import ImageProxyTask


def create_http_client(config: ProxyConfig) -> httpx.AsyncClient:
    """Pooled outbound client shared by all requests."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.request_timeout, connect=config.connect_timeout),
        follow_redirects=True,
    )


def origin_regex(suffix: str) -> str:
    return r"https?://.+" + re.escape(suffix)


def create_app(config: ProxyConfig, client: httpx.AsyncClient | None = None) -> FastAPI:
    """Build the proxy application.

    Args:
        config: Origins and service settings
        client: Optional HTTP client (tests inject one with a mock transport).
                When omitted, one is created and closed with the app.

    Returns:
        FastAPI app serving ``GET /{path}`` resized images
    """
    owns_client = client is None and config.remote_cdn is not None
    if owns_client:
        client = create_http_client(config)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        logger.info("Running image resize server with:")
        if config.local_folder is not None:
            logger.info(f"\tlocal folder: {config.local_folder}")
        if config.remote_cdn is not None:
            logger.info(f"\tremote cdn: {config.remote_cdn}")
        try:
            yield
        finally:
            if owns_client and client is not None:
                await client.aclose()

    app = FastAPI(title="cl_image_proxy", version=__version__, lifespan=lifespan)
    app.state.config = config

    @app.middleware("http")
    async def enforce_timeout(request: Request, call_next) -> Response:
        try:
            return await asyncio.wait_for(call_next(request), timeout=config.request_timeout)
        except TimeoutError:
            logger.warning(f"Unhandled error: request timed out path={request.url.path}")
            return Response(status_code=status.HTTP_404_NOT_FOUND)

    app.add_middleware(
        CORSMiddleware,
        allow_origin_regex=origin_regex(config.allowed_origin_suffix),
        allow_methods=["GET"],
    )

    task = ImageProxyTask(config, client)
    app.include_router(create_router(task))

    return app
