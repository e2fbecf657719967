"""Source acquisition: local folder first, then the remote CDN."""

from pathlib import Path

import aiofiles
import httpx
from loguru import logger

from ....common.config import ProxyConfig
from ..schema import SourceBytes, SourceNotFound


def join_remote_url(base: str, relative_path: str) -> str:
    """Join base URL and path with exactly one separating slash."""
    return f"{base.rstrip('/')}/{relative_path.lstrip('/')}"


class SourceResolver:
    """
    Fetch raw image bytes for a relative path.

    The local folder always wins over the remote CDN. Failures from either
    origin are downgraded to a miss; only when every configured origin
    misses does the resolver report ``SourceNotFound``.
    """

    def __init__(self, config: ProxyConfig, client: httpx.AsyncClient | None = None):
        self._local_folder: Path | None = (
            config.local_folder.expanduser().resolve() if config.local_folder else None
        )
        self._remote_cdn: str | None = config.remote_cdn
        self._client: httpx.AsyncClient | None = client

        if self._remote_cdn is not None and self._client is None:
            raise ValueError("An HTTP client is required when remote_cdn is configured")


    @staticmethod
    def _local_path(folder: Path, relative_path: str) -> Path | None:
        """Resolve a path inside the local folder; None on traversal."""
        resolved = (folder / relative_path.lstrip("/")).resolve()
        if folder not in resolved.parents:
            return None
        return resolved

    async def _read_local(self, folder: Path, relative_path: str) -> bytes | None:
        try:
            path = self._local_path(folder, relative_path)
            if path is None:
                logger.warning(f"Rejected path outside local folder: {relative_path!r}")
                return None

            async with aiofiles.open(path, "rb") as f:
                return await f.read()
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            # ValueError: paths the OS cannot represent, e.g. embedded NUL bytes
            logger.error(f"Read local file error path={relative_path!r}: {exc}")
            return None

    async def _fetch_remote(
        self, base: str, client: httpx.AsyncClient, relative_path: str
    ) -> bytes | None:
        try:
            url = join_remote_url(base, relative_path)
            async with client.stream("GET", url) as response:
                if not response.is_success:
                    logger.info(
                        f"Request error path={relative_path!r}: status code {response.status_code}"
                    )
                    return None
                try:
                    return await response.aread()
                except httpx.HTTPError as exc:
                    logger.error(f"Request get bytes error path={relative_path!r}: {exc}")
                    return None
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.info(f"Request error path={relative_path!r}: {exc}")
            return None

    async def resolve(self, relative_path: str) -> SourceBytes | SourceNotFound:
        if self._local_folder is not None:
            data = await self._read_local(self._local_folder, relative_path)
            if data is not None:
                return SourceBytes(relative_path=relative_path, origin="local", data=data)

        if self._remote_cdn is not None and self._client is not None:
            data = await self._fetch_remote(self._remote_cdn, self._client, relative_path)
            if data is not None:
                return SourceBytes(relative_path=relative_path, origin="remote", data=data)

        return SourceNotFound(path=relative_path)
