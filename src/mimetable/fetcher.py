"""Downloads the raw registry file.

The registry URL comes from configuration and is fixed, so redirects are
followed by httpx directly. Every request is bounded by the configured
timeout.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import httpx
import structlog

from mimetable.errors import ErrorCode, MimeTableError

if TYPE_CHECKING:
    from os import PathLike

    from mimetable.config import RegistrySettings

log = structlog.get_logger()


def build_http_client(settings: RegistrySettings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.timeout_seconds),
        follow_redirects=True,
        headers={"User-Agent": "mimetable"},
    )


class RegistryFetcher:
    """Streams a registry file from a URL to local disk."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def download(self, url: str, destination: str | PathLike[str]) -> Path:
        """Write the body at *url* to *destination*.

        The body is written to a temporary file next to *destination* and
        renamed into place only once the transfer has completed.
        """
        destination = Path(destination)
        tmp_name: str | None = None
        try:
            async with self._client.stream("GET", url) as response:
                if response.status_code == 404:
                    raise MimeTableError(
                        ErrorCode.REGISTRY_NOT_FOUND,
                        f"Registry not found at {url}",
                        recoverable=False,
                    )
                if not response.is_success:
                    raise MimeTableError(
                        ErrorCode.REGISTRY_FETCH_FAILED,
                        f"HTTP {response.status_code} fetching registry from {url}",
                        recoverable=True,
                    )
                with tempfile.NamedTemporaryFile(
                    "wb",
                    dir=destination.parent,
                    prefix=f".{destination.name}.",
                    suffix=".tmp",
                    delete=False,
                ) as handle:
                    tmp_name = handle.name
                    async for chunk in response.aiter_bytes():
                        handle.write(chunk)
            os.replace(tmp_name, destination)
        except httpx.HTTPError as exc:
            raise MimeTableError(
                ErrorCode.REGISTRY_FETCH_FAILED,
                f"Network error fetching registry from {url}: {exc}",
                recoverable=True,
            ) from exc
        except OSError as exc:
            raise MimeTableError(
                ErrorCode.REGISTRY_WRITE_FAILED,
                f"Cannot write registry to {destination}: {exc}",
            ) from exc
        finally:
            if tmp_name is not None and Path(tmp_name).exists():
                Path(tmp_name).unlink()

        log.info("registry_downloaded", url=url, path=str(destination))
        return destination
