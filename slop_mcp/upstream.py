"""Gateway to the OpenAPI search service.

This module provides the UpstreamGateway class which performs the overview
and operation-summary requests against oapis.org and returns the body as
text, pretty-printed when JSON was requested.
"""

import asyncio
import json
import logging

import aiohttp
from yarl import URL

from .config import ServerConfig
from .errors import MalformedResponseError, TransportError, UpstreamError
from .models import ResponseFormat


class UpstreamGateway:
    """Fetches OpenAPI overviews and operation summaries

    Path segments are inserted verbatim; identifiers are expected to be
    formatted already (see ``format_api_id``).

    Args:
        config: Server configuration (base URL, timeout, attempts)
    """

    def __init__(self, config: ServerConfig):
        self.config = config
        self.base_url = config.base_url.rstrip("/")

    def overview_url(self, formatted_id: str) -> str:
        return f"{self.base_url}/overview/{formatted_id}"

    def operation_url(self, formatted_id: str, operation_id_or_route: str) -> str:
        return f"{self.base_url}/summary/{formatted_id}/{operation_id_or_route}"

    async def fetch_overview(self, formatted_id: str, fmt: ResponseFormat = ResponseFormat.JSON) -> str:
        """Fetch the overview of an OpenAPI specification

        Raises:
            UpstreamError: Upstream answered with a non-2xx status
            TransportError: Upstream could not be reached
            MalformedResponseError: JSON was requested but the body is not JSON
        """
        return await self._fetch(self.overview_url(formatted_id), fmt)

    async def fetch_operation(
        self,
        formatted_id: str,
        operation_id_or_route: str,
        fmt: ResponseFormat = ResponseFormat.JSON,
    ) -> str:
        """Fetch the summary of a single operation

        Raises:
            UpstreamError: Upstream answered with a non-2xx status
            TransportError: Upstream could not be reached
            MalformedResponseError: JSON was requested but the body is not JSON
        """
        return await self._fetch(self.operation_url(formatted_id, operation_id_or_route), fmt)

    async def _fetch(self, url: str, fmt: ResponseFormat) -> str:
        attempts = self.config.max_attempts
        for attempt in range(1, attempts + 1):
            try:
                return await self._get(url, fmt)
            except TransportError as e:
                if attempt >= attempts:
                    raise
                logging.warning(f"[Upstream] Attempt {attempt}/{attempts} for {url} failed: {e}")

    async def _get(self, url: str, fmt: ResponseFormat) -> str:
        headers = {"Accept": fmt.accept_header}
        timeout = aiohttp.ClientTimeout(total=self.config.request_timeout)
        logging.debug(f"[Upstream] GET {url} (Accept: {headers['Accept']})")

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(URL(url, encoded=True), headers=headers) as response:
                    body = await response.text(errors="replace")
                    status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            message = str(e) or f"{type(e).__name__} while requesting {url}"
            logging.debug(f"[Upstream] Request to {url} failed: {message}")
            raise TransportError(message, cause=e) from e

        if not 200 <= status < 300:
            logging.debug(f"[Upstream] {url} returned {status}")
            raise UpstreamError(body, status=status)

        if fmt is ResponseFormat.YAML:
            return body
        return self._reformat_json(body, url)

    @staticmethod
    def _reformat_json(body: str, url: str) -> str:
        try:
            data = json.loads(body)
        except ValueError as e:
            raise MalformedResponseError(f"Invalid JSON from {url}: {e}", cause=e) from e
        return json.dumps(data, indent=2, ensure_ascii=False)


__all__ = [
    "UpstreamGateway",
]
