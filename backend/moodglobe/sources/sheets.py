"""
Spreadsheet CSV export fetcher.
"""
from __future__ import annotations

import logging
from typing import Optional

import httpx

from moodglobe.config import SHEET_CSV_URL
from moodglobe.errors import SourceUnavailable
from moodglobe.sources.common import build_client

logger = logging.getLogger(__name__)


class SheetsFetcher:
    """Downloads the raw CSV export of the submissions sheet."""

    SOURCE_NAME = "sheet"

    def __init__(
        self,
        url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url or SHEET_CSV_URL
        self._transport = transport

    async def fetch(self) -> bytes:
        """
        Fetch the current sheet contents.

        Returns:
            Raw response body; decoding is left to the pipeline

        Raises:
            SourceUnavailable: on transport errors or a non-2xx response
        """
        try:
            async with build_client(self._transport) as client:
                response = await client.get(self.url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("Sheet export returned HTTP %s", e.response.status_code)
            raise SourceUnavailable(self.SOURCE_NAME, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.warning("Error fetching sheet export: %s", e)
            raise SourceUnavailable(self.SOURCE_NAME, str(e) or type(e).__name__) from e

        logger.info("Fetched sheet export (%d bytes)", len(response.content))
        return response.content
