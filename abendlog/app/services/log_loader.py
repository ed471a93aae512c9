"""
Log Loader.

Fetches the full abend log list from a GET /logs endpoint and replaces the
store with it. This is the only call in the application that waits on the
network. A failed load leaves the store exactly as it was.
"""
import logging
from typing import List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from abendlog.app.schemas.logs import LogEntry
from abendlog.app.services.log_store import duplicate_ids

logger = logging.getLogger(__name__)

_LOG_LIST = TypeAdapter(List[LogEntry])


class LogLoadError(Exception):
    """Raised when the log endpoint cannot be reached or returns unusable data."""
    pass


class LogLoader:
    """Client for the GET /logs load endpoint."""

    def __init__(
        self,
        source_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.source_url = source_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def fetch(self) -> List[LogEntry]:
        """Request the log list and parse it. String timestamps become datetimes."""
        url = f"{self.source_url}/logs"
        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
                response = await client.get(url)
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Failed to load logs from {url}: {e}", exc_info=True)
            raise LogLoadError(f"Failed to load logs from {url}: {e}") from e
        except ValueError as e:
            logger.error(f"Log endpoint {url} returned invalid JSON: {e}", exc_info=True)
            raise LogLoadError(f"Log endpoint returned invalid JSON: {e}") from e

        try:
            entries = _LOG_LIST.validate_python(payload)
        except ValidationError as e:
            logger.error(
                f"Log endpoint {url} returned malformed logs",
                extra={"extra_data": {"error_count": e.error_count()}},
                exc_info=True,
            )
            raise LogLoadError(f"Log endpoint returned malformed logs ({e.error_count()} errors)") from e

        repeated = duplicate_ids(entries)
        if repeated:
            logger.error(
                f"Log endpoint {url} returned duplicate ids",
                extra={"extra_data": {"duplicate_ids": repeated}},
            )
            raise LogLoadError(f"Log endpoint returned duplicate log ids: {', '.join(repeated)}")

        logger.info(f"Fetched {len(entries)} logs from {url}")
        return entries

    async def load_into(self, store) -> int:
        """Fetch, then replace the store's contents. Returns the number of logs loaded."""
        entries = await self.fetch()
        try:
            store.replace_all(entries)
        except ValueError as e:
            raise LogLoadError(f"Loaded logs rejected by the store: {e}") from e
        return len(entries)
