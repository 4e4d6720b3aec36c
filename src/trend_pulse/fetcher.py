"""Source adapters for the upstream trend feeds.

Each adapter issues exactly one GET per ``fetch`` call, parses the body
with the matching parser and truncates to the requested limit. Every
failure surfaces as an ``AdapterError`` subclass; nothing is retried.
"""

import logging
from typing import Callable, Dict, Generic, List, Optional, TypeVar

import httpx

from .config import Settings, settings as default_settings
from .errors import SchemaError, TransportError, UpstreamError
from .models import KeywordSource
from .parser import parse_daily_trends, parse_realtime_trends, parse_youtube_trending

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")


class TrendAdapter(Generic[RecordT]):
    """Fetches one upstream feed and parses it into records."""

    source: KeywordSource
    parse: Callable[[str], List[RecordT]]

    def __init__(self, config: Optional[Settings] = None, client: Optional[httpx.AsyncClient] = None):
        self.config = config or default_settings
        # An injected client is shared and owned by the caller
        self._client = client

    @property
    def name(self) -> str:
        return self.source.value

    def build_url(self) -> str:
        raise NotImplementedError

    def build_params(self, geo: str) -> Dict[str, str]:
        raise NotImplementedError

    def _headers(self) -> Dict[str, str]:
        return {
            "User-Agent": self.config.user_agent,
            "Accept-Language": self.config.accept_language,
        }

    async def _get(self, geo: str) -> str:
        """Perform the single outbound request and return the body text."""
        url = self.build_url()
        params = self.build_params(geo)

        try:
            if self._client is not None:
                response = await self._client.get(url, params=params, headers=self._headers())
            else:
                async with httpx.AsyncClient(
                    timeout=self.config.request_timeout, follow_redirects=True
                ) as client:
                    response = await client.get(url, params=params, headers=self._headers())
        except httpx.TimeoutException as e:
            raise TransportError(self.name, f"timed out after {self.config.request_timeout}s") from e
        except httpx.RequestError as e:
            # transport failures, redirect loops and broken content-encoding
            raise TransportError(self.name, f"request failed: {e}") from e

        if not response.is_success:
            raise UpstreamError(
                self.name,
                f"HTTP {response.status_code} from {response.url}",
                status_code=response.status_code,
            )

        return response.text

    async def fetch(self, geo: str, limit: int) -> List[RecordT]:
        """Fetch up to ``limit`` records for ``geo``, preserving upstream order."""
        body = await self._get(geo)

        try:
            records = self.parse(body)
        except (ValueError, KeyError, TypeError) as e:
            raise SchemaError(self.name, f"unparseable payload: {e}") from e

        records = records[: max(limit, 0)]
        logger.info(f"Fetched {len(records)} {self.name} records for {geo}")
        return records


class DailyTrendAdapter(TrendAdapter):
    """Google daily trending searches."""

    source = KeywordSource.GOOGLE_DAILY
    parse = staticmethod(parse_daily_trends)

    def build_url(self) -> str:
        return self.config.daily_trends_url

    def build_params(self, geo: str) -> Dict[str, str]:
        return {
            "hl": self.config.language,
            "tz": str(self.config.timezone_offset),
            "geo": geo,
            "ns": "15",
        }


class RealtimeTrendAdapter(TrendAdapter):
    """Google realtime trending stories."""

    source = KeywordSource.GOOGLE_REALTIME
    parse = staticmethod(parse_realtime_trends)

    def build_url(self) -> str:
        return self.config.realtime_trends_url

    def build_params(self, geo: str) -> Dict[str, str]:
        return {
            "hl": self.config.language,
            "tz": str(self.config.timezone_offset),
            "cat": "all",
            "fi": "0",
            "fs": "0",
            "geo": geo,
            "ri": "300",
            "rs": "20",
            "sort": "0",
        }


class VideoTrendAdapter(TrendAdapter):
    """YouTube trending videos, scraped from the trending page."""

    source = KeywordSource.YOUTUBE
    parse = staticmethod(parse_youtube_trending)

    def build_url(self) -> str:
        return self.config.youtube_trending_url

    def build_params(self, geo: str) -> Dict[str, str]:
        return {"gl": geo, "hl": self.config.language.split("-")[0]}
