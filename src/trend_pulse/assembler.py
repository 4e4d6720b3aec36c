"""Snapshot assembly - concurrent fan-out to the adapters and merge."""

import asyncio
import logging
from datetime import datetime, timezone
from typing import List, Optional

from .config import SnapshotDefaults, settings
from .errors import AdapterError
from .fetcher import DailyTrendAdapter, RealtimeTrendAdapter, TrendAdapter, VideoTrendAdapter
from .models import TrendSnapshot
from .normalizer import normalize

logger = logging.getLogger(__name__)


class SnapshotAssembler:
    """Builds one TrendSnapshot per ``collect`` call."""

    def __init__(
        self,
        defaults: Optional[SnapshotDefaults] = None,
        daily: Optional[TrendAdapter] = None,
        realtime: Optional[TrendAdapter] = None,
        youtube: Optional[TrendAdapter] = None,
    ):
        self.defaults = defaults or SnapshotDefaults()
        self.daily = daily or DailyTrendAdapter()
        self.realtime = realtime or RealtimeTrendAdapter()
        self.youtube = youtube or VideoTrendAdapter()

    def resolve_geo(self, geo: Optional[str]) -> str:
        geo = (geo or "").strip().upper()
        return geo or self.defaults.geo

    def resolve_limit(self, limit: Optional[int]) -> int:
        """Apply the default depth and clamp to [0, max_limit]."""
        if limit is None:
            limit = self.defaults.limit
        return max(0, min(limit, self.defaults.max_limit))

    async def _settle(self, name: str, adapter: TrendAdapter, geo: str, limit: int) -> List:
        """Run one adapter; an adapter failure becomes an empty list."""
        try:
            records = await adapter.fetch(geo, limit)
        except AdapterError as e:
            logger.warning(f"Source {name} failed for {geo}: {e}")
            return []
        return list(records)[:limit]

    async def collect(self, geo: Optional[str] = None, limit: Optional[int] = None) -> TrendSnapshot:
        """
        Fetch all sources concurrently and assemble a snapshot.

        Adapter failures never reject this call; only errors raised by the
        orchestration itself propagate.
        """
        geo = self.resolve_geo(geo)
        limit = self.resolve_limit(limit)

        tasks = [
            asyncio.ensure_future(self._settle("google-daily", self.daily, geo, limit)),
            asyncio.ensure_future(self._settle("google-realtime", self.realtime, geo, limit)),
            asyncio.ensure_future(self._settle("youtube", self.youtube, geo, limit)),
        ]
        try:
            daily, realtime, youtube = await asyncio.gather(*tasks)
        finally:
            # An orchestration error must not leave sibling fetches running
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        keywords = normalize(daily, realtime, youtube, limit)

        snapshot = TrendSnapshot(
            generated_at=datetime.now(timezone.utc).isoformat(),
            keywords=keywords,
            google_daily=daily,
            google_realtime=realtime,
            youtube=youtube,
        )
        logger.info(
            f"Snapshot for {geo} (limit {limit}): {len(keywords)} keywords, "
            f"{len(daily)} daily, {len(realtime)} realtime, {len(youtube)} youtube"
        )
        return snapshot


# Global assembler instance for reuse
_assembler: Optional[SnapshotAssembler] = None


def get_assembler() -> SnapshotAssembler:
    """Get or create the global assembler built from settings."""
    global _assembler
    if _assembler is None:
        _assembler = SnapshotAssembler(settings.snapshot_defaults)
    return _assembler


async def collect_trend_snapshot(geo: Optional[str] = None, limit: Optional[int] = None) -> TrendSnapshot:
    """Collect a snapshot with the global assembler."""
    return await get_assembler().collect(geo=geo, limit=limit)
