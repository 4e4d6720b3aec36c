"""Keyword deduplication and ranking across sources."""

import logging
import re
import unicodedata
from typing import Dict, List, Optional, Sequence, Tuple

from .models import (
    DailyTrendRecord,
    KeywordSource,
    RealtimeTrendRecord,
    UnifiedKeyword,
    VideoTrendRecord,
)

logger = logging.getLogger(__name__)

_INVISIBLE = re.compile(r'[\u200b-\u200f\u2028-\u202f\ufeff\u00ad]')

Candidate = Tuple[str, KeywordSource, Optional[str], Optional[str]]


def canonical_key(keyword: str) -> str:
    """
    Comparison key for a keyword.

    Rules:
    - Remove zero-width and invisible Unicode characters
    - Normalize unicode (NFKC form)
    - Case-fold (handles e.g. German sharp s)
    - Collapse whitespace runs and trim
    """
    if not keyword:
        return ""

    keyword = _INVISIBLE.sub("", keyword)
    keyword = unicodedata.normalize("NFKC", keyword)
    keyword = keyword.casefold()
    return " ".join(keyword.split())


def _candidates(
    daily: Sequence[DailyTrendRecord],
    realtime: Sequence[RealtimeTrendRecord],
    youtube: Sequence[VideoTrendRecord],
) -> List[Candidate]:
    """Flatten the three lists in priority order: realtime, daily, youtube."""
    candidates: List[Candidate] = []

    for item in realtime:
        candidates.append((item.keyword, KeywordSource.GOOGLE_REALTIME, item.headline, item.article_url))

    for item in daily:
        candidates.append(
            (item.keyword, KeywordSource.GOOGLE_DAILY, item.snippet or item.traffic_label, item.article_url)
        )

    for item in youtube:
        candidates.append((item.keyword, KeywordSource.YOUTUBE, item.views_label or item.channel, item.video_url))

    return candidates


def normalize(
    daily: Sequence[DailyTrendRecord],
    realtime: Sequence[RealtimeTrendRecord],
    youtube: Sequence[VideoTrendRecord],
    limit: int,
) -> List[UnifiedKeyword]:
    """
    Merge per-source records into one ranked keyword list.

    The first sighting of a canonical key fixes the display keyword,
    details and url. A later sighting from a different source only
    flips the tag to ``multi``. Order is first-seen order.
    """
    if limit <= 0:
        return []

    merged: Dict[str, dict] = {}
    origins: Dict[str, KeywordSource] = {}

    for keyword, source, details, url in _candidates(daily, realtime, youtube):
        key = canonical_key(keyword)
        if not key:
            continue

        entry = merged.get(key)
        if entry is None:
            merged[key] = {"keyword": keyword, "source": source, "details": details, "url": url}
            origins[key] = source
        elif source != origins[key]:
            entry["source"] = KeywordSource.MULTI

    keywords = [UnifiedKeyword(**entry) for entry in merged.values()][:limit]
    logger.debug(f"Normalized {len(merged)} unique keywords, kept {len(keywords)}")
    return keywords
