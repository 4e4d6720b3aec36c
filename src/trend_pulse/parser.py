"""Parsers for the upstream trend feeds.

Each parser takes the raw response body and returns normalized records.
Structural problems with the payload as a whole raise ``ValueError``;
individual entries missing their mandatory fields are dropped.
"""

import html
import json
import logging
import re
from typing import Any, Iterator, List, Optional

from pydantic import ValidationError

from .models import DailyTrendRecord, RealtimeTrendRecord, VideoTrendRecord

logger = logging.getLogger(__name__)

XSSI_PREFIX = ")]}'"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

_YT_INITIAL_DATA = re.compile(r'(?:var\s+ytInitialData|window\["ytInitialData"\])\s*=\s*')
_VIDEO_RENDERER_KEYS = ("videoRenderer", "gridVideoRenderer")


def clean_text(value: Any) -> Optional[str]:
    """Unescape and trim a text field; anything empty or non-string becomes None."""
    if not isinstance(value, str):
        return None
    value = " ".join(html.unescape(value).split())
    return value or None


def load_guarded_json(raw_response: str) -> dict:
    """
    Decode a Google Trends JSON body.

    Google prefixes these responses with )]}' (optionally followed by a
    comma) to defeat JSON hijacking; the prefix is removed before decoding.
    """
    cleaned = raw_response.lstrip()
    if cleaned.startswith(XSSI_PREFIX):
        cleaned = cleaned[len(XSSI_PREFIX):].lstrip().lstrip(",")

    data = json.loads(cleaned)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


def _first_dict(items: Any) -> dict:
    if isinstance(items, list):
        for item in items:
            if isinstance(item, dict):
                return item
    return {}


def _required_list(data: dict, *path: str) -> list:
    node: Any = data
    for key in path:
        if not isinstance(node, dict) or key not in node:
            raise ValueError(f"payload is missing {'.'.join(path)}")
        node = node[key]
    if not isinstance(node, list):
        raise ValueError(f"{'.'.join(path)} is not a list")
    return node


def parse_daily_trends(raw_response: str) -> List[DailyTrendRecord]:
    """Parse a dailytrends response into records, newest day first."""
    data = load_guarded_json(raw_response)
    days = _required_list(data, "default", "trendingSearchesDays")

    records = []
    for day in days:
        searches = day.get("trendingSearches") if isinstance(day, dict) else None
        if not isinstance(searches, list):
            continue

        for search in searches:
            if not isinstance(search, dict):
                continue

            title = search.get("title")
            keyword = clean_text(title.get("query") if isinstance(title, dict) else title)
            if not keyword:
                logger.debug("Dropping daily trend without a query")
                continue

            article = _first_dict(search.get("articles"))
            try:
                record = DailyTrendRecord(
                    keyword=keyword,
                    traffic_label=clean_text(search.get("formattedTraffic")),
                    snippet=clean_text(article.get("snippet")),
                    article_url=clean_text(article.get("url")),
                )
            except ValidationError as e:
                logger.debug(f"Dropping malformed daily trend {keyword!r}: {e}")
                continue
            records.append(record)

    return records


def parse_realtime_trends(raw_response: str) -> List[RealtimeTrendRecord]:
    """Parse a realtimetrends response into records in story order."""
    data = load_guarded_json(raw_response)
    stories = _required_list(data, "storySummaries", "trendingStories")

    records = []
    for story in stories:
        if not isinstance(story, dict):
            continue

        title = clean_text(story.get("title"))
        entities = story.get("entityNames")
        entity = clean_text(entities[0]) if isinstance(entities, list) and entities else None
        keyword = entity or title
        if not keyword:
            logger.debug("Dropping realtime story without entity or title")
            continue

        article = _first_dict(story.get("articles"))
        headline = clean_text(article.get("articleTitle"))
        if not headline and title and title != keyword:
            headline = title

        try:
            record = RealtimeTrendRecord(
                keyword=keyword,
                headline=headline,
                source=clean_text(article.get("source")),
                article_url=clean_text(article.get("url")) or clean_text(story.get("shareUrl")),
            )
        except ValidationError as e:
            logger.debug(f"Dropping malformed realtime story {keyword!r}: {e}")
            continue
        records.append(record)

    return records


def extract_initial_data(page_html: str) -> dict:
    """Pull the ytInitialData object embedded in a YouTube page."""
    match = _YT_INITIAL_DATA.search(page_html)
    if not match:
        raise ValueError("ytInitialData not found in page")

    data, _ = json.JSONDecoder().raw_decode(page_html, match.end())
    if not isinstance(data, dict):
        raise ValueError("ytInitialData is not an object")
    return data


def _iter_video_renderers(node: Any) -> Iterator[dict]:
    """Yield every video renderer in document order."""
    if isinstance(node, dict):
        for key, value in node.items():
            if key in _VIDEO_RENDERER_KEYS and isinstance(value, dict):
                yield value
            else:
                yield from _iter_video_renderers(value)
    elif isinstance(node, list):
        for item in node:
            yield from _iter_video_renderers(item)


def _runs_text(node: Any) -> Optional[str]:
    # YouTube text is either {"simpleText": ...} or {"runs": [{"text": ...}, ...]}
    if not isinstance(node, dict):
        return None
    if "simpleText" in node:
        return clean_text(node["simpleText"])
    runs = node.get("runs")
    if isinstance(runs, list):
        return clean_text("".join(r.get("text", "") for r in runs if isinstance(r, dict)))
    return None


def parse_youtube_trending(page_html: str) -> List[VideoTrendRecord]:
    """Parse the YouTube trending page into video records."""
    data = extract_initial_data(page_html)

    records = []
    seen_ids = set()
    for renderer in _iter_video_renderers(data):
        video_id = clean_text(renderer.get("videoId"))
        title = _runs_text(renderer.get("title"))
        if not video_id or not title:
            logger.debug("Dropping video without id or title")
            continue
        if video_id in seen_ids:
            continue
        seen_ids.add(video_id)

        try:
            record = VideoTrendRecord(
                keyword=title,
                channel=_runs_text(renderer.get("ownerText")) or _runs_text(renderer.get("longBylineText")),
                views_label=_runs_text(renderer.get("shortViewCountText"))
                or _runs_text(renderer.get("viewCountText")),
                video_url=YOUTUBE_WATCH_URL.format(video_id=video_id),
            )
        except ValidationError as e:
            logger.debug(f"Dropping malformed video {video_id}: {e}")
            continue
        records.append(record)

    return records
