"""Shared upstream payload fixtures."""

import json

import pytest


DAILY_PAYLOAD = {
    "default": {
        "trendingSearchesDays": [
            {
                "date": "20261019",
                "trendingSearches": [
                    {
                        "title": {"query": "Eclipse"},
                        "formattedTraffic": "500K+",
                        "articles": [
                            {
                                "title": "Where to watch",
                                "url": "https://news.example.com/eclipse",
                                "snippet": "Millions look up &amp; watch",
                            }
                        ],
                    },
                    {"title": {"query": "  Super   Bowl "}, "formattedTraffic": "2M+", "articles": []},
                    {"title": {"query": ""}, "formattedTraffic": "10K+"},
                    {"formattedTraffic": "5K+"},
                ],
            }
        ]
    }
}

REALTIME_PAYLOAD = {
    "storySummaries": {
        "trendingStories": [
            {
                "title": "Solar eclipse, NASA",
                "entityNames": ["Eclipse", "NASA"],
                "articles": [
                    {
                        "articleTitle": "Eclipse crosses the country",
                        "url": "https://wire.example.com/eclipse",
                        "source": "AP",
                    }
                ],
                "shareUrl": "https://trends.google.com/s/1",
            },
            {
                "title": "Election results",
                "entityNames": [],
                "articles": [],
                "shareUrl": "https://trends.google.com/s/2",
            },
            {"entityNames": [""], "articles": []},
        ]
    }
}

YOUTUBE_DATA = {
    "contents": {
        "twoColumnBrowseResultsRenderer": {
            "items": [
                {
                    "videoRenderer": {
                        "videoId": "abc123",
                        "title": {"runs": [{"text": "Eclipse "}, {"text": "live"}]},
                        "ownerText": {"runs": [{"text": "NASA"}]},
                        "viewCountText": {"simpleText": "1,234 views"},
                        "shortViewCountText": {"simpleText": "1.2K views"},
                    }
                },
                {"videoRenderer": {"title": {"runs": [{"text": "No watch url"}]}}},
                {"videoRenderer": {"videoId": "abc123", "title": {"simpleText": "Repeated shelf"}}},
                {
                    "gridVideoRenderer": {
                        "videoId": "def456",
                        "title": {"simpleText": "Top goals"},
                        "longBylineText": {"runs": [{"text": "Sports"}]},
                    }
                },
            ]
        }
    }
}


def guarded(payload: dict) -> str:
    return ")]}',\n" + json.dumps(payload)


@pytest.fixture
def daily_body() -> str:
    return guarded(DAILY_PAYLOAD)


@pytest.fixture
def realtime_body() -> str:
    return guarded(REALTIME_PAYLOAD)


@pytest.fixture
def youtube_body() -> str:
    return (
        "<html><head></head><body><script nonce=\"x\">var ytInitialData = "
        + json.dumps(YOUTUBE_DATA)
        + ";</script></body></html>"
    )
