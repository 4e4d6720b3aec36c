"""Tests for the source adapters against a mocked transport."""

import asyncio

import httpx
import pytest

from trend_pulse.assembler import SnapshotAssembler
from trend_pulse.config import SnapshotDefaults
from trend_pulse.errors import SchemaError, TransportError, UpstreamError
from trend_pulse.fetcher import DailyTrendAdapter, RealtimeTrendAdapter, VideoTrendAdapter


def run_adapter(adapter_cls, handler, geo="US", limit=10, follow_redirects=False):
    """Fetch through ``adapter_cls`` with every request answered by ``handler``."""

    async def go():
        transport = httpx.MockTransport(handler)
        async with httpx.AsyncClient(transport=transport, follow_redirects=follow_redirects) as client:
            return await adapter_cls(client=client).fetch(geo, limit)

    return asyncio.run(go())


def test_daily_adapter_passes_geo_through(daily_body):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, text=daily_body)

    records = run_adapter(DailyTrendAdapter, handler, geo="gb")

    assert [r.keyword for r in records] == ["Eclipse", "Super Bowl"]
    assert len(seen) == 1
    assert seen[0].url.path == "/trends/api/dailytrends"
    assert seen[0].url.params["geo"] == "gb"
    assert "Mozilla" in seen[0].headers["user-agent"]


def test_realtime_adapter_truncates_in_upstream_order(realtime_body):
    records = run_adapter(RealtimeTrendAdapter, lambda r: httpx.Response(200, text=realtime_body), limit=1)

    assert [r.keyword for r in records] == ["Eclipse"]


def test_video_adapter(youtube_body):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, text=youtube_body)

    records = run_adapter(VideoTrendAdapter, handler, geo="JP")

    assert seen[0].url.params["gl"] == "JP"
    assert [r.video_url for r in records] == [
        "https://www.youtube.com/watch?v=abc123",
        "https://www.youtube.com/watch?v=def456",
    ]


def test_zero_limit_returns_nothing(daily_body):
    assert run_adapter(DailyTrendAdapter, lambda r: httpx.Response(200, text=daily_body), limit=0) == []


def test_non_success_status_is_upstream_error():
    with pytest.raises(UpstreamError) as exc_info:
        run_adapter(DailyTrendAdapter, lambda r: httpx.Response(429, text="slow down"))

    assert exc_info.value.status_code == 429
    assert exc_info.value.source == "google-daily"


def test_connect_failure_is_transport_error():
    def handler(request):
        raise httpx.ConnectError("name resolution failed", request=request)

    with pytest.raises(TransportError):
        run_adapter(RealtimeTrendAdapter, handler)


def test_timeout_is_transport_error():
    def handler(request):
        raise httpx.ReadTimeout("upstream too slow", request=request)

    with pytest.raises(TransportError):
        run_adapter(VideoTrendAdapter, handler)


@pytest.mark.parametrize(
    "adapter_cls, body",
    [
        (DailyTrendAdapter, "<html>not json</html>"),
        (DailyTrendAdapter, ")]}',\n{\"default\": {\"trendingSearchesDays\": 3}}"),
        (RealtimeTrendAdapter, ")]}',\n{}"),
        (VideoTrendAdapter, "<html>no initial data</html>"),
    ],
)
def test_unparseable_payload_is_schema_error(adapter_cls, body):
    with pytest.raises(SchemaError):
        run_adapter(adapter_cls, lambda r: httpx.Response(200, text=body))


def redirect_loop(request):
    return httpx.Response(302, headers={"Location": str(request.url)})


def bad_gzip(request):
    return httpx.Response(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip")


def test_redirect_loop_is_transport_error():
    with pytest.raises(TransportError):
        run_adapter(DailyTrendAdapter, redirect_loop, follow_redirects=True)


def test_broken_content_encoding_is_transport_error():
    with pytest.raises(TransportError):
        run_adapter(RealtimeTrendAdapter, bad_gzip)


def test_collect_survives_redirect_loop_and_bad_encoding(daily_body):
    def handler(request):
        if request.url.path.endswith("/dailytrends"):
            return httpx.Response(200, text=daily_body)
        if request.url.path.endswith("/realtimetrends"):
            return bad_gzip(request)
        return redirect_loop(request)

    async def go():
        transport = httpx.MockTransport(handler)
        async with httpx.AsyncClient(transport=transport, follow_redirects=True) as client:
            assembler = SnapshotAssembler(
                SnapshotDefaults(),
                daily=DailyTrendAdapter(client=client),
                realtime=RealtimeTrendAdapter(client=client),
                youtube=VideoTrendAdapter(client=client),
            )
            return await assembler.collect(geo="US", limit=5)

    snapshot = asyncio.run(go())

    assert [r.keyword for r in snapshot.google_daily] == ["Eclipse", "Super Bowl"]
    assert snapshot.google_realtime == []
    assert snapshot.youtube == []
    assert [k.source.value for k in snapshot.keywords] == ["google-daily", "google-daily"]
