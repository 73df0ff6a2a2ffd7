"""
Tests for the recorder write paths and the asyncio sampling loop
"""
import asyncio
import json
import httpx
import pytest

from lionscout.models import VideoView
from lionscout.schemas.video_analytics import VideoViewCreate, VideoViewUpdate
from lionscout.telemetry.scheduler import AsyncioSamplingScheduler
from lionscout.telemetry.writers import HttpViewWriter, StoreViewWriter


def mock_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestHttpViewWriter:
    @pytest.mark.asyncio
    async def test_posts_actions(self):
        seen = []

        def handler(request: httpx.Request):
            payload = json.loads(request.content)
            seen.append((request.url.path, payload))
            if payload["action"] == "record_view":
                return httpx.Response(200, json={"view": {"id": 7}})
            return httpx.Response(200, json={"success": True})

        async with mock_client(handler) as client:
            writer = HttpViewWriter("http://scouting.test/", client=client)
            view_id = await writer.record_view(VideoViewCreate(
                player_id="p-mbarga", session_id="s-1", total_duration_seconds=60
            ))
            updated = await writer.update_view(VideoViewUpdate(
                player_id="p-mbarga", session_id="s-1", watch_duration_seconds=12, total_duration_seconds=60
            ))

        assert view_id == "7"
        assert updated is True
        assert [path for path, _ in seen] == ["/api/video-analytics", "/api/video-analytics"]
        assert seen[0][1]["session_id"] == "s-1"
        assert seen[1][1]["watch_duration_seconds"] == 12

    @pytest.mark.asyncio
    async def test_server_error_is_not_raised(self):
        async with mock_client(lambda request: httpx.Response(500, json={"detail": "boom"})) as client:
            writer = HttpViewWriter("http://scouting.test", client=client)

            assert await writer.record_view(VideoViewCreate(player_id="p", session_id="s")) is None
            assert await writer.update_view(VideoViewUpdate(player_id="p", session_id="s")) is False

    @pytest.mark.asyncio
    async def test_network_error_is_not_raised(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with mock_client(handler) as client:
            writer = HttpViewWriter("http://scouting.test", client=client)

            assert await writer.record_view(VideoViewCreate(player_id="p", session_id="s")) is None

    @pytest.mark.asyncio
    async def test_unmatched_update(self):
        async with mock_client(lambda request: httpx.Response(200, json={"success": False})) as client:
            writer = HttpViewWriter("http://scouting.test", client=client)

            assert await writer.update_view(VideoViewUpdate(player_id="p", session_id="s")) is False


class TestStoreViewWriter:
    @pytest.mark.asyncio
    async def test_record_then_update(self, session_factory, players, db):
        writer = StoreViewWriter(session_factory)

        view_id = await writer.record_view(VideoViewCreate(player_id="p-fotso", session_id="s-1"))
        updated = await writer.update_view(VideoViewUpdate(
            player_id="p-fotso", session_id="s-1", watch_duration_seconds=33, total_duration_seconds=80
        ))

        assert view_id is not None
        assert updated is True
        event = db.query(VideoView).filter(VideoView.id == int(view_id)).one()
        assert event.watch_duration_seconds == 33

    @pytest.mark.asyncio
    async def test_update_before_record(self, session_factory, players):
        writer = StoreViewWriter(session_factory)

        assert await writer.update_view(VideoViewUpdate(player_id="p-fotso", session_id="nope")) is False


class TestAsyncioSamplingScheduler:
    @pytest.mark.asyncio
    async def test_repeats_until_cancelled(self):
        ticks = []
        handle = AsyncioSamplingScheduler().start(0.01, lambda: ticks.append(1))

        await asyncio.sleep(0.08)
        handle.cancel()
        count = len(ticks)
        await asyncio.sleep(0.05)

        assert count >= 2
        assert len(ticks) == count
        assert handle.cancelled

    @pytest.mark.asyncio
    async def test_callback_errors_do_not_stop_loop(self):
        ticks = []

        def callback():
            ticks.append(1)
            raise RuntimeError("sample failed")

        handle = AsyncioSamplingScheduler().start(0.01, callback)
        await asyncio.sleep(0.06)
        handle.cancel()

        assert len(ticks) >= 2
