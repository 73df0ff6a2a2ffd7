"""
Write paths from the view recorder to the analytics store
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

import httpx
from sqlalchemy.orm import Session

from ..core.database import SessionLocal
from ..schemas.video_analytics import VideoViewCreate, VideoViewUpdate
from ..services.view_store import SqlViewStore
from ..services.video_analytics_service import VideoAnalyticsService

logger = logging.getLogger(__name__)


class ViewWriter(ABC):
    @abstractmethod
    async def record_view(self, record: VideoViewCreate) -> Optional[str]:
        """Create the row for a new session and return its id, None on failure"""
        pass

    @abstractmethod
    async def update_view(self, update: VideoViewUpdate) -> bool:
        """Report progress for an existing session"""
        pass


class StoreViewWriter(ViewWriter):
    """Writes straight into the database from the same process"""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory

    def _record(self, record: VideoViewCreate) -> Optional[str]:
        db = self.session_factory()
        try:
            event = VideoAnalyticsService(SqlViewStore(db)).record_view(record)
            return str(event.id) if event else None
        finally:
            db.close()

    def _update(self, update: VideoViewUpdate) -> bool:
        db = self.session_factory()
        try:
            return VideoAnalyticsService(SqlViewStore(db)).update_view(update)
        finally:
            db.close()

    async def record_view(self, record: VideoViewCreate) -> Optional[str]:
        return await asyncio.to_thread(self._record, record)

    async def update_view(self, update: VideoViewUpdate) -> bool:
        return await asyncio.to_thread(self._update, update)


class HttpViewWriter(ViewWriter):
    """Posts record_view / update_view actions to the video analytics API"""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.endpoint = f"{base_url.rstrip('/')}/api/video-analytics"
        self.timeout = timeout
        self.client = client

    async def _post(self, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            if self.client is not None:
                response = await self.client.post(self.endpoint, json=payload)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.endpoint, json=payload)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            logger.warning(f"Video analytics {payload.get('action')} request failed: {e}")
            return None

    async def record_view(self, record: VideoViewCreate) -> Optional[str]:
        data = await self._post({"action": "record_view", **record.model_dump()})
        view = (data or {}).get("view") or {}
        if view.get("id") is None:
            return None
        return str(view["id"])

    async def update_view(self, update: VideoViewUpdate) -> bool:
        data = await self._post({"action": "update_view", **update.model_dump()})
        return bool(data and data.get("success"))
