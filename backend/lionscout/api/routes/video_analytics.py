"""
Public video analytics endpoints used by the player pages
"""
from typing import Dict, Any, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from pydantic import BaseModel, Field
import logging

from ...core.database import get_db
from ...schemas.video_analytics import (
    VideoViewCreate, VideoViewUpdate, VideoViewResponse, PlayerViewAnalytics,
    MostWatchedResponse, ViewCountsResponse
)
from ...services.view_store import SqlViewStore
from ...services.video_analytics_service import VideoAnalyticsService

router = APIRouter()
logger = logging.getLogger(__name__)

MAX_LEADERBOARD_LIMIT = 100


class VideoAnalyticsAction(BaseModel):
    action: str
    player_id: Optional[str] = None
    session_id: Optional[str] = None
    viewer_id: Optional[str] = None
    viewer_email: Optional[str] = None
    viewer_name: Optional[str] = None
    watch_duration_seconds: float = Field(0.0, ge=0, allow_inf_nan=False)
    total_duration_seconds: float = Field(0.0, ge=0, allow_inf_nan=False)
    limit: Optional[int] = None


def get_video_analytics_service(db: Session = Depends(get_db)) -> VideoAnalyticsService:
    return VideoAnalyticsService(SqlViewStore(db))


def _require(value: Optional[str], field: str) -> str:
    if not value:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{field} is required"
        )
    return value


def _clamp_limit(limit: Optional[int]) -> Optional[int]:
    if limit is None:
        return None
    return max(1, min(limit, MAX_LEADERBOARD_LIMIT))


def _record_view(body: VideoAnalyticsAction, service: VideoAnalyticsService) -> Dict[str, Any]:
    player_id = _require(body.player_id, "player_id")
    session_id = _require(body.session_id, "session_id")

    if not service.store.player_exists(player_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Player not found"
        )

    event = service.record_view(VideoViewCreate(
        player_id=player_id,
        session_id=session_id,
        viewer_id=body.viewer_id,
        viewer_email=body.viewer_email,
        viewer_name=body.viewer_name,
        watch_duration_seconds=body.watch_duration_seconds,
        total_duration_seconds=body.total_duration_seconds
    ))
    if event is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to record view"
        )
    return {"view": VideoViewResponse.model_validate(event).model_dump(mode="json")}


def _update_view(body: VideoAnalyticsAction, service: VideoAnalyticsService) -> Dict[str, Any]:
    success = service.update_view(VideoViewUpdate(
        player_id=_require(body.player_id, "player_id"),
        session_id=_require(body.session_id, "session_id"),
        watch_duration_seconds=body.watch_duration_seconds,
        total_duration_seconds=body.total_duration_seconds
    ))
    return {"success": success}


@router.post("")
async def video_analytics_action(
    body: VideoAnalyticsAction,
    service: VideoAnalyticsService = Depends(get_video_analytics_service)
) -> Dict[str, Any]:
    """Single entry point used by the video player and the most watched section"""
    if body.action == "record_view":
        return _record_view(body, service)
    if body.action == "update_view":
        return _update_view(body, service)
    if body.action == "get_player_views":
        player_id = _require(body.player_id, "player_id")
        return service.get_player_views(player_id).model_dump(mode="json")
    if body.action == "get_most_watched":
        return service.get_most_watched(_clamp_limit(body.limit)).model_dump(mode="json")
    if body.action == "get_all_view_counts":
        return {"counts": service.get_all_view_counts()}

    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=f"Unknown action: {body.action}"
    )


@router.get("/players/{player_id}", response_model=PlayerViewAnalytics)
async def get_player_views(
    player_id: str,
    service: VideoAnalyticsService = Depends(get_video_analytics_service)
):
    """View analytics for one player, zeros when the video was never watched"""
    return service.get_player_views(player_id)


@router.get("/most-watched", response_model=MostWatchedResponse)
async def get_most_watched(
    limit: Optional[int] = Query(None, ge=1, le=MAX_LEADERBOARD_LIMIT),
    service: VideoAnalyticsService = Depends(get_video_analytics_service)
):
    return service.get_most_watched(limit)


@router.get("/view-counts", response_model=ViewCountsResponse)
async def get_all_view_counts(
    service: VideoAnalyticsService = Depends(get_video_analytics_service)
):
    return ViewCountsResponse(counts=service.get_all_view_counts())
