"""
Admin analytics endpoints
"""
from fastapi import APIRouter, Depends
import logging

from ....core.security import get_current_admin
from ....schemas.video_analytics import VideoAnalyticsSummary
from ....services.video_analytics_service import VideoAnalyticsService
from ..video_analytics import get_video_analytics_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/players/{player_id}/video-analytics", response_model=VideoAnalyticsSummary)
async def get_player_video_analytics(
    player_id: str,
    admin: dict = Depends(get_current_admin),
    service: VideoAnalyticsService = Depends(get_video_analytics_service)
):
    """Full video analytics for a player: daily views, demographics and recent viewers"""
    logger.info(f"Admin requested video analytics for player {player_id}")
    return service.get_video_summary(player_id)
