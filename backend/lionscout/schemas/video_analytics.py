from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from datetime import datetime


class VideoViewCreate(BaseModel):
    player_id: str
    session_id: str
    viewer_id: Optional[str] = None
    viewer_email: Optional[str] = None
    viewer_name: Optional[str] = None

    # Session metrics, finite and non-negative
    watch_duration_seconds: float = Field(0.0, ge=0, allow_inf_nan=False)
    total_duration_seconds: float = Field(0.0, ge=0, allow_inf_nan=False)


class VideoViewUpdate(BaseModel):
    player_id: str
    session_id: str
    watch_duration_seconds: float = Field(0.0, ge=0, allow_inf_nan=False)
    total_duration_seconds: float = Field(0.0, ge=0, allow_inf_nan=False)


class VideoViewResponse(BaseModel):
    id: int
    player_id: str
    session_id: str
    viewer_id: Optional[str] = None
    watch_duration_seconds: float
    total_duration_seconds: float
    created_at: Optional[datetime] = None
    watched_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RecentViewer(BaseModel):
    viewer_name: Optional[str] = None
    viewer_email: Optional[str] = None
    display_name: str
    watched_at: Optional[datetime] = None
    watch_duration: float
    completion: int  # percentage of the video watched in this session


class PlayerViewAnalytics(BaseModel):
    player_id: str
    total_views: int = 0
    unique_viewers: int = 0
    avg_watch_duration: float = 0.0
    avg_completion: float = 0.0
    recent_viewers: List[RecentViewer] = []


class ViewerDemographics(BaseModel):
    identified: int = 0
    anonymous: int = 0


class VideoAnalyticsSummary(PlayerViewAnalytics):
    """Player analytics page payload"""
    total_watch_time: float = 0.0
    views_by_date: Dict[str, int] = {}  # YYYY-MM-DD -> views
    viewer_demographics: ViewerDemographics = Field(default_factory=ViewerDemographics)


class PlayerSummary(BaseModel):
    id: str
    name: str
    position: str
    position_fr: Optional[str] = None
    club: Optional[str] = None
    region: Optional[str] = None
    image: Optional[str] = None
    rating: float = 0.0
    video_url: Optional[str] = None
    age: Optional[int] = None

    class Config:
        from_attributes = True


class LeaderboardEntry(BaseModel):
    player_id: str
    total_views: int
    total_watch_time: float
    avg_completion: float
    last_viewed: Optional[datetime] = None
    player: Optional[PlayerSummary] = None

    # Labels shown on the most watched cards, e.g. "1.2K views", "2m 5s"
    views_label: str = "0"
    watch_time_label: str = "0s"


class PlatformStats(BaseModel):
    total_views: int = 0
    total_watch_time_seconds: float = 0.0
    unique_players_watched: int = 0


class MostWatchedResponse(BaseModel):
    leaderboard: List[LeaderboardEntry] = []
    platform_stats: PlatformStats = Field(default_factory=PlatformStats)


class ViewCountsResponse(BaseModel):
    counts: Dict[str, int] = {}
