from .auth import *
from .video_analytics import *

__all__ = [
    # Auth schemas
    "AdminLoginRequest",
    "TokenResponse",

    # Video analytics schemas
    "VideoViewCreate",
    "VideoViewUpdate",
    "VideoViewResponse",
    "RecentViewer",
    "PlayerViewAnalytics",
    "ViewerDemographics",
    "VideoAnalyticsSummary",
    "PlayerSummary",
    "LeaderboardEntry",
    "PlatformStats",
    "MostWatchedResponse",
    "ViewCountsResponse"
]
