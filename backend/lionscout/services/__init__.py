from .view_store import ViewStore, SqlViewStore
from .video_analytics_service import VideoAnalyticsService

__all__ = [
    "ViewStore",
    "SqlViewStore",
    "VideoAnalyticsService"
]
