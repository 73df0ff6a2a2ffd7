from ..core.database import Base
from .player import Player
from .video_view import VideoView

__all__ = [
    "Base",
    "Player",
    "VideoView"
]
