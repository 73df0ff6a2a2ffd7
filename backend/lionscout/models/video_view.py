from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..core.database import Base


class VideoView(Base):
    """One playback session of a player's highlight video"""
    __tablename__ = "video_views"
    __table_args__ = (
        UniqueConstraint("player_id", "session_id", name="unique_player_view_session"),
    )

    id = Column(Integer, primary_key=True, index=True)
    player_id = Column(String, ForeignKey("players.id", ondelete="CASCADE"), nullable=False, index=True)

    # Namespaced per tab token + player + start time
    session_id = Column(String, nullable=False, index=True)

    # Viewer identity (null for anonymous viewers)
    viewer_id = Column(String, nullable=True)
    viewer_email = Column(String, nullable=True)
    viewer_name = Column(String, nullable=True)

    # Session metrics
    watch_duration_seconds = Column(Float, default=0.0)
    total_duration_seconds = Column(Float, default=0.0)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    watched_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    player = relationship("Player", back_populates="video_views")
