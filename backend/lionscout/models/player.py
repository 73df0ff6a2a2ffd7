from sqlalchemy import Column, Integer, String, Float, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..core.database import Base


class Player(Base):
    """Player summary fields needed by the video analytics views"""
    __tablename__ = "players"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    position = Column(String, nullable=False)  # Forward, Midfielder, Defender, Goalkeeper
    position_fr = Column(String, nullable=True)
    club = Column(String, nullable=True)
    region = Column(String, nullable=True)
    image = Column(String, nullable=True)
    rating = Column(Float, default=0.0)
    video_url = Column(String, nullable=True)
    age = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    video_views = relationship("VideoView", back_populates="player", cascade="all, delete-orphan")
