"""
Storage layer for raw video view events
"""
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from ..models.player import Player
from ..models.video_view import VideoView
from ..schemas.video_analytics import VideoViewCreate, VideoViewUpdate

logger = logging.getLogger(__name__)


class ViewStore(ABC):
    """Relational store holding one row per playback session"""

    @abstractmethod
    def insert_view_event(self, data: VideoViewCreate) -> VideoView:
        """Create the row for a new session, or return the existing one"""
        pass

    @abstractmethod
    def update_view_event(self, data: VideoViewUpdate) -> Optional[VideoView]:
        """Update the row matched by player and session, None if missing"""
        pass

    @abstractmethod
    def query_view_events(self, player_id: Optional[str] = None) -> List[VideoView]:
        """All rows for one player, or for every player when player_id is None"""
        pass

    @abstractmethod
    def count_views_by_player(self) -> Dict[str, int]:
        """Number of rows per player, players without rows omitted"""
        pass

    @abstractmethod
    def get_player_summaries(self, player_ids: Iterable[str]) -> Dict[str, Player]:
        """Player display fields keyed by player id"""
        pass

    @abstractmethod
    def player_exists(self, player_id: str) -> bool:
        pass

    def rollback(self):
        """Discard a failed write"""
        pass


class SqlViewStore(ViewStore):
    def __init__(self, db: Session):
        self.db = db

    def _get_session_row(self, player_id: str, session_id: str) -> Optional[VideoView]:
        return self.db.query(VideoView).filter(
            VideoView.player_id == player_id,
            VideoView.session_id == session_id
        ).first()

    def insert_view_event(self, data: VideoViewCreate) -> VideoView:
        existing = self._get_session_row(data.player_id, data.session_id)
        if existing:
            logger.debug(f"View session {data.session_id} already recorded, reusing row {existing.id}")
            return existing

        event = VideoView(**data.model_dump())
        self.db.add(event)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent insert of the same session
            self.db.rollback()
            existing = self._get_session_row(data.player_id, data.session_id)
            if existing is None:
                raise
            return existing
        self.db.refresh(event)
        return event

    def update_view_event(self, data: VideoViewUpdate) -> Optional[VideoView]:
        event = self._get_session_row(data.player_id, data.session_id)
        if not event:
            return None

        reported = max(0.0, data.watch_duration_seconds or 0.0)
        event.watch_duration_seconds = max(event.watch_duration_seconds or 0.0, reported)
        if data.total_duration_seconds and data.total_duration_seconds > 0:
            event.total_duration_seconds = data.total_duration_seconds

        self.db.commit()
        self.db.refresh(event)
        return event

    def query_view_events(self, player_id: Optional[str] = None) -> List[VideoView]:
        query = self.db.query(VideoView)
        if player_id is not None:
            query = query.filter(VideoView.player_id == player_id)
        return query.all()

    def count_views_by_player(self) -> Dict[str, int]:
        rows = self.db.query(
            VideoView.player_id,
            func.count(VideoView.id).label('total_views')
        ).group_by(VideoView.player_id).all()
        return {row.player_id: row.total_views for row in rows}

    def get_player_summaries(self, player_ids: Iterable[str]) -> Dict[str, Player]:
        ids = list(set(player_ids))
        if not ids:
            return {}
        players = self.db.query(Player).filter(Player.id.in_(ids)).all()
        return {player.id: player for player in players}

    def player_exists(self, player_id: str) -> bool:
        return self.db.query(Player.id).filter(Player.id == player_id).first() is not None

    def rollback(self):
        self.db.rollback()
