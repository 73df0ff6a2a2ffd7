"""
Video view analytics: per-player rollups and the most watched leaderboard.

Everything here is recomputed from the raw view rows on every call; nothing
derived is stored. Read paths are best-effort: a failing store degrades to
empty results so the site shows "no data yet" instead of an error.
"""
from typing import List, Optional, Dict, Any, Iterable
from datetime import datetime
from collections import defaultdict
import logging
import math

from ..core.config import settings
from ..models.video_view import VideoView
from ..schemas.video_analytics import (
    VideoViewCreate, VideoViewUpdate, RecentViewer, PlayerViewAnalytics,
    VideoAnalyticsSummary, ViewerDemographics, PlayerSummary, LeaderboardEntry,
    PlatformStats, MostWatchedResponse
)
from .formatting import completion_percent, format_view_count, format_watch_time
from .view_store import ViewStore

logger = logging.getLogger(__name__)

ANONYMOUS_VIEWER = "Anonymous viewer"


class VideoAnalyticsService:
    def __init__(self, store: ViewStore):
        self.store = store

    @staticmethod
    def effective_watch_seconds(event: VideoView) -> float:
        """Watch time clamped to [0, total duration] when the duration is known.

        NaN watch times count as 0. An infinite watch time is capped at the
        duration, or ignored when the duration is unknown.
        """
        watch = event.watch_duration_seconds or 0.0
        total = event.total_duration_seconds or 0.0
        if not math.isfinite(total) or total < 0:
            total = 0.0
        if math.isnan(watch) or watch < 0:
            return 0.0
        if total > 0:
            return min(watch, total)
        return watch if math.isfinite(watch) else 0.0

    @staticmethod
    def event_completion(event: VideoView) -> int:
        return completion_percent(event.watch_duration_seconds, event.total_duration_seconds)

    @staticmethod
    def viewer_key(event: VideoView) -> str:
        """Identity used for unique viewer counts: viewer id, else the session"""
        if event.viewer_id:
            return f"viewer:{event.viewer_id}"
        return f"session:{event.session_id}"

    @staticmethod
    def display_name(event: VideoView) -> str:
        return event.viewer_name or event.viewer_email or ANONYMOUS_VIEWER

    @staticmethod
    def _timestamp(value: Optional[datetime]) -> float:
        return value.timestamp() if value else float("-inf")

    @staticmethod
    def _mean(values: List[float]) -> float:
        return round(sum(values) / len(values), 1) if values else 0.0

    # Write side

    def record_view(self, data: VideoViewCreate) -> Optional[VideoView]:
        """Create the row for a new playback session"""
        try:
            return self.store.insert_view_event(data)
        except Exception as e:
            self.store.rollback()
            logger.error(f"Failed to record view for player {data.player_id}: {e}")
            return None

    def update_view(self, data: VideoViewUpdate) -> bool:
        """Report progress for an existing session. False when no row matches."""
        try:
            event = self.store.update_view_event(data)
        except Exception as e:
            self.store.rollback()
            logger.error(f"Failed to update view session {data.session_id}: {e}")
            return False
        if event is None:
            logger.warning(
                f"No view session {data.session_id} for player {data.player_id}, update ignored"
            )
            return False
        return True

    # Read side

    def _load_events(self, player_id: Optional[str] = None) -> List[VideoView]:
        try:
            return self.store.query_view_events(player_id)
        except Exception as e:
            logger.error(f"Video view query failed: {e}")
            return []

    def recent_viewers(self, events: Iterable[VideoView], limit: Optional[int] = None) -> List[RecentViewer]:
        if limit is None:
            limit = settings.recent_viewers_limit
        latest = sorted(
            events,
            key=lambda e: self._timestamp(e.watched_at or e.created_at),
            reverse=True
        )[:limit]
        return [
            RecentViewer(
                viewer_name=event.viewer_name,
                viewer_email=event.viewer_email,
                display_name=self.display_name(event),
                watched_at=event.watched_at or event.created_at,
                watch_duration=self.effective_watch_seconds(event),
                completion=self.event_completion(event)
            )
            for event in latest
        ]

    def _player_rollup(self, player_id: str, events: List[VideoView]) -> Dict[str, Any]:
        return {
            "player_id": player_id,
            "total_views": len(events),
            "unique_viewers": len({self.viewer_key(e) for e in events}),
            "avg_watch_duration": self._mean([self.effective_watch_seconds(e) for e in events]),
            "avg_completion": self._mean([self.event_completion(e) for e in events]),
            "recent_viewers": self.recent_viewers(events),
        }

    def get_player_views(self, player_id: str) -> PlayerViewAnalytics:
        """Views, unique viewers, averages and recent viewers for one player"""
        events = self._load_events(player_id)
        return PlayerViewAnalytics(**self._player_rollup(player_id, events))

    def get_video_summary(self, player_id: str) -> VideoAnalyticsSummary:
        """Player analytics page payload: the rollup plus daily views and demographics"""
        events = self._load_events(player_id)

        views_by_date: Dict[str, int] = defaultdict(int)
        identified = 0
        for event in events:
            viewed_at = event.created_at or event.watched_at
            if viewed_at:
                views_by_date[viewed_at.date().isoformat()] += 1
            if event.viewer_id or event.viewer_email:
                identified += 1

        return VideoAnalyticsSummary(
            **self._player_rollup(player_id, events),
            total_watch_time=round(sum(self.effective_watch_seconds(e) for e in events), 1),
            views_by_date=dict(sorted(views_by_date.items())),
            viewer_demographics=ViewerDemographics(
                identified=identified,
                anonymous=len(events) - identified
            )
        )

    def get_most_watched(self, limit: Optional[int] = None) -> MostWatchedResponse:
        """Top players by views, ties broken by watch time then recency"""
        if limit is None:
            limit = settings.most_watched_default_limit
        events = self._load_events()

        player_stats = defaultdict(lambda: {
            'total_views': 0,
            'total_watch_time': 0.0,
            'completions': [],
            'last_viewed': None
        })

        for event in events:
            stats = player_stats[event.player_id]
            stats['total_views'] += 1
            stats['total_watch_time'] += self.effective_watch_seconds(event)
            stats['completions'].append(self.event_completion(event))
            viewed_at = event.watched_at or event.created_at
            if viewed_at and (
                stats['last_viewed'] is None
                or self._timestamp(viewed_at) > self._timestamp(stats['last_viewed'])
            ):
                stats['last_viewed'] = viewed_at

        platform_stats = PlatformStats(
            total_views=len(events),
            total_watch_time_seconds=round(sum(s['total_watch_time'] for s in player_stats.values()), 1),
            unique_players_watched=len(player_stats)
        )

        ranked = sorted(
            player_stats.items(),
            key=lambda item: (
                item[1]['total_views'],
                item[1]['total_watch_time'],
                self._timestamp(item[1]['last_viewed'])
            ),
            reverse=True
        )[:max(0, limit)]

        try:
            players = self.store.get_player_summaries(player_id for player_id, _ in ranked)
        except Exception as e:
            logger.error(f"Player summary lookup failed: {e}")
            players = {}

        leaderboard = []
        for player_id, stats in ranked:
            player = players.get(player_id)
            leaderboard.append(LeaderboardEntry(
                player_id=player_id,
                total_views=stats['total_views'],
                total_watch_time=round(stats['total_watch_time'], 1),
                avg_completion=self._mean(stats['completions']),
                last_viewed=stats['last_viewed'],
                player=PlayerSummary.model_validate(player) if player else None,
                views_label=format_view_count(stats['total_views']),
                watch_time_label=format_watch_time(stats['total_watch_time'])
            ))

        return MostWatchedResponse(leaderboard=leaderboard, platform_stats=platform_stats)

    def get_all_view_counts(self) -> Dict[str, int]:
        """View count per player, only players with at least one view"""
        try:
            return self.store.count_views_by_player()
        except Exception as e:
            logger.error(f"View count query failed: {e}")
            return {}
