"""
View telemetry for one mounted video player.

The recorder turns playback events (play, pause, end, teardown) into a single
view row per session: one record_view write on the first play, then
throttled update_view writes while the video plays, and a final update
whenever playback stops. Telemetry is best-effort: failed writes are logged
and dropped, they never reach the player.
"""
import asyncio
import enum
import logging
import math
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import partial
from typing import Awaitable, Callable, Optional, Set

from ..core.config import settings
from ..schemas.video_analytics import VideoViewCreate, VideoViewUpdate
from .scheduler import AsyncioSamplingScheduler, SamplingHandle, SamplingScheduler
from .session_identity import SessionIdentityProvider
from .writers import ViewWriter

logger = logging.getLogger(__name__)


class RecorderState(enum.Enum):
    idle = "idle"  # No session yet
    active = "active"  # Session created, sampling running
    paused = "paused"  # Sampling stopped, final update sent
    error = "error"  # Playback failed, no further writes


class PlaybackSource(ABC):
    """The media element being watched"""

    @property
    @abstractmethod
    def position(self) -> float:
        """Current playback position in seconds"""
        pass

    @property
    @abstractmethod
    def duration(self) -> float:
        """Media duration in seconds, 0 or NaN until metadata has loaded"""
        pass


@dataclass
class ViewerIdentity:
    viewer_id: Optional[str] = None
    viewer_email: Optional[str] = None
    viewer_name: Optional[str] = None


def _valid_seconds(value: Optional[float]) -> float:
    if value is None or math.isnan(value) or math.isinf(value) or value < 0:
        return 0.0
    return float(value)


class ViewRecorder:
    def __init__(
        self,
        player_id: str,
        source: PlaybackSource,
        writer: ViewWriter,
        identity: SessionIdentityProvider,
        scheduler: Optional[SamplingScheduler] = None,
        viewer: Optional[ViewerIdentity] = None,
        on_view_recorded: Optional[Callable[[], None]] = None,
        clock: Callable[[], float] = time.time,
        sample_interval: Optional[float] = None,
        min_watch_delta: Optional[float] = None
    ):
        self.player_id = player_id
        self.source = source
        self.writer = writer
        self.identity = identity
        self.scheduler = scheduler or AsyncioSamplingScheduler()
        self.viewer = viewer or ViewerIdentity()
        self.on_view_recorded = on_view_recorded
        self.clock = clock
        if sample_interval is None:
            sample_interval = settings.view_sample_interval_seconds
        if min_watch_delta is None:
            min_watch_delta = settings.view_min_watch_delta_seconds
        self.sample_interval = sample_interval
        self.min_watch_delta = min_watch_delta

        self.state = RecorderState.idle
        self.session_id: Optional[str] = None
        self._view_recorded = False
        self._handle: Optional[SamplingHandle] = None
        self._watched = 0.0
        self._total = 0.0
        self._last_reported = 0.0
        self._last_write: Optional[asyncio.Task] = None
        self._pending: Set[asyncio.Task] = set()

    # Playback events

    def play(self):
        """First play creates the session, later plays resume sampling"""
        if self.state == RecorderState.error:
            logger.debug(f"Ignoring play for player {self.player_id}: playback failed")
            return
        if not self._view_recorded:
            self._begin_session()
        if self.state == RecorderState.active:
            return
        self.state = RecorderState.active
        self._start_sampling()

    def pause(self):
        if self.state == RecorderState.active:
            self._stop_sampling(flush=True)
            self.state = RecorderState.paused

    def ended(self):
        self.pause()

    def restart(self):
        """Seek back to the start and keep playing the same session"""
        if self.state == RecorderState.error:
            return
        self.pause()
        self.play()

    def close(self):
        """Teardown of the player surface"""
        if self.state == RecorderState.active:
            self._stop_sampling(flush=True)
            self.state = RecorderState.paused
        else:
            self._stop_sampling(flush=False)

    def fail(self):
        self._stop_sampling(flush=False)
        self.state = RecorderState.error
        logger.info(f"Playback failed for player {self.player_id}, telemetry stopped")

    def retry(self):
        """Back to idle so the next play records a fresh view"""
        self._stop_sampling(flush=False)
        self.state = RecorderState.idle
        self.session_id = None
        self._view_recorded = False
        self._watched = 0.0
        self._last_reported = 0.0

    def metadata_loaded(self, duration: float):
        duration = _valid_seconds(duration)
        if duration > 0:
            self._total = duration

    @property
    def watched_seconds(self) -> float:
        return self._watched

    @property
    def total_seconds(self) -> float:
        return self._total

    async def drain(self):
        """Wait for every write issued so far"""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # Session lifecycle

    def _begin_session(self):
        self._view_recorded = True
        self.session_id = f"{self.identity.get_token()}_{self.player_id}_{int(self.clock() * 1000)}"
        self._watched = 0.0
        self._last_reported = 0.0
        self._observe()

        record = VideoViewCreate(
            player_id=self.player_id,
            session_id=self.session_id,
            viewer_id=self.viewer.viewer_id,
            viewer_email=self.viewer.viewer_email,
            viewer_name=self.viewer.viewer_name,
            watch_duration_seconds=0.0,
            total_duration_seconds=self._total
        )
        logger.debug(f"Starting view session {self.session_id}")
        self._dispatch(partial(self._send_record, record))

    def _observe(self) -> float:
        """Furthest position reached, bounded by the known duration"""
        duration = _valid_seconds(self.source.duration)
        if duration > 0:
            self._total = duration
        self._watched = max(self._watched, _valid_seconds(self.source.position))
        if self._total > 0:
            self._watched = min(self._watched, self._total)
        return self._watched

    def _start_sampling(self):
        if self._handle is not None:
            self._handle.cancel()
        self._handle = self.scheduler.start(self.sample_interval, self._sample)

    def _stop_sampling(self, flush: bool):
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if flush and self.session_id:
            watched = self._observe()
            self._last_reported = max(self._last_reported, watched)
            self._send_progress(watched)

    def _sample(self):
        if self.state != RecorderState.active or not self.session_id:
            return
        watched = self._observe()
        if watched - self._last_reported >= self.min_watch_delta:
            self._last_reported = watched
            self._send_progress(watched)

    def _send_progress(self, watched: float):
        update = VideoViewUpdate(
            player_id=self.player_id,
            session_id=self.session_id,
            watch_duration_seconds=watched,
            total_duration_seconds=self._total
        )
        self._dispatch(partial(self.writer.update_view, update))

    async def _send_record(self, record: VideoViewCreate):
        view_id = await self.writer.record_view(record)
        if view_id is None:
            return
        logger.debug(f"Recorded view {view_id} for session {record.session_id}")
        if self.on_view_recorded:
            self.on_view_recorded()

    # Fire-and-forget writes, issued in order

    def _dispatch(self, write: Callable[[], Awaitable]):
        previous = self._last_write
        task = asyncio.get_running_loop().create_task(self._run_write(previous, write))
        self._last_write = task
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _run_write(self, previous: Optional[asyncio.Task], write: Callable[[], Awaitable]):
        if previous is not None and not previous.done():
            await asyncio.wait({previous})
        try:
            await write()
        except Exception as e:
            logger.warning(f"Dropped view telemetry for player {self.player_id}: {e}")
