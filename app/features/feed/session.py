"""
➡️ But : Assembler les composants du feed pour UN client.

FeedSession : catalogue + filtre + curseur + surface de lecture + préférence muet.
              Les clients externes (loader, tracker) sont injectés à l'appel.
FeedSessionStore : sessions en mémoire, indexées par id, purgées après inactivité.

Aucune erreur du store ne remonte : elles sont journalisées et reflétées dans l'état.
"""

import threading
import time
import uuid
from enum import Enum
from typing import Callable, Dict, List, Optional

from app.core.errors import LoadError, ParseFailure, UpdateFailure
from app.core.logging import get_logger
from app.features.feed.catalog import CatalogLoader, FeedVideo, collect_categories
from app.features.feed.cursor import FeedCursor, LoopNotice
from app.features.feed.filters import CategoryFilter
from app.features.feed.likes import LikeTracker
from app.features.feed.playback import PlaybackSurface, SurfaceEffect, SurfaceEvent

logger = get_logger(__name__)


class LikeOutcome(str, Enum):
    APPLIED = "applied"
    ALREADY_LIKED = "already_liked"
    FAILED = "failed"
    NO_VIDEO = "no_video"


class FeedSession:
    def __init__(
        self,
        *,
        session_id: Optional[str] = None,
        device_id: str,
        notice: Optional[LoopNotice] = None,
        cursor: Optional[FeedCursor] = None,
        muted: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.id = session_id or uuid.uuid4().hex
        self.device_id = device_id
        self.cursor = cursor or FeedCursor(notice=notice)
        self.filter = CategoryFilter([], self.cursor)
        self.categories: List[str] = []
        self.muted = muted
        self.surface: Optional[PlaybackSurface] = None

        self.is_loading = False
        self.like_pending = False
        self.last_error: Optional[str] = None
        self._clock = clock
        self.last_seen = clock()
        # les routes tournent dans le threadpool : une requête à la fois modifie l'état
        self._lock = threading.RLock()

    # -------- helpers --------

    def touch(self) -> None:
        self.last_seen = self._clock()

    def current(self) -> Optional[FeedVideo]:
        with self._lock:
            return self.cursor.current()

    def _refresh_surface(self) -> None:
        video = self.current()
        self.surface = PlaybackSurface(video.id, muted=self.muted) if video else None

    # -------- chargement --------

    def load(self, loader: CatalogLoader) -> bool:
        with self._lock:
            self.is_loading = True
        try:
            videos = loader.load()
        except ParseFailure as e:
            logger.error("catalog_parse_failure", video_id=e.video_id, error=e.message)
            self._install([], error=e.kind)
            return False
        except LoadError as e:
            logger.warning("catalog_fetch_failure", error=e.message)
            self._install([], error=e.kind)
            return False
        finally:
            with self._lock:
                self.is_loading = False

        self._install(videos)
        return True

    def _install(self, videos: List[FeedVideo], *, error: Optional[str] = None) -> None:
        with self._lock:
            self.filter.set_catalog(videos)
            self.categories = collect_categories(videos)
            self.last_error = error
            self._refresh_surface()

    # -------- filtre / curseur --------

    def select_category(self, name: str) -> None:
        with self._lock:
            self.filter.select(name)
            self._refresh_surface()

    def reset_filter(self) -> None:
        with self._lock:
            self.filter.reset()
            self._refresh_surface()

    def advance(self) -> bool:
        with self._lock:
            if not len(self.cursor):
                return False
            looped = self.cursor.advance()
            self._refresh_surface()
            return looped

    def jump_random(self) -> None:
        with self._lock:
            if not len(self.cursor):
                return
            self.cursor.jump_random()
            self._refresh_surface()

    # -------- likes --------

    def like_current(self, tracker: LikeTracker) -> LikeOutcome:
        with self._lock:
            video = self.current()
        if video is None:
            return LikeOutcome.NO_VIDEO
        return self.like(video, tracker)

    def like(self, video: FeedVideo, tracker: LikeTracker) -> LikeOutcome:
        # l'écriture se fait hors verrou : le feed reste navigable pendant le like
        with self._lock:
            self.like_pending = True
        try:
            applied = tracker.like(video)
        except UpdateFailure as e:
            logger.warning("like_update_failure", video_id=e.video_id, error=e.message)
            return LikeOutcome.FAILED
        finally:
            with self._lock:
                self.like_pending = False
        return LikeOutcome.APPLIED if applied else LikeOutcome.ALREADY_LIKED

    # -------- surface --------

    def handle_surface_event(self, event: SurfaceEvent) -> SurfaceEffect:
        with self._lock:
            if self.surface is None:
                return SurfaceEffect.NONE
            effect = self.surface.handle(event)
            self.muted = self.surface.muted
            if effect is SurfaceEffect.ADVANCE:
                self.advance()
            return effect

    # -------- lecture --------

    def snapshot(self) -> dict:
        with self._lock:
            video = self.current()
            return {
                "id": self.id,
                "device_id": self.device_id,
                "video": video,
                "index": self.cursor.index,
                "count": len(self.cursor),
                "catalog_size": len(self.filter.catalog),
                "active_category": self.filter.active,
                "categories": list(self.categories),
                "loop_notice": self.cursor.notice.is_visible(),
                "muted": self.muted,
                "surface": self.surface.snapshot() if self.surface else None,
                "is_loading": self.is_loading,
                "like_pending": self.like_pending,
                "last_error": self.last_error,
            }


class FeedSessionStore:
    """Sessions de feed en mémoire (les routes tournent dans le threadpool)."""

    def __init__(
        self,
        *,
        ttl_seconds: float,
        notice_seconds: float = 3.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.notice_seconds = notice_seconds
        self._clock = clock
        self._sessions: Dict[str, FeedSession] = {}
        self._lock = threading.Lock()

    def create(self, device_id: str) -> FeedSession:
        session = FeedSession(
            device_id=device_id,
            notice=LoopNotice(duration=self.notice_seconds),
            clock=self._clock,
        )
        with self._lock:
            self._purge_locked()
            self._sessions[session.id] = session
        logger.info("feed_session_opened", session_id=session.id, device_id=device_id)
        return session

    def get(self, session_id: str) -> Optional[FeedSession]:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is not None:
            session.touch()
        return session

    def discard(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def purge(self) -> int:
        with self._lock:
            return self._purge_locked()

    def _purge_locked(self) -> int:
        now = self._clock()
        expired = [sid for sid, s in self._sessions.items() if now - s.last_seen > self.ttl_seconds]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("feed_sessions_purged", count=len(expired))
        return len(expired)
