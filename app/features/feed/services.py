from fastapi import HTTPException, status

from app.core.errors import LoadError
from app.core.logging import get_logger, set_feed_session_context
from app.features.feed.catalog import CatalogLoader, collect_categories
from app.features.feed.likes import LikeTracker
from app.features.feed.playback import SurfaceEvent
from app.features.feed.schemas import (
    FeedStateOut, LikeOut, SurfaceEventIn, SurfaceEventOut,
)
from app.features.feed.session import FeedSession, FeedSessionStore, LikeOutcome

logger = get_logger(__name__)


class FeedService:
    """
    Service Feed : fait le lien entre les routes et les FeedSession.
    Les clients externes (loader, tracker) sont construits par requête et injectés.
    Erreurs métier en HTTPException propres.
    """

    def __init__(self, store: FeedSessionStore, loader: CatalogLoader):
        self.store = store
        self.loader = loader

    # -------- Sessions --------

    def open(self, device_id: str) -> FeedStateOut:
        session = self.store.create(device_id)
        set_feed_session_context(session.id, session.device_id)
        session.load(self.loader)
        return self.state(session)

    def get(self, session_id: str) -> FeedSession:
        session = self.store.get(session_id)
        if session is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session de feed introuvable")
        set_feed_session_context(session.id, session.device_id)
        return session

    def close(self, session_id: str) -> None:
        if not self.store.discard(session_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session de feed introuvable")

    def reload(self, session_id: str) -> FeedStateOut:
        session = self.get(session_id)
        session.load(self.loader)
        return self.state(session)

    @staticmethod
    def state(session: FeedSession) -> FeedStateOut:
        return FeedStateOut.model_validate(session.snapshot(), from_attributes=True)

    # -------- Navigation --------

    def select_category(self, session_id: str, name: str) -> FeedStateOut:
        session = self.get(session_id)
        session.select_category(name)
        return self.state(session)

    def reset_filter(self, session_id: str) -> FeedStateOut:
        session = self.get(session_id)
        session.reset_filter()
        return self.state(session)

    def advance(self, session_id: str) -> FeedStateOut:
        session = self.get(session_id)
        session.advance()
        return self.state(session)

    def jump_random(self, session_id: str) -> FeedStateOut:
        session = self.get(session_id)
        session.jump_random()
        return self.state(session)

    def surface_event(self, session_id: str, payload: SurfaceEventIn) -> SurfaceEventOut:
        session = self.get(session_id)
        effect = session.handle_surface_event(SurfaceEvent(kind=payload.kind, value=payload.value))
        return SurfaceEventOut(effect=effect, state=self.state(session))

    # -------- Likes --------

    def like(self, session_id: str, tracker: LikeTracker) -> LikeOut:
        session = self.get(session_id)
        video = session.current()
        outcome = session.like_current(tracker)

        if outcome is LikeOutcome.NO_VIDEO:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Aucune vidéo à liker")
        if outcome is LikeOutcome.FAILED:
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Le like n'a pas pu être enregistré")
        return LikeOut(outcome=outcome, video_id=video.id, likes=video.likes)

    # -------- Catégories --------

    def categories(self) -> list[str]:
        try:
            return collect_categories(self.loader.load())
        except LoadError as e:
            logger.warning("categories_unavailable", error=e.message, kind=e.kind)
            return []
