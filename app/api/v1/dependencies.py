"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_feed_service() : construit un FeedService à partir d’une session DB et du store de sessions.

get_like_tracker() : construit le LikeTracker de l'appareil appelant.

require_admin() : vérifie le token Bearer et le rôle admin.

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Facile à remplacer en test (app.dependency_overrides).
"""

from fastapi import Depends, Header, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from app.core.config import settings, jwt_settings
from app.db.session import get_session

from app.db.repositories.videos import VideoRepository
from app.db.repositories.device_entries import DeviceEntryRepository

from app.features.feed.catalog import CatalogLoader
from app.features.feed.likes import LikedIdStore, LikeTracker
from app.features.feed.session import FeedSessionStore
from app.features.feed.services import FeedService
from app.features.content.services import ContentService

from app.security.tokens import DecodedToken, JWTError, decode_token, is_admin


# -----------------------------
# Sessions de feed (état en mémoire, partagé par le process)
# -----------------------------
_feed_sessions = FeedSessionStore(
    ttl_seconds=settings.FEED_SESSION_TTL_SECONDS,
    notice_seconds=settings.LOOP_NOTICE_SECONDS,
)

def get_feed_session_store() -> FeedSessionStore:
    return _feed_sessions


# -----------------------------
# Repositories
# -----------------------------
def get_video_repository(session: Session = Depends(get_session)) -> VideoRepository:
    return VideoRepository(session)

def get_device_entry_repository(session: Session = Depends(get_session)) -> DeviceEntryRepository:
    return DeviceEntryRepository(session)


# -----------------------------
# Feed
# -----------------------------
def get_catalog_loader(
    video_repo: VideoRepository = Depends(get_video_repository),
) -> CatalogLoader:
    return CatalogLoader(video_repo, public_base_url=settings.STORAGE_PUBLIC_BASE_URL)

def get_feed_service(
    store: FeedSessionStore = Depends(get_feed_session_store),
    loader: CatalogLoader = Depends(get_catalog_loader),
) -> FeedService:
    return FeedService(store=store, loader=loader)

def get_device_id(
    x_device_id: str = Header(..., alias="X-Device-Id", min_length=1, max_length=128),
) -> str:
    return x_device_id.strip()

def get_like_tracker(
    session_id: str,
    feed_svc: FeedService = Depends(get_feed_service),
    video_repo: VideoRepository = Depends(get_video_repository),
    device_repo: DeviceEntryRepository = Depends(get_device_entry_repository),
) -> LikeTracker:
    # le set des ids likés appartient à l'appareil qui a ouvert la session
    feed = feed_svc.get(session_id)
    return LikeTracker(video_repo, LikedIdStore(device_repo, feed.device_id))


# -----------------------------
# Content (admin)
# -----------------------------
def get_content_service(
    video_repo: VideoRepository = Depends(get_video_repository),
) -> ContentService:
    return ContentService(repo=video_repo)


# -----------------------------
# Authentication data
# -----------------------------
bearer_scheme = HTTPBearer(auto_error=True)

def get_access_token_from_bearer(
    credentials: HTTPAuthorizationCredentials = Security(bearer_scheme),
) -> str:
    if not credentials or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid auth scheme")
    return credentials.credentials

def require_admin(access_token: str = Depends(get_access_token_from_bearer)) -> DecodedToken:
    try:
        claims = decode_token(access_token, jwt_settings)
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    if not is_admin(claims, jwt_settings):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return claims
