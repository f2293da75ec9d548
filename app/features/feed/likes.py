"""
➡️ But : Compteur de likes dédupliqué par appareil.

LikedIdStore : ensemble des ids déjà likés, persisté sous la clé 'likedVideos'
               du store local de l'appareil.
LikeTracker  : écrit l'incrément et le set local dans une même transaction, puis
               SEULEMENT si le commit réussit, met à jour le compteur en mémoire.

Pas d'incrément optimiste : il n'existe aucun chemin de réconciliation.
"""

import json
from typing import List, Protocol

from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import UpdateFailure
from app.core.logging import get_logger
from app.features.feed.catalog import FeedVideo

logger = get_logger(__name__)

LIKED_VIDEOS_KEY = "likedVideos"


class DeviceBackend(Protocol):
    def read(self, device_id: str, key: str): ...

    def write(self, device_id: str, key: str, value: str, *, commit: bool = True): ...


class LikesWriter(Protocol):
    def set_likes(self, video_id: int, likes: int, *, commit: bool = True) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


class LikedIdStore:
    def __init__(self, backend: DeviceBackend, device_id: str):
        self.backend = backend
        self.device_id = device_id

    def ids(self) -> List[int]:
        raw = self.backend.read(self.device_id, LIKED_VIDEOS_KEY)
        if not raw:
            return []
        try:
            value = json.loads(raw)
            return [int(v) for v in value] if isinstance(value, list) else []
        except (TypeError, ValueError):
            logger.warning("liked_ids_unreadable", device_id=self.device_id)
            return []

    def contains(self, video_id: int) -> bool:
        return video_id in self.ids()

    def add(self, video_id: int, *, commit: bool = True) -> None:
        ids = self.ids()
        if video_id in ids:
            return
        ids.append(video_id)
        self.backend.write(self.device_id, LIKED_VIDEOS_KEY, json.dumps(ids), commit=commit)


class LikeTracker:
    """
    Le compteur du store et le set local sont écrits dans UNE transaction :
    writer et backend partagent la session de la requête.
    """

    def __init__(self, writer: LikesWriter, liked: LikedIdStore):
        self.writer = writer
        self.liked = liked

    def like(self, video: FeedVideo) -> bool:
        """
        Retourne True si le like a été appliqué, False si déjà liké depuis cet appareil.
        Lève UpdateFailure si le store refuse l'écriture (rien n'est modifié, ni en DB ni en mémoire).
        """
        new_likes = video.likes + 1
        try:
            if self.liked.contains(video.id):
                logger.info("like_skipped_already_liked", video_id=video.id)
                return False
            found = self.writer.set_likes(video.id, new_likes, commit=False)
            if found:
                self.liked.add(video.id, commit=False)
                self.writer.commit()
        except SQLAlchemyError as e:
            self.writer.rollback()
            raise UpdateFailure(f"écriture du like refusée: {e}", video_id=video.id)
        if not found:
            self.writer.rollback()
            raise UpdateFailure("vidéo absente du store", video_id=video.id)

        video.likes = new_likes
        logger.info("like_applied", video_id=video.id, likes=new_likes)
        return True
