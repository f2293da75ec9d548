"""
➡️ But : Charger le catalogue des vidéos depuis le store externe.

decode_video_row() : unique point de décodage ligne DB → FeedVideo.
CatalogLoader.load() : lecture complète, décodage, URL publique dérivée.
collect_categories() : ensemble des catégories (ordre de première apparition).

Un encodage de catégories invalide fait échouer TOUT le chargement (ParseFailure) :
aucun catalogue partiel n'est admis.
"""

import json
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import FetchFailure, ParseFailure
from app.core.logging import get_logger
from app.db.models.videos import Video
from app.db.repositories.videos import VideoRepository
from app.utils.s3 import public_object_url

logger = get_logger(__name__)


@dataclass
class FeedVideo:
    id: int
    title: str
    description: str
    file_name: str
    video_url: str
    categories: List[str] = field(default_factory=list)
    external_link: Optional[str] = None
    likes: int = 0


def parse_categories(raw: Optional[str], *, video_id: Optional[int] = None) -> List[str]:
    """Décode le champ `categories` (tableau JSON de chaînes)."""
    try:
        value = json.loads(raw) if raw is not None else None
    except (TypeError, ValueError) as e:
        raise ParseFailure(f"categories illisibles: {e}", video_id=video_id)

    if not isinstance(value, list) or not all(isinstance(c, str) for c in value):
        raise ParseFailure("categories doit être un tableau de chaînes", video_id=video_id)
    return value


def decode_video_row(row: Video, public_base_url: str) -> FeedVideo:
    return FeedVideo(
        id=row.id,
        title=row.title,
        description=row.description,
        file_name=row.file_name,
        video_url=public_object_url(public_base_url, row.file_name),
        categories=parse_categories(row.categories, video_id=row.id),
        external_link=row.external_link,
        likes=row.likes or 0,
    )


def collect_categories(videos: Iterable[FeedVideo]) -> List[str]:
    seen = {}
    for video in videos:
        for category in video.categories:
            seen.setdefault(category, None)
    return list(seen)


class CatalogLoader:
    """
    Lit toutes les lignes de la table des vidéos (aucun filtre poussé côté store).
    Aucune écriture n'est faite sur le store.
    """

    def __init__(self, repo: VideoRepository, *, public_base_url: str):
        self.repo = repo
        self.public_base_url = public_base_url

    def load(self) -> List[FeedVideo]:
        try:
            rows = self.repo.list_all()
        except SQLAlchemyError as e:
            raise FetchFailure(f"lecture du catalogue impossible: {e}")

        videos = [decode_video_row(row, self.public_base_url) for row in rows]
        logger.info("catalog_loaded", videos=len(videos))
        return videos
