import json
from typing import Callable, Optional

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import HTTPException, status

from app.core.config import settings
from app.core.errors import ParseFailure
from app.core.logging import get_logger
from app.db.models.videos import Video
from app.db.repositories.videos import VideoRepository
from app.features.content.schemas import (
    VideoAdminListOut, VideoAdminOut, VideoCreateIn, VideoUpdateIn,
)
from app.features.feed.catalog import FeedVideo, collect_categories, decode_video_row
from app.utils.s3 import delete_object, make_s3_internal

logger = get_logger(__name__)


class ContentService:
    """
    Service de gestion du contenu (admin) : orchestre repository + bucket S3.
    Aucune logique SQL directe ici, erreurs en HTTPException propres.
    """

    def __init__(
        self,
        *,
        repo: VideoRepository,
        s3_client_factory: Callable[[], object] = make_s3_internal,
    ):
        self.repo = repo
        self._s3_factory = s3_client_factory
        self.settings = settings

    # -------- Helpers --------

    def _decode(self, row: Video) -> FeedVideo:
        try:
            return decode_video_row(row, self.settings.STORAGE_PUBLIC_BASE_URL)
        except ParseFailure as e:
            logger.error("content_parse_failure", video_id=e.video_id, error=e.message)
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Catégories illisibles pour la vidéo {e.video_id}",
            )

    def _out(self, row: Video) -> VideoAdminOut:
        video = self._decode(row)
        return VideoAdminOut(
            id=video.id,
            file_name=video.file_name,
            title=video.title,
            description=video.description,
            categories=video.categories,
            video_url=video.video_url,
            external_link=video.external_link,
            likes=video.likes,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def _get_or_404(self, video_id: int) -> Video:
        row = self.repo.get(video_id)
        if not row:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Vidéo introuvable")
        return row

    # -------- Reads --------

    def list(self, *, q: Optional[str] = None, category: Optional[str] = None) -> VideoAdminListOut:
        """
        - q        : recherche insensible à la casse sur le titre ou les catégories ("a, b")
        - category : appartenance exacte à la liste de catégories
        """
        items = [self._out(row) for row in self.repo.list_all()]
        categories = collect_categories(items)

        if q:
            needle = q.lower()
            items = [
                v for v in items
                if needle in v.title.lower() or needle in ", ".join(v.categories).lower()
            ]
        if category:
            items = [v for v in items if category in v.categories]

        return VideoAdminListOut(items=items, total=len(items), categories=categories)

    def get(self, video_id: int) -> VideoAdminOut:
        return self._out(self._get_or_404(video_id))

    # -------- Writes --------

    def register(self, payload: VideoCreateIn) -> VideoAdminOut:
        if self.repo.get_by_file_name(payload.file_name):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Fichier déjà référencé")

        row = self.repo.create(
            file_name=payload.file_name,
            title=payload.title,
            description=payload.description,
            categories=json.dumps(payload.categories),
            external_link=payload.external_link,
            likes=0,
        )
        logger.info("video_registered", video_id=row.id, file_name=row.file_name)
        return self._out(row)

    def update(self, video_id: int, payload: VideoUpdateIn) -> VideoAdminOut:
        row = self._get_or_404(video_id)
        changes = payload.model_dump(exclude_unset=True)
        if "categories" in changes:
            changes["categories"] = json.dumps(changes["categories"] or [])
        # colonnes NOT NULL : un null explicite laisse la valeur en place
        for field in ("title", "description"):
            if field in changes and changes[field] is None:
                changes.pop(field)

        row = self.repo.update(row, **changes)
        logger.info("video_updated", video_id=row.id, fields=sorted(changes))
        return self._out(row)

    def delete(self, video_id: int) -> None:
        """
        Supprime d'abord l'objet du bucket ; en cas d'échec la ligne est conservée.
        """
        row = self._get_or_404(video_id)
        s3 = self._s3_factory()
        try:
            delete_object(s3, bucket=self.settings.S3_BUCKET, key=row.file_name)
        except (BotoCoreError, ClientError) as e:
            logger.warning("video_object_delete_failed", video_id=row.id, error=str(e))
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Erreur stockage: {e}")

        file_name = row.file_name
        self.repo.delete(row)
        logger.info("video_deleted", video_id=video_id, file_name=file_name)
