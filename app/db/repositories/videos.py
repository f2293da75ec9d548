from typing import Optional
from sqlmodel import select

from app.db.repositories.base import BaseRepository
from app.db.models.videos import Video


class VideoRepository(BaseRepository[Video]):
    """CRUD Vidéos + requêtes spécifiques."""
    model = Video

    def get_by_file_name(self, file_name: str) -> Optional[Video]:
        return self.session.exec(
            select(self.model).where(self.model.file_name == file_name)
        ).first()

    def set_likes(self, video_id: int, likes: int, *, commit: bool = True) -> bool:
        """
        Écrit le compteur de likes d'une ligne.
        Retourne False si aucune ligne ne correspond à l'id.
        """
        video = self.get(video_id)
        if video is None:
            return False
        self.update(video, commit=commit, likes=likes)
        return True
