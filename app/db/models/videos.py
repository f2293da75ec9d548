from typing import Optional
from sqlmodel import Field

from .base import BaseModelDB


class Video(BaseModelDB, table=True):
    """Vidéos stockées dans le bucket, référencées en DB avec leurs métadonnées."""

    file_name: str = Field(index=True, unique=True, description="Nom de l'objet dans le bucket")
    title: str = Field(description="Titre affiché")
    description: str = Field(default="", description="Texte libre affiché sous la vidéo")
    categories: str = Field(default="[]", description="Liste de catégories encodée en JSON (ex: '[\"a\", \"b\"]')")
    external_link: Optional[str] = Field(default=None, description="Lien externe affiché pendant la lecture")
    likes: Optional[int] = Field(default=0, description="Compteur de likes (NULL traité comme 0)")
