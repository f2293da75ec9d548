"""
➡️ But : Définir la structure des tables de la base (ORM).

Contient la classe commune dont héritent les tables SQLModel du projet
(vidéos, entrées du store local par appareil).

Chaque champ = une colonne SQL (avec type, index, clé primaire...).
"""

from sqlmodel import SQLModel, Field
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BaseModelDB(SQLModel, table=False):
    # id attribué par le store à la création, jamais modifié ensuite
    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
