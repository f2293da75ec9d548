from typing import List, Optional, Union
from datetime import datetime
from pydantic import BaseModel, Field as PydField, field_validator


def split_categories(value: Union[str, List[str], None]) -> Optional[List[str]]:
    """
    Accepte une liste ou une saisie "a, b, c" (séparateur virgule).
    Chaque entrée est nettoyée des espaces ; les entrées vides sont ignorées.
    """
    if value is None:
        return None
    items = value.split(",") if isinstance(value, str) else value
    return [c.strip() for c in items if c and c.strip()]


# ---------- IN / UPDATE ----------

class VideoCreateIn(BaseModel):
    file_name: str = PydField(..., min_length=1, description="Objet déjà présent dans le bucket")
    title: str = PydField(..., min_length=1, examples=["Latte art en 30s"])
    description: str = ""
    categories: List[str] = PydField(default_factory=list, examples=[["Food", "Barista"]])
    external_link: Optional[str] = PydField(None, examples=["https://example.com"])

    @field_validator("categories", mode="before")
    @classmethod
    def _split(cls, v):
        return split_categories(v) or []


class VideoUpdateIn(BaseModel):
    title: Optional[str] = PydField(None, min_length=1)
    description: Optional[str] = None
    categories: Optional[List[str]] = None
    external_link: Optional[str] = None

    @field_validator("categories", mode="before")
    @classmethod
    def _split(cls, v):
        return split_categories(v)


# ---------- OUT ----------

class VideoAdminOut(BaseModel):
    id: int
    file_name: str
    title: str
    description: str
    categories: List[str]
    video_url: str
    external_link: Optional[str] = None
    likes: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class VideoAdminListOut(BaseModel):
    items: List[VideoAdminOut]
    total: int
    categories: List[str]
