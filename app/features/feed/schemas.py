from typing import List, Optional
from pydantic import BaseModel, Field as PydField

from app.features.feed.playback import SurfaceEffect, SurfaceEventKind
from app.features.feed.session import LikeOutcome


# ---------- OUT ----------

class FeedVideoOut(BaseModel):
    id: int
    title: str
    description: str
    categories: List[str]
    video_url: str
    external_link: Optional[str] = None
    likes: int

    model_config = {"from_attributes": True}


class SurfaceOut(BaseModel):
    video_id: int
    phase: str
    playing: bool
    muted: bool
    fullscreen: bool
    expanded: bool
    position: float
    duration: Optional[float] = None


class FeedStateOut(BaseModel):
    id: str
    device_id: str
    video: Optional[FeedVideoOut] = None
    index: int
    count: int
    catalog_size: int
    active_category: Optional[str] = None
    categories: List[str]
    loop_notice: bool = PydField(..., description="Notification 'boucle terminée' visible")
    muted: bool
    surface: Optional[SurfaceOut] = None
    is_loading: bool
    like_pending: bool
    last_error: Optional[str] = PydField(None, description="fetch_failure | parse_failure | None")


class LikeOut(BaseModel):
    outcome: LikeOutcome
    video_id: Optional[int] = None
    likes: Optional[int] = None


class SurfaceEventOut(BaseModel):
    effect: SurfaceEffect
    state: FeedStateOut


class CategoriesOut(BaseModel):
    items: List[str]


# ---------- IN ----------

class CategorySelectIn(BaseModel):
    name: str = PydField(..., description="Catégorie à (dé)sélectionner", examples=["Food"])


class SurfaceEventIn(BaseModel):
    kind: SurfaceEventKind
    value: float = PydField(0.0, description="dx / dy du geste, ou position en secondes")
