from typing import List, Optional, Sequence

from app.features.feed.catalog import FeedVideo
from app.features.feed.cursor import FeedCursor


class CategoryFilter:
    """
    Filtre mono-catégorie, réversible : re-sélectionner la catégorie active l'annule.
    Correspondance exacte et sensible à la casse (test d'appartenance).
    Chaque changement replace le curseur sur l'index 0.
    """

    def __init__(self, catalog: Sequence[FeedVideo], cursor: FeedCursor):
        self.catalog: List[FeedVideo] = list(catalog)
        self.cursor = cursor
        self.active: Optional[str] = None
        self.filtered: List[FeedVideo] = list(self.catalog)
        self.cursor.rebind(self.filtered)

    def set_catalog(self, catalog: Sequence[FeedVideo]) -> None:
        self.catalog = list(catalog)
        self.reset()

    def select(self, name: str) -> List[FeedVideo]:
        if name == self.active:
            return self.reset()
        self.active = name
        self.filtered = [v for v in self.catalog if name in v.categories]
        self.cursor.rebind(self.filtered)
        return self.filtered

    def reset(self) -> List[FeedVideo]:
        self.active = None
        self.filtered = list(self.catalog)
        self.cursor.rebind(self.filtered)
        return self.filtered
