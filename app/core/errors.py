"""
➡️ But : Taxonomie des erreurs du feed.

LoadError      → échec du chargement du catalogue (FetchFailure, ParseFailure)
UpdateFailure  → écriture du compteur de likes refusée par le store

Ces exceptions sont levées par les composants du feed et capturées par la
FeedSession ; aucune ne doit remonter jusqu'au client sous forme de 500.
"""

from typing import Optional


class FeedError(Exception):
    """Base commune des erreurs du feed."""

    kind: str = "feed_error"

    def __init__(self, message: str, *, video_id: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.video_id = video_id


class LoadError(FeedError):
    kind = "load_error"


class FetchFailure(LoadError):
    """Store injoignable ou réponse en échec."""
    kind = "fetch_failure"


class ParseFailure(LoadError):
    """Liste de catégories stockée illisible : le catalogue entier est rejeté."""
    kind = "parse_failure"


class UpdateFailure(FeedError):
    kind = "update_failure"
