import random
import time
from typing import Callable, List, Optional, Sequence

from app.features.feed.catalog import FeedVideo


class LoopNotice:
    """
    Notification transitoire "boucle terminée".
    Visible `duration` secondes ; un nouveau déclenchement pendant l'affichage est ignoré.
    """

    def __init__(self, duration: float = 3.0, clock: Callable[[], float] = time.monotonic):
        self.duration = duration
        self._clock = clock
        self._visible_until: Optional[float] = None
        self.fired = 0

    def is_visible(self) -> bool:
        if self._visible_until is None:
            return False
        if self._clock() >= self._visible_until:
            self._visible_until = None
            return False
        return True

    def trigger(self) -> bool:
        """Retourne True si la notification a effectivement été émise."""
        if self.is_visible():
            return False
        self._visible_until = self._clock() + self.duration
        self.fired += 1
        return True


class FeedCursor:
    """Index courant dans la liste filtrée ; avance de manière cyclique."""

    def __init__(
        self,
        videos: Sequence[FeedVideo] = (),
        *,
        notice: Optional[LoopNotice] = None,
        rng: Optional[random.Random] = None,
    ):
        self.videos: List[FeedVideo] = list(videos)
        self.index = 0
        self.notice = notice or LoopNotice()
        self._rng = rng or random.Random()

    def rebind(self, videos: Sequence[FeedVideo]) -> None:
        """Nouvelle liste de travail : l'index repart à 0."""
        self.videos = list(videos)
        self.index = 0

    def __len__(self) -> int:
        return len(self.videos)

    def current(self) -> Optional[FeedVideo]:
        if not self.videos:
            return None
        return self.videos[self.index]

    def advance(self) -> bool:
        """
        Passe à la vidéo suivante.
        Retourne True si la notification de fin de boucle a été émise.
        """
        if not self.videos:
            return False
        self.index = (self.index + 1) % len(self.videos)
        if self.index == 0:
            return self.notice.trigger()
        return False

    def jump_random(self) -> None:
        if not self.videos:
            return
        self.index = self._rng.randrange(len(self.videos))
