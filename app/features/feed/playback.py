"""
➡️ But : État transitoire de la surface de lecture d'UNE vidéo.

Machine à états pilotée par des événements énumérés (indépendante de tout toolkit UI) :

    loading --media_ready--> ready

Drapeaux orthogonaux : playing/paused, muted, fullscreen, expanded.
Gestes : glisser le panneau d'infos (seuil 50) ; relâcher un swipe horizontal
au-delà de -100 déclenche l'animation de sortie puis l'avance du feed.

Une surface est recréée à chaque changement de vidéo ; seule la préférence
`muted` est transmise par l'appelant.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

PANEL_DRAG_THRESHOLD = 50.0
SWIPE_ADVANCE_THRESHOLD = -100.0


class SurfacePhase(str, Enum):
    LOADING = "loading"
    READY = "ready"
    SWIPING_OUT = "swiping_out"


class SurfaceEventKind(str, Enum):
    MEDIA_READY = "media_ready"
    TOGGLE_PLAY = "toggle_play"
    TOGGLE_MUTE = "toggle_mute"
    TOGGLE_FULLSCREEN = "toggle_fullscreen"
    FULLSCREEN_EXITED = "fullscreen_exited"
    MEDIA_PLAYED = "media_played"
    MEDIA_PAUSED = "media_paused"
    TIME_UPDATE = "time_update"
    DURATION_KNOWN = "duration_known"
    SEEK = "seek"
    PANEL_DRAG = "panel_drag"
    SWIPE_RELEASE = "swipe_release"
    EXIT_ANIMATION_DONE = "exit_animation_done"


class SurfaceEffect(str, Enum):
    NONE = "none"
    EXIT_ANIMATION = "exit_animation"
    SNAP_BACK = "snap_back"
    ADVANCE = "advance"


@dataclass(frozen=True)
class SurfaceEvent:
    kind: SurfaceEventKind
    value: float = 0.0


# Commandes de transport inactives tant que le média n'est pas prêt
_TRANSPORT = {
    SurfaceEventKind.TOGGLE_PLAY,
    SurfaceEventKind.TOGGLE_MUTE,
    SurfaceEventKind.TOGGLE_FULLSCREEN,
    SurfaceEventKind.SEEK,
}


class PlaybackSurface:
    def __init__(self, video_id: int, *, muted: bool = True):
        self.video_id = video_id
        self.phase = SurfacePhase.LOADING
        self.playing = True  # autoplay
        self.muted = muted
        self.fullscreen = False
        self.expanded = False
        self.position = 0.0
        self.duration: Optional[float] = None

    @property
    def ready(self) -> bool:
        return self.phase is not SurfacePhase.LOADING

    def handle(self, event: SurfaceEvent) -> SurfaceEffect:
        kind = event.kind

        if self.phase is SurfacePhase.SWIPING_OUT:
            # la surface est en train de sortir : seule la fin d'animation compte
            if kind is SurfaceEventKind.EXIT_ANIMATION_DONE:
                return SurfaceEffect.ADVANCE
            return SurfaceEffect.NONE

        if kind is SurfaceEventKind.MEDIA_READY:
            self.phase = SurfacePhase.READY
            return SurfaceEffect.NONE

        if kind in _TRANSPORT and not self.ready:
            return SurfaceEffect.NONE

        if kind is SurfaceEventKind.TOGGLE_PLAY:
            self.playing = not self.playing
        elif kind is SurfaceEventKind.TOGGLE_MUTE:
            self.muted = not self.muted
        elif kind is SurfaceEventKind.TOGGLE_FULLSCREEN:
            self.fullscreen = not self.fullscreen
        elif kind is SurfaceEventKind.FULLSCREEN_EXITED:
            self.fullscreen = False
        elif kind is SurfaceEventKind.MEDIA_PLAYED:
            self.playing = True
        elif kind is SurfaceEventKind.MEDIA_PAUSED:
            self.playing = False
        elif kind is SurfaceEventKind.TIME_UPDATE:
            self.position = max(0.0, event.value)
        elif kind is SurfaceEventKind.DURATION_KNOWN:
            self.duration = max(0.0, event.value)
        elif kind is SurfaceEventKind.SEEK:
            self.position = self._clamp_position(event.value)
        elif kind is SurfaceEventKind.PANEL_DRAG:
            self._on_panel_drag(event.value)
        elif kind is SurfaceEventKind.SWIPE_RELEASE:
            return self._on_swipe_release(event.value)
        return SurfaceEffect.NONE

    def _clamp_position(self, seconds: float) -> float:
        upper = self.duration if self.duration is not None else seconds
        return min(max(0.0, seconds), max(0.0, upper))

    def _on_panel_drag(self, dy: float) -> None:
        # vers le haut (dy négatif) : ouvre ; vers le bas : ferme
        if dy < -PANEL_DRAG_THRESHOLD and not self.expanded:
            self.expanded = True
        elif dy > PANEL_DRAG_THRESHOLD and self.expanded:
            self.expanded = False

    def _on_swipe_release(self, dx: float) -> SurfaceEffect:
        if dx < SWIPE_ADVANCE_THRESHOLD:
            self.phase = SurfacePhase.SWIPING_OUT
            return SurfaceEffect.EXIT_ANIMATION
        return SurfaceEffect.SNAP_BACK

    def snapshot(self) -> dict:
        return {
            "video_id": self.video_id,
            "phase": self.phase.value,
            "playing": self.playing,
            "muted": self.muted,
            "fullscreen": self.fullscreen,
            "expanded": self.expanded,
            "position": self.position,
            "duration": self.duration,
        }
