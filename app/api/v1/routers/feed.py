from fastapi import APIRouter, Depends, status

from app.api.v1.dependencies import (
    get_device_id,
    get_feed_service,
    get_like_tracker,
)
from app.features.feed.likes import LikeTracker
from app.features.feed.schemas import (
    CategoriesOut,
    CategorySelectIn,
    FeedStateOut,
    LikeOut,
    SurfaceEventIn,
    SurfaceEventOut,
)
from app.features.feed.services import FeedService

router = APIRouter(
    prefix="/feed",
    tags=["feed"],
    responses={404: {"description": "Not Found"}},
)

@router.post(
    "/sessions",
    summary="Ouvrir une session de feed (chargement du catalogue)",
    description="Charge toutes les vidéos ; en cas d'échec du store, la session est vide et `last_error` est renseigné.",
    status_code=status.HTTP_201_CREATED,
    response_model=FeedStateOut,
)
def open_session(
    device_id: str = Depends(get_device_id),
    feed_svc: FeedService = Depends(get_feed_service),
):
    return feed_svc.open(device_id)

@router.get("/sessions/{session_id}", summary="État courant du feed", response_model=FeedStateOut)
def get_state(session_id: str, feed_svc: FeedService = Depends(get_feed_service)):
    return feed_svc.state(feed_svc.get(session_id))

@router.delete(
    "/sessions/{session_id}",
    summary="Fermer une session de feed",
    status_code=status.HTTP_204_NO_CONTENT,
)
def close_session(session_id: str, feed_svc: FeedService = Depends(get_feed_service)):
    feed_svc.close(session_id)
    return None

@router.post("/sessions/{session_id}/reload", summary="Recharger le catalogue", response_model=FeedStateOut)
def reload_catalog(session_id: str, feed_svc: FeedService = Depends(get_feed_service)):
    return feed_svc.reload(session_id)

@router.post(
    "/sessions/{session_id}/category",
    summary="Sélectionner / désélectionner une catégorie",
    description="Re-sélectionner la catégorie active retire le filtre. L'index repart à 0.",
    response_model=FeedStateOut,
)
def select_category(
    session_id: str,
    payload: CategorySelectIn,
    feed_svc: FeedService = Depends(get_feed_service),
):
    return feed_svc.select_category(session_id, payload.name)

@router.post("/sessions/{session_id}/category/reset", summary="Retirer le filtre", response_model=FeedStateOut)
def reset_category(session_id: str, feed_svc: FeedService = Depends(get_feed_service)):
    return feed_svc.reset_filter(session_id)

@router.post("/sessions/{session_id}/next", summary="Vidéo suivante (cyclique)", response_model=FeedStateOut)
def next_video(session_id: str, feed_svc: FeedService = Depends(get_feed_service)):
    return feed_svc.advance(session_id)

@router.post("/sessions/{session_id}/random", summary="Vidéo au hasard", response_model=FeedStateOut)
def random_video(session_id: str, feed_svc: FeedService = Depends(get_feed_service)):
    return feed_svc.jump_random(session_id)

@router.post(
    "/sessions/{session_id}/like",
    summary="Liker la vidéo courante",
    response_model=LikeOut,
    responses={
        409: {"description": "Aucune vidéo affichée"},
        502: {"description": "Le store a refusé l'écriture, rien n'a été modifié"},
    },
)
def like_current(
    session_id: str,
    feed_svc: FeedService = Depends(get_feed_service),
    tracker: LikeTracker = Depends(get_like_tracker),
):
    return feed_svc.like(session_id, tracker)

@router.post(
    "/sessions/{session_id}/surface/events",
    summary="Envoyer un événement à la surface de lecture",
    response_model=SurfaceEventOut,
)
def surface_event(
    session_id: str,
    payload: SurfaceEventIn,
    feed_svc: FeedService = Depends(get_feed_service),
):
    return feed_svc.surface_event(session_id, payload)

@router.get("/categories", summary="Catégories connues (ordre de première apparition)", response_model=CategoriesOut)
def list_categories(feed_svc: FeedService = Depends(get_feed_service)):
    return CategoriesOut(items=feed_svc.categories())
