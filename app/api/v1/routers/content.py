from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status

from app.api.v1.dependencies import get_content_service, require_admin
from app.features.content.schemas import (
    VideoAdminListOut,
    VideoAdminOut,
    VideoCreateIn,
    VideoUpdateIn,
)
from app.features.content.services import ContentService

router = APIRouter(
    prefix="/admin/videos",
    tags=["content"],
    dependencies=[Depends(require_admin)],
    responses={
        401: {"description": "Non authentifié"},
        403: {"description": "Interdit"},
    },
)

@router.get("", summary="Lister / rechercher les vidéos", response_model=VideoAdminListOut)
def list_videos(
    q: Optional[str] = Query(None, description="Recherche dans le titre ou les catégories"),
    category: Optional[str] = Query(None, description="Catégorie exacte"),
    content_svc: ContentService = Depends(get_content_service),
):
    return content_svc.list(q=q, category=category)

@router.post(
    "",
    summary="Référencer une vidéo déjà présente dans le bucket",
    status_code=status.HTTP_201_CREATED,
    response_model=VideoAdminOut,
    responses={409: {"description": "Fichier déjà référencé"}},
)
def register_video(payload: VideoCreateIn, content_svc: ContentService = Depends(get_content_service)):
    return content_svc.register(payload)

@router.get("/{video_id}", summary="Détail d'une vidéo", response_model=VideoAdminOut)
def get_video(
    video_id: int = Path(..., ge=1),
    content_svc: ContentService = Depends(get_content_service),
):
    return content_svc.get(video_id)

@router.patch("/{video_id}", summary="Modifier les métadonnées", response_model=VideoAdminOut)
def update_video(
    payload: VideoUpdateIn,
    video_id: int = Path(..., ge=1),
    content_svc: ContentService = Depends(get_content_service),
):
    return content_svc.update(video_id, payload)

@router.delete(
    "/{video_id}",
    summary="Supprimer une vidéo (objet du bucket + ligne DB)",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        204: {"description": "Supprimée"},
        404: {"description": "Introuvable"},
        502: {"description": "Erreur stockage, la ligne est conservée"},
    },
)
def delete_video(
    video_id: int = Path(..., ge=1),
    content_svc: ContentService = Depends(get_content_service),
):
    content_svc.delete(video_id)
    return None
