import json
from pathlib import Path
from typing import Any, Dict, List

import yaml
from sqlmodel import Session

from app.core.logging import get_logger
from app.db.repositories.videos import VideoRepository

logger = get_logger(__name__)


# -----------------------------
# YAML loader
# -----------------------------
def load_seed_yaml(seed_path: str | Path) -> Dict[str, Any]:
    path = Path(seed_path)
    if not path.exists():
        raise FileNotFoundError(f"Seed YAML introuvable: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Le YAML de seed doit contenir un objet racine (mapping).")
    return data


# -----------------------------
# Seeders
# -----------------------------
def seed_videos(session: Session, videos_yaml: List[Dict[str, Any]]) -> int:
    """
    Insère les vidéos absentes (clé : file_name). Les fichiers doivent déjà
    être présents dans le bucket ; seul le référencement est fait ici.
    """
    repo = VideoRepository(session)
    created = 0
    for v in videos_yaml:
        if repo.get_by_file_name(v["file_name"]):
            continue
        categories = v.get("categories") or []
        if not isinstance(categories, list):
            raise ValueError(f"categories doit être une liste ({v['file_name']})")
        repo.create(
            commit=False,
            file_name=v["file_name"],
            title=v["title"],
            description=v.get("description", ""),
            categories=json.dumps(categories),
            external_link=v.get("external_link"),
            likes=int(v.get("likes", 0)),
        )
        created += 1
    session.commit()
    return created


def seed_all(*, session: Session, seed_path: str | Path) -> Dict[str, int]:
    data = load_seed_yaml(seed_path)
    created = seed_videos(session, data.get("videos", []))
    logger.info("seed_done", videos=created, path=str(seed_path))
    return {"videos": created}
