"""
➡️ But : assembler toutes les pièces du puzzle.

Crée l’instance FastAPI (app).

Configure :

logs structurés (structlog)

CORS (autorisations de qui peut appeler ces API)

titre, version, tags

schéma OpenAPI personnalisé

Inclut les routers (/api/v1/feed, /api/v1/admin/videos).

Initialise la base au démarrage.

🔹 Point unique d’exécution : uvicorn app.main:app --reload.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.logging import get_logger, setup_logging
from app.core.openapi import custom_openapi
from app.db.session import init_db

from app.api.v1.routers import feed, content

import uvicorn

setup_logging(settings.LOG_LEVEL, json_output=bool(settings.LOG_JSON))
logger = get_logger(__name__)


app = FastAPI(
    title=settings.APP_NAME,
    version="0.0.1",
    openapi_tags=[
        {"name": "feed", "description": "Feed 'Inspire Me' : catégories, navigation, likes, lecture"},
        {"name": "content", "description": "Gestion du contenu (admin)"},
    ],
)

# CORS (ajustez selon vos besoins)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], allow_credentials=True,
    allow_methods=["*"], allow_headers=["*"],
)

# Routers
app.include_router(feed.router, prefix="/api/v1")
app.include_router(content.router, prefix="/api/v1")

# Génération du schéma OpenAPI custom
app.openapi = lambda: custom_openapi(app)

# Démarrage
@app.on_event("startup")
def on_startup():
    init_db()
    logger.info("startup", app=settings.APP_NAME, env=settings.ENV)

if __name__ == "__main__":
    uvicorn.run(app, host="127.0.0.1", port=8080, reload=(settings.ENV == "dev")) # http://localhost:8080
