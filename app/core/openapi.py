"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) modifie le schéma généré par FastAPI pour :

ajouter une description détaillée et les conventions de l'API du feed,

centraliser la personnalisation du Swagger.
"""

from fastapi.openapi.utils import get_openapi

def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "API du feed vidéo 'Inspire Me' (FastAPI + SQLModel + S3).\n\n"
            "### Conventions\n"
            "- Toutes les heures sont en UTC.\n"
            "- Le header `X-Device-Id` identifie l'appareil (dédoublonnage des likes).\n"
            "- Les routes `/admin` exigent un token Bearer portant le rôle admin.\n"
            "- Un échec du store n'interrompt jamais le feed : voir `last_error`.\n"
        ),
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
