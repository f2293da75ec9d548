"""
➡️ But : Centraliser tous les paramètres configurables (nom d’app, chemin DB, stockage, secrets, etc.)

Utilise pydantic-settings pour charger automatiquement les variables d’environnement (.env, variables système…).

Fournit un objet settings unique, que tu importes ailleurs :

from app.core.config import settings
print(settings.APP_NAME)


🔹 Avantages :

Plus propre que des constantes éparpillées dans le code.

Facilite le passage entre environnements (dev / prod / test).
"""

from typing import Optional

from pydantic_settings import BaseSettings
from app.security.tokens import JWTSettings


class Settings(BaseSettings):
    # -----------------------------
    # App
    # -----------------------------
    APP_NAME: str = "Inspire-Feed"
    ENV: str = "dev"  # dev | prod | test

    # -----------------------------
    # Logs
    # -----------------------------
    LOG_LEVEL: str = "INFO"
    LOG_JSON: Optional[bool] = None  # auto selon ENV si None

    # -----------------------------
    # DB (store des vidéos + store local par appareil)
    # -----------------------------
    SQLITE_PATH: str = "app.db"  # fichier SQLite
    # Si tu veux forcer une URL différente (ex: Postgres), définis DATABASE_URL dans l'env.
    DATABASE_URL: Optional[str] = None
    STORE_TIMEOUT_SECONDS: float = 5.0  # au-delà, la requête est traitée comme un échec

    # -----------------------------
    # Stockage objet (S3 / MinIO / Supabase storage)
    # -----------------------------
    S3_ENDPOINT: str = "http://localhost:9000"
    S3_REGION: str = "eu-central-1"
    S3_KEY: str = "minioadmin"
    S3_SECRET: str = "minioadmin"
    S3_BUCKET: str = "videos"
    # Base publique pour la lecture : <base>/<file_name>
    STORAGE_PUBLIC_BASE_URL: str = "http://localhost:9000/videos"

    # -----------------------------
    # JWT (jetons émis par le fournisseur d'identité)
    # -----------------------------
    JWT_SECRET_KEY: str = "CHANGE_ME"     # ⚠️ change en prod
    JWT_ALGORITHM: str = "HS256"
    ADMIN_ROLE: str = "admin"

    # -----------------------------
    # Feed
    # -----------------------------
    LOOP_NOTICE_SECONDS: float = 3.0        # durée d'affichage du message "boucle terminée"
    FEED_SESSION_TTL_SECONDS: int = 60 * 60  # sessions inactives purgées après 1h

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    # -----------------------------
    # Post-process values
    # -----------------------------
    def model_post_init(self, __context): # appelée automatiquement
        # DATABASE_URL par défaut depuis SQLITE_PATH si non fourni
        if not self.DATABASE_URL:
            object.__setattr__(self, "DATABASE_URL", f"sqlite:///{self.SQLITE_PATH}")

        # Logs JSON auto: true en prod si non spécifié
        if self.LOG_JSON is None:
            object.__setattr__(self, "LOG_JSON", self.ENV == "prod")


# Instance globale importable partout
settings = Settings()

# Objet JWT prêt à l'emploi pour la vérification des jetons admin
jwt_settings = JWTSettings(
    secret=settings.JWT_SECRET_KEY,
    algorithm=settings.JWT_ALGORITHM,
    admin_role=settings.ADMIN_ROLE,
)
