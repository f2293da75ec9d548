from dataclasses import dataclass
from typing import Any, Dict, Optional, TypedDict

from jose import jwt, JWTError

# ==========================================================
# 🔧 Configuration : paramètres de validation JWT
# ==========================================================

@dataclass(frozen=True)
class JWTSettings:
    """
    Configuration des tokens JWT (émis par le fournisseur d'identité).

    - `secret` : clé secrète partagée pour valider les tokens
    - `algorithm` : algo de signature (HS256 recommandé)
    - `admin_role` : valeur du claim de rôle donnant accès à l'administration
    """
    secret: str
    algorithm: str = "HS256"
    admin_role: str = "admin"


# ==========================================================
# 🧱 Types
# ==========================================================

class DecodedToken(TypedDict, total=False):
    iss: str
    sub: str            # identifiant utilisateur
    email: str
    role: str           # rôle applicatif ("user" | "admin")
    app_metadata: Dict[str, Any]
    iat: int
    exp: int


# ==========================================================
# 🔍 Décodage / Validation
# ==========================================================

def decode_token(token: str, settings: JWTSettings) -> DecodedToken:
    """
    Décode et valide un token JWT (signature + expiration).
    Lève JWTError en cas de signature invalide ou expirée.
    """
    decoded = jwt.decode(
        token,
        settings.secret,
        algorithms=[settings.algorithm],
        options={"verify_aud": False},
    )
    return decoded  # type: ignore[return-value]


def role_of(claims: DecodedToken) -> Optional[str]:
    """
    Rôle applicatif porté par le token.
    Le claim `app_metadata.role` est prioritaire sur `role`
    (le `role` racine vaut souvent "authenticated" côté fournisseur).
    """
    app_meta = claims.get("app_metadata") or {}
    role = app_meta.get("role") if isinstance(app_meta, dict) else None
    return role or claims.get("role")


def is_admin(claims: DecodedToken, settings: JWTSettings) -> bool:
    return role_of(claims) == settings.admin_role


__all__ = ["JWTSettings", "DecodedToken", "decode_token", "role_of", "is_admin", "JWTError"]
