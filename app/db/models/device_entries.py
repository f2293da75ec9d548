from sqlmodel import Field
from sqlalchemy import UniqueConstraint

from .base import BaseModelDB


class DeviceEntry(BaseModelDB, table=True):
    """Store clé/valeur propre à un appareil (ex: 'likedVideos' -> '[1, 5]')."""

    __table_args__ = (UniqueConstraint("device_id", "key", name="uq_device_entry_device_key"),)

    device_id: str = Field(index=True, description="Identifiant opaque de l'appareil (header X-Device-Id)")
    key: str = Field(description="Nom de la clé")
    value: str = Field(default="", description="Valeur sérialisée")
