from typing import Optional
from sqlmodel import select

from app.db.repositories.base import BaseRepository
from app.db.models.device_entries import DeviceEntry


class DeviceEntryRepository(BaseRepository[DeviceEntry]):
    """Store clé/valeur par appareil (équivalent serveur du stockage local du navigateur)."""
    model = DeviceEntry

    def get_entry(self, device_id: str, key: str) -> Optional[DeviceEntry]:
        return self.session.exec(
            select(self.model).where(self.model.device_id == device_id, self.model.key == key)
        ).first()

    def read(self, device_id: str, key: str) -> Optional[str]:
        entry = self.get_entry(device_id, key)
        return entry.value if entry else None

    def write(self, device_id: str, key: str, value: str, *, commit: bool = True) -> DeviceEntry:
        entry = self.get_entry(device_id, key)
        if entry is None:
            return self.create(commit=commit, device_id=device_id, key=key, value=value)
        return self.update(entry, commit=commit, value=value)
