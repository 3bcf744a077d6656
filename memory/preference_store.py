"""Per-user gender preference persistence."""

import json
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import quote

from models.garments import GenderPreference


@dataclass
class PreferenceRecord:
    user_id: str
    gender: str


class PreferenceStore(ABC):
    """Narrow interface the session reads and writes through."""

    @abstractmethod
    def get(self, user_id: str) -> Optional[GenderPreference]:
        """Return the stored preference, or ``None`` when never set."""

    @abstractmethod
    def set(self, user_id: str, gender: GenderPreference) -> None:
        ...


class InMemoryPreferenceStore(PreferenceStore):
    def __init__(self, initial: Optional[Dict[str, GenderPreference]] = None) -> None:
        self._preferences: Dict[str, GenderPreference] = dict(initial or {})

    def get(self, user_id: str) -> Optional[GenderPreference]:
        return self._preferences.get(user_id)

    def set(self, user_id: str, gender: GenderPreference) -> None:
        self._preferences[user_id] = GenderPreference.parse(gender)


class JSONPreferenceStore(PreferenceStore):
    """Simple JSON-backed store, one file per user."""

    def __init__(self, base_dir: str = "data/preferences") -> None:
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, user_id: str) -> Path:
        # Percent-encoded; distinct ids map to distinct files.
        return self.base_dir / f"{quote(user_id, safe='')}.json"

    def get(self, user_id: str) -> Optional[GenderPreference]:
        path = self._path(user_id)
        if not path.exists():
            return None
        data = json.loads(path.read_text())
        try:
            return GenderPreference.parse(data.get("gender"))
        except ValueError:
            return None

    def set(self, user_id: str, gender: GenderPreference) -> None:
        record = PreferenceRecord(user_id=user_id, gender=GenderPreference.parse(gender).value)
        self._path(user_id).write_text(json.dumps(asdict(record), indent=2))


__all__ = ["InMemoryPreferenceStore", "JSONPreferenceStore", "PreferenceRecord", "PreferenceStore"]
