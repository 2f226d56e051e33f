from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional


class LocalKeyStore:
    # # Persistent key/value store on local disk, read as a flat JSON object
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, Any]:
        # # Missing, unreadable or corrupt stores all read as empty
        try:
            raw = self._path.read_text(encoding="utf-8")
            data = json.loads(raw) if raw.strip() else {}
        except (OSError, json.JSONDecodeError):
            return {}
        if not isinstance(data, dict):
            return {}
        return data

    def get_item(self, key: str) -> Optional[str]:
        # # Return the stored string for a key, None when absent or blank
        value = self._load().get(key)
        if value is None:
            return None
        value = str(value).strip()
        return value or None
