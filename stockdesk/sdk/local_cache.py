from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from platformdirs import user_data_dir

CURRENT_USER_KEY = "currentUser"
USERS_KEY = "users"
AUTH_TOKEN_KEY = "authToken"
ALERT_SETTINGS_KEY = "alertSettings"


@dataclass
class LocalCache:
    """Durable key-value store backing the read-through fallbacks.

    Values are JSON documents kept in a single file. A corrupt file is
    discarded rather than raised, so a broken cache degrades to "no fallback".
    """

    app_name: str = "stockdesk"
    filename: str = "storage.json"
    base_dir: Path | None = None

    def _path(self) -> Path:
        base = Path(self.base_dir) if self.base_dir else Path(user_data_dir(self.app_name, "Stockdesk"))
        base.mkdir(parents=True, exist_ok=True)
        return base / self.filename

    def _read_all(self) -> dict[str, Any]:
        path = self._path()
        if not path.exists():
            return {}
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            self.clear()
            return {}
        return data if isinstance(data, dict) else {}

    def _write_all(self, data: dict[str, Any]) -> None:
        path = self._path()
        path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
        try:
            path.chmod(0o600)
        except OSError:
            pass

    def get(self, key: str, default: Any = None) -> Any:
        return self._read_all().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)

    def clear(self) -> None:
        path = self._path()
        if path.exists():
            path.unlink()
