from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from workout_engine.config import get_settings
from workout_engine.exceptions import StorageError

logger = logging.getLogger(__name__)

WEIGHTS_KEY = "exercise_weights"
TARGET_REPS_KEY = "exercise_target_reps"
HISTORY_KEY = "workout_history"


class JsonFileStore:
    """Targets and history kept in a single JSON document on disk."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path or get_settings().STORE_PATH)

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Could not read store at {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Store at {self.path} is not a JSON object")
        return data

    def _save(self, data: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            with tmp.open("w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            tmp.replace(self.path)
        except OSError as e:
            raise StorageError(f"Could not write store at {self.path}: {e}") from e

    def _get(self, key: str, exercise_name: str) -> Any:
        return self._load().get(key, {}).get(exercise_name)

    def _set(self, key: str, exercise_name: str, value: Any) -> None:
        data = self._load()
        bucket = data.setdefault(key, {})
        if value is None:
            bucket.pop(exercise_name, None)
        else:
            bucket[exercise_name] = value
        self._save(data)
        logger.debug("Stored %s[%s] = %s", key, exercise_name, value)

    def get_target_weight(self, exercise_name: str) -> Optional[float]:
        return self._get(WEIGHTS_KEY, exercise_name)

    def set_target_weight(self, exercise_name: str, weight: Optional[float]) -> None:
        self._set(WEIGHTS_KEY, exercise_name, weight)

    def get_target_reps(self, exercise_name: str) -> Optional[int]:
        return self._get(TARGET_REPS_KEY, exercise_name)

    def set_target_reps(self, exercise_name: str, reps: Optional[int]) -> None:
        self._set(TARGET_REPS_KEY, exercise_name, reps)

    def get_history(self) -> List[Dict[str, Any]]:
        return list(self._load().get(HISTORY_KEY, []))

    def append_history(self, summary: Dict[str, Any]) -> None:
        data = self._load()
        data.setdefault(HISTORY_KEY, []).insert(0, summary)
        self._save(data)
