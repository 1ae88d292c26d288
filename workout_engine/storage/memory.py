from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional


class InMemoryStore:
    def __init__(
        self,
        weights: Dict[str, float] | None = None,
        target_reps: Dict[str, int] | None = None,
        history: List[Dict[str, Any]] | None = None,
    ) -> None:
        self.weights: Dict[str, float] = dict(weights or {})
        self.target_reps: Dict[str, int] = dict(target_reps or {})
        self.history: List[Dict[str, Any]] = list(history or [])

    def get_target_weight(self, exercise_name: str) -> Optional[float]:
        return self.weights.get(exercise_name)

    def set_target_weight(self, exercise_name: str, weight: Optional[float]) -> None:
        if weight is None:
            self.weights.pop(exercise_name, None)
        else:
            self.weights[exercise_name] = weight

    def get_target_reps(self, exercise_name: str) -> Optional[int]:
        return self.target_reps.get(exercise_name)

    def set_target_reps(self, exercise_name: str, reps: Optional[int]) -> None:
        if reps is None:
            self.target_reps.pop(exercise_name, None)
        else:
            self.target_reps[exercise_name] = reps

    def get_history(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self.history)

    def append_history(self, summary: Dict[str, Any]) -> None:
        # newest first, like the original history list
        self.history.insert(0, copy.deepcopy(summary))
