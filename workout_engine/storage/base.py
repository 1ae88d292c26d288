from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class TargetStore(Protocol):
    """Key-value collaborator holding per-exercise targets and session history."""

    def get_target_weight(self, exercise_name: str) -> Optional[float]: ...

    def set_target_weight(self, exercise_name: str, weight: Optional[float]) -> None: ...

    def get_target_reps(self, exercise_name: str) -> Optional[int]: ...

    def set_target_reps(self, exercise_name: str, reps: Optional[int]) -> None: ...

    def get_history(self) -> List[Dict[str, Any]]: ...

    def append_history(self, summary: Dict[str, Any]) -> None: ...
