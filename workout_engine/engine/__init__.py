from .session import SessionStateMachine, SetResult
from .timers import ElapsedTimer, RestTimer

__all__ = [
    "SessionStateMachine",
    "SetResult",
    "ElapsedTimer",
    "RestTimer",
]
