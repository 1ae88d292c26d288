"""Workout engine exceptions."""


class WorkoutEngineError(RuntimeError):
    """Base exception for the workout engine."""
    pass


class SessionStateError(WorkoutEngineError):
    """Raised when an operation is not valid in the session's current phase."""
    pass


class StorageError(WorkoutEngineError):
    """Raised by a store when it cannot read or write its backing data."""

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key
