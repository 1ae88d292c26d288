from .base import TargetStore
from .memory import InMemoryStore
from .json_file import JsonFileStore

__all__ = [
    "TargetStore",
    "InMemoryStore",
    "JsonFileStore",
]
