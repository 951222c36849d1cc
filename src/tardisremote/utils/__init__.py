"""Generic utility modules for tardisremote.

- observer: thread-safe observer list with isolated callback errors
- persistence: JSON load/save for Pydantic models (atomic, with backups)
"""

from .observer import ObserverManager
from .persistence import PydanticPersistence

__all__ = ["ObserverManager", "PydanticPersistence"]
