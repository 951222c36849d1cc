"""Device-state synchronization core."""

from .catalog import CatalogCache
from .dispatcher import CommandDispatcher
from .fade import FadeAnimator, FadeTask
from .manager import TardisManager
from .playback import PlaybackState
from .section_store import SectionStateStore
from .tasks import TaskTracker

__all__ = [
    "CatalogCache",
    "CommandDispatcher",
    "FadeAnimator",
    "FadeTask",
    "PlaybackState",
    "SectionStateStore",
    "TardisManager",
    "TaskTracker",
]
