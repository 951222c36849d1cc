"""Fetch-once cache of the device catalog (sections, sounds, scenes)."""

import asyncio
import logging

from tardisremote.device.protocols import DeviceAPI
from tardisremote.exceptions import RemoteError, wrap_transport_error
from tardisremote.models import AnimatedScene, AudioFile, CatalogKind, SectionInfo
from tardisremote.protocols import CatalogEvent, CatalogObserver
from tardisremote.utils import ObserverManager

logger = logging.getLogger(__name__)


class CatalogCache:
    """
    Lazily populated catalog of what the device offers.

    Each collection is fetched at most once: a fetch is a no-op while the
    collection is non-empty. A failed fetch leaves the collection empty and
    is not retried automatically; calling the fetch again (e.g. from a
    pull-to-refresh) re-attempts it. A successful fetch that returns an
    empty list also leaves the collection empty, so it too is re-attempted
    on the next call.

    Concurrent fetches of the same collection share one in-flight request
    (single-flight), so racing callers never issue duplicate remote calls.

    Errors never propagate out of the fetch methods. They are logged,
    kept in last_error(), and broadcast as CatalogEvent.FETCH_FAILED.
    """

    def __init__(self, api: DeviceAPI) -> None:
        """
        Initialize an empty catalog.

        Args:
            api: Device transport used for the list calls
        """
        self._api = api
        self._items: dict[CatalogKind, tuple] = {kind: () for kind in CatalogKind}
        self._errors: dict[CatalogKind, RemoteError | None] = {kind: None for kind in CatalogKind}
        self._pending: dict[CatalogKind, asyncio.Task] = {}
        self._observers = ObserverManager[CatalogObserver](observer_type_name="catalog")

    def register_observer(self, observer: CatalogObserver) -> None:
        """Register an observer to receive catalog events."""
        self._observers.register(observer)

    def unregister_observer(self, observer: CatalogObserver) -> None:
        """Unregister an observer."""
        self._observers.unregister(observer)

    # =================================================================
    # Read accessors
    # =================================================================

    @property
    def sections(self) -> tuple[SectionInfo, ...]:
        return self._items[CatalogKind.SECTIONS]

    @property
    def sounds(self) -> tuple[AudioFile, ...]:
        return self._items[CatalogKind.SOUNDS]

    @property
    def scenes(self) -> tuple[AnimatedScene, ...]:
        return self._items[CatalogKind.SCENES]

    def items(self, kind: CatalogKind) -> tuple:
        """Current contents of one collection."""
        return self._items[kind]

    def is_loaded(self, kind: CatalogKind) -> bool:
        """True once the collection holds at least one record."""
        return bool(self._items[kind])

    def last_error(self, kind: CatalogKind) -> RemoteError | None:
        """Error from the most recent failed fetch, cleared by a successful one."""
        return self._errors[kind]

    # =================================================================
    # Fetching
    # =================================================================

    async def fetch_sections(self) -> tuple[SectionInfo, ...]:
        return await self.fetch(CatalogKind.SECTIONS)

    async def fetch_sounds(self) -> tuple[AudioFile, ...]:
        return await self.fetch(CatalogKind.SOUNDS)

    async def fetch_scenes(self) -> tuple[AnimatedScene, ...]:
        return await self.fetch(CatalogKind.SCENES)

    async def fetch_all(self) -> None:
        """Fetch all three collections concurrently."""
        await asyncio.gather(*(self.fetch(kind) for kind in CatalogKind))

    async def fetch(self, kind: CatalogKind) -> tuple:
        """
        Fetch one collection unless it is already populated.

        Returns:
            The collection after the fetch (possibly still empty on failure)
        """
        if self._items[kind]:
            logger.debug(f"Skipping {kind.value} fetch: already loaded")
            return self._items[kind]

        pending = self._pending.get(kind)
        if pending is None:
            pending = asyncio.create_task(self._load(kind), name=f"catalog-{kind.value}")
            self._pending[kind] = pending
            pending.add_done_callback(lambda task, k=kind: self._forget_pending(k, task))
        else:
            logger.debug(f"Joining in-flight {kind.value} fetch")

        # Shield so one caller being cancelled does not abort the shared fetch
        return await asyncio.shield(pending)

    async def refresh(self, kind: CatalogKind) -> tuple:
        """Drop one collection and fetch it again."""
        self.invalidate(kind)
        return await self.fetch(kind)

    def invalidate(self, kind: CatalogKind | None = None) -> None:
        """
        Clear one collection (or all of them) so the next fetch hits the device.

        Args:
            kind: Collection to clear, or None for every collection
        """
        kinds = list(CatalogKind) if kind is None else [kind]
        for k in kinds:
            self._items[k] = ()
            logger.debug(f"Invalidated {k.value}")
            self._observers.notify("on_catalog_event", CatalogEvent.INVALIDATED, k)

    def _forget_pending(self, kind: CatalogKind, task: asyncio.Task) -> None:
        if self._pending.get(kind) is task:
            del self._pending[kind]

    async def _load(self, kind: CatalogKind) -> tuple:
        loaders = {
            CatalogKind.SECTIONS: self._api.list_sections,
            CatalogKind.SOUNDS: self._api.list_sounds,
            CatalogKind.SCENES: self._api.list_scenes,
        }

        try:
            fetched = await loaders[kind]()
        except RemoteError as e:
            logger.warning(f"Failed to fetch {kind.value}: {e.technical_message}")
            self._record_failure(kind, e)
            return self._items[kind]
        except Exception as e:
            logger.error(f"Unexpected error fetching {kind.value}: {e}", exc_info=True)
            self._record_failure(kind, wrap_transport_error(e, f"list_{kind.value}", kind=kind.value))
            return self._items[kind]

        self._items[kind] = tuple(fetched)
        self._errors[kind] = None
        logger.info(f"Loaded {len(self._items[kind])} {kind.value} from device")
        self._observers.notify("on_catalog_event", CatalogEvent.LOADED, kind)
        return self._items[kind]

    def _record_failure(self, kind: CatalogKind, error: RemoteError) -> None:
        self._errors[kind] = error
        self._observers.notify("on_catalog_event", CatalogEvent.FETCH_FAILED, kind)
