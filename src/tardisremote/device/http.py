"""aiohttp implementation of the DeviceAPI protocol."""

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import aiohttp
from pydantic import TypeAdapter, ValidationError

from tardisremote.device.schemas import (
    SCENE_LIST,
    SECTION_LIST,
    SOUND_LIST,
    SectionRequest,
    SetColorRequest,
)
from tardisremote.exceptions import (
    DecodeFailed,
    RemoteCommandFailed,
    RemoteFetchFailed,
    wrap_transport_error,
)
from tardisremote.models import AnimatedScene, AudioFile, CatalogKind, Color, LEDSection, SectionInfo

logger = logging.getLogger(__name__)

# Endpoint paths on the controller
SECTIONS_PATH = "/api/led/sections"
COLOR_PATH = "/api/led/color"
ON_PATH = "/api/led/on"
OFF_PATH = "/api/led/off"
SOUNDS_PATH = "/api/audio/sounds"
PLAY_SOUND_PATH = "/api/audio/play/{file_name}"
STOP_SOUND_PATH = "/api/audio/stop"
SCENES_PATH = "/api/scenes"
PLAY_SCENE_PATH = "/api/scenes/{name}/play"

# Longest error body kept in exception messages
_MAX_DETAIL = 200


class HttpDeviceAPI:
    """
    REST client for the TARDIS controller.

    One aiohttp ClientSession is shared by all calls and created lazily on
    first use, so the object can be constructed outside the event loop.
    Any HTTP status >= 400 is a failure; the status is recorded on the
    exception but not otherwise interpreted.

    Usage:
        async with HttpDeviceAPI("http://192.168.1.161") as api:
            sections = await api.list_sections()
            await api.set_color(LEDSection.TOP_LIGHT, Color(r=0, g=0, b=255))
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        session: aiohttp.ClientSession | None = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Controller base URL (e.g. http://192.168.1.161)
            timeout: Total timeout per request in seconds
            session: Optional externally owned session (not closed by close())
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    @property
    def base_url(self) -> str:
        return self._base_url

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
            logger.debug(f"Closed HTTP session for {self._base_url}")
        self._session = None

    async def __aenter__(self) -> "HttpDeviceAPI":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    # =================================================================
    # Catalog
    # =================================================================

    async def list_sections(self) -> list[SectionInfo]:
        payload = await self._get_json(SECTIONS_PATH, CatalogKind.SECTIONS)
        return self._decode(SECTION_LIST, payload, "list_sections")

    async def list_sounds(self) -> list[AudioFile]:
        payload = await self._get_json(SOUNDS_PATH, CatalogKind.SOUNDS)
        return self._decode(SOUND_LIST, payload, "list_sounds")

    async def list_scenes(self) -> list[AnimatedScene]:
        payload = await self._get_json(SCENES_PATH, CatalogKind.SCENES)
        return self._decode(SCENE_LIST, payload, "list_scenes")

    # =================================================================
    # Commands
    # =================================================================

    async def set_color(self, section: LEDSection, color: Color) -> None:
        body = SetColorRequest.build(section, color)
        await self._post(COLOR_PATH, "set_color", section.value, body.model_dump())

    async def turn_on(self, section: LEDSection | None = None) -> None:
        body = SectionRequest.build(section)
        await self._post(ON_PATH, "turn_on", body.section, body.to_json())

    async def turn_off(self, section: LEDSection | None = None) -> None:
        body = SectionRequest.build(section)
        await self._post(OFF_PATH, "turn_off", body.section, body.to_json())

    async def play_sound(self, file_name: str) -> None:
        path = PLAY_SOUND_PATH.format(file_name=quote(file_name, safe=""))
        await self._post(path, "play_sound", file_name)

    async def stop_sound(self) -> None:
        await self._post(STOP_SOUND_PATH, "stop_sound")

    async def play_scene(self, name: str) -> None:
        path = PLAY_SCENE_PATH.format(name=quote(name, safe=""))
        await self._post(path, "play_scene", name)

    # =================================================================
    # Low-level helpers
    # =================================================================

    async def _get_json(self, path: str, kind: CatalogKind) -> Any:
        operation = f"list_{kind.value}"
        url = self._base_url + path
        session = self._ensure_session()
        logger.debug(f"GET {url}")

        try:
            async with session.get(url) as response:
                if response.status >= 400:
                    detail = (await response.text(errors="replace"))[:_MAX_DETAIL]
                    raise RemoteFetchFailed(
                        kind.value, status=response.status, original_error=detail or response.reason
                    )
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise DecodeFailed(operation, f"response is not valid JSON: {e}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise wrap_transport_error(e, operation, kind=kind.value) from e

    async def _post(
        self,
        path: str,
        operation: str,
        target: str | None = None,
        body: dict | None = None,
    ) -> None:
        url = self._base_url + path
        session = self._ensure_session()
        logger.debug(f"POST {url} body={body}")

        try:
            async with session.post(url, json=body) as response:
                if response.status >= 400:
                    detail = (await response.text(errors="replace"))[:_MAX_DETAIL]
                    raise RemoteCommandFailed(
                        operation,
                        target=target,
                        status=response.status,
                        original_error=detail or response.reason,
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise wrap_transport_error(e, operation, target=target) from e

    @staticmethod
    def _decode(adapter: TypeAdapter, payload: Any, operation: str) -> list:
        try:
            return adapter.validate_python(payload)
        except ValidationError as e:
            raise DecodeFailed(operation, str(e)) from e
