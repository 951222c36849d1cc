"""Tests for HttpDeviceAPI against an in-process fake controller."""

import asyncio
import contextlib

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from tardisremote.device import DeviceAPI, HttpDeviceAPI
from tardisremote.exceptions import DecodeFailed, RemoteCommandFailed, RemoteFetchFailed
from tardisremote.models import AudioFile, Color, LEDSection


class FakeController:
    """aiohttp application mimicking the TARDIS controller's REST API."""

    def __init__(self):
        self.requests: list[tuple[str, str, dict, object]] = []
        self.status = 200
        self.delay = 0.0
        self.error_body = b"controller error"
        self.payloads = {
            "sections": ["Top Light", {"name": "Front Windows", "description": "Four panes"}],
            "sounds": [{"friendlyName": "Cloister Bell", "fileName": "cloister bell.mp3"}],
            "scenes": [{"name": "Materialize", "description": "Landing"}],
        }

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/api/led/sections", self._listing("sections"))
        app.router.add_get("/api/audio/sounds", self._listing("sounds"))
        app.router.add_get("/api/scenes", self._listing("scenes"))
        app.router.add_post("/api/led/color", self._command)
        app.router.add_post("/api/led/on", self._command)
        app.router.add_post("/api/led/off", self._command)
        app.router.add_post("/api/audio/play/{file_name}", self._command)
        app.router.add_post("/api/audio/stop", self._command)
        app.router.add_post("/api/scenes/{name}/play", self._command)
        return app

    def _listing(self, kind: str):
        async def handler(request: web.Request) -> web.StreamResponse:
            self.requests.append((request.method, request.path, dict(request.match_info), None))
            if self.status >= 400:
                return web.Response(status=self.status, body=self.error_body)
            payload = self.payloads[kind]
            if isinstance(payload, str):
                return web.Response(text=payload, content_type="text/html")
            return web.json_response(payload)

        return handler

    async def _command(self, request: web.Request) -> web.StreamResponse:
        body = await request.json() if request.can_read_body else None
        self.requests.append((request.method, request.path, dict(request.match_info), body))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.status >= 400:
            return web.Response(status=self.status, body=self.error_body)
        return web.json_response({"success": True})


@pytest.fixture
def controller():
    return FakeController()


@contextlib.asynccontextmanager
async def connected(controller: FakeController, timeout: float = 5.0):
    async with TestServer(controller.app()) as server:
        async with HttpDeviceAPI(str(server.make_url("/")), timeout=timeout) as api:
            yield api


@pytest.mark.integration
@pytest.mark.asyncio
class TestCatalogRequests:
    """Test the list endpoints."""

    async def test_list_sections(self, controller):
        """Bare strings and objects both decode."""
        async with connected(controller) as api:
            sections = await api.list_sections()

        assert [s.name for s in sections] == ["Top Light", "Front Windows"]
        assert sections[1].description == "Four panes"
        assert sections[0].led_section is LEDSection.TOP_LIGHT
        assert controller.requests[0][:2] == ("GET", "/api/led/sections")

    async def test_list_sounds(self, controller):
        """Test camelCase sound records."""
        async with connected(controller) as api:
            sounds = await api.list_sounds()

        assert sounds == [AudioFile(friendly_name="Cloister Bell", file_name="cloister bell.mp3")]

    async def test_list_scenes(self, controller):
        """Test scene records."""
        async with connected(controller) as api:
            scenes = await api.list_scenes()

        assert scenes[0].name == "Materialize"
        assert controller.requests[0][:2] == ("GET", "/api/scenes")

    async def test_empty_list_is_valid(self, controller):
        """An empty list is a normal result."""
        controller.payloads["scenes"] = []
        async with connected(controller) as api:
            assert await api.list_scenes() == []

    async def test_server_error(self, controller):
        """HTTP 500 on a list call raises RemoteFetchFailed."""
        controller.status = 500
        async with connected(controller) as api:
            with pytest.raises(RemoteFetchFailed) as exc_info:
                await api.list_sounds()

        assert exc_info.value.status == 500
        assert exc_info.value.kind == "sounds"

    async def test_wrong_shape(self, controller):
        """A JSON payload of the wrong shape raises DecodeFailed."""
        controller.payloads["sounds"] = {"sounds": "nope"}
        async with connected(controller) as api:
            with pytest.raises(DecodeFailed):
                await api.list_sounds()

    async def test_not_json(self, controller):
        """A non-JSON body raises DecodeFailed."""
        controller.payloads["sections"] = "<html>maintenance</html>"
        async with connected(controller) as api:
            with pytest.raises(DecodeFailed):
                await api.list_sections()


@pytest.mark.integration
@pytest.mark.asyncio
class TestCommandRequests:
    """Test the command endpoints."""

    async def test_set_color(self, controller):
        """Test the color body."""
        async with connected(controller) as api:
            await api.set_color(LEDSection.FRONT_POLICE_SIGN, Color(r=0, g=128, b=255))

        method, path, _, body = controller.requests[0]
        assert (method, path) == ("POST", "/api/led/color")
        assert body == {"color": {"r": 0, "g": 128, "b": 255}, "section": "Front Police Sign"}

    async def test_set_color_rejects_all(self, controller):
        """ALL must be expanded before it reaches the transport."""
        async with connected(controller) as api:
            with pytest.raises(ValueError):
                await api.set_color(LEDSection.ALL, Color.off())

        assert controller.requests == []

    async def test_turn_on_section(self, controller):
        """Test a qualified turn-on."""
        async with connected(controller) as api:
            await api.turn_on(LEDSection.TOP_LIGHT)

        assert controller.requests[0][1] == "/api/led/on"
        assert controller.requests[0][3] == {"section": "Top Light"}

    @pytest.mark.parametrize("section", [None, LEDSection.ALL])
    async def test_turn_off_all_is_unqualified(self, controller, section):
        """None and ALL send an empty body."""
        async with connected(controller) as api:
            await api.turn_off(section)

        assert controller.requests[0][1] == "/api/led/off"
        assert controller.requests[0][3] == {}

    async def test_play_sound_quotes_file_name(self, controller):
        """The file name travels URL-quoted in the path."""
        async with connected(controller) as api:
            await api.play_sound("cloister bell.mp3")

        method, path, match_info, _ = controller.requests[0]
        assert method == "POST"
        assert path == "/api/audio/play/cloister bell.mp3"
        assert match_info == {"file_name": "cloister bell.mp3"}

    async def test_stop_sound(self, controller):
        """Test the stop endpoint."""
        async with connected(controller) as api:
            await api.stop_sound()

        assert controller.requests[0][:2] == ("POST", "/api/audio/stop")

    async def test_play_scene(self, controller):
        """Test the scene endpoint."""
        async with connected(controller) as api:
            await api.play_scene("Police Box")

        assert controller.requests[0][2] == {"name": "Police Box"}

    async def test_command_rejected(self, controller):
        """HTTP errors on commands raise RemoteCommandFailed."""
        controller.status = 503
        async with connected(controller) as api:
            with pytest.raises(RemoteCommandFailed) as exc_info:
                await api.play_scene("Materialize")

        assert exc_info.value.status == 503
        assert exc_info.value.operation == "play_scene"
        assert exc_info.value.target == "Materialize"

    async def test_binary_error_body(self, controller):
        """An error body that is not UTF-8 still yields RemoteCommandFailed."""
        controller.status = 500
        controller.error_body = b"\xff\xfe\xfa"
        async with connected(controller) as api:
            with pytest.raises(RemoteCommandFailed) as exc_info:
                await api.stop_sound()

        assert exc_info.value.status == 500

    async def test_binary_error_body_on_list(self, controller):
        """Test the same for list calls."""
        controller.status = 502
        controller.error_body = b"\x80\x81"
        async with connected(controller) as api:
            with pytest.raises(RemoteFetchFailed):
                await api.list_scenes()

    async def test_timeout(self, controller):
        """A slow controller surfaces as RemoteCommandFailed."""
        controller.delay = 1.0
        async with connected(controller, timeout=0.1) as api:
            with pytest.raises(RemoteCommandFailed):
                await api.stop_sound()

    async def test_unreachable(self):
        """Connection failures surface as remote errors."""
        async with HttpDeviceAPI("http://127.0.0.1:1", timeout=1.0) as api:
            with pytest.raises(RemoteCommandFailed):
                await api.turn_on()
            with pytest.raises(RemoteFetchFailed):
                await api.list_sounds()


@pytest.mark.unit
def test_satisfies_device_protocol():
    """HttpDeviceAPI is a DeviceAPI."""
    assert isinstance(HttpDeviceAPI("http://192.168.1.161"), DeviceAPI)
