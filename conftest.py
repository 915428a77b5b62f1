"""
Pytest configuration for setli tests.

Provides:
- @pytest.mark.obs marker for tests requiring a live renderer
- Auto-skip of those tests unless SETLI_TEST_OBS_HOST is set
- A fake control-protocol renderer and fixtures wired to it
"""

import copy
import os

import pytest

from setli.async_runner import AsyncRunner
from setli.state import AppState
from setli.sync import SyncEngine

OBS_TEST_HOST = os.environ.get("SETLI_TEST_OBS_HOST")

FAKE_PASSWORD = "secret"


class FakeStatus:
    def __init__(self, result: bool, code: int, comment=None):
        self.result = result
        self.code = code
        self.comment = comment


class FakeResponse:
    """Mimics simpleobsws.RequestResponse."""

    def __init__(self, ok=True, data=None, code=100, comment=None):
        self.requestStatus = FakeStatus(ok, code, comment)
        self.responseData = data

    def ok(self):
        return self.requestStatus.result


class FakeObsClient:
    """Fake simpleobsws.WebSocketClient backed by a FakeRenderer."""

    def __init__(self, renderer, url, password):
        self.renderer = renderer
        self.url = url
        self.password = password
        self.connected = False
        self.disconnected = False

    async def connect(self):
        if self.renderer.fail_connect:
            raise OSError(f"Connect call failed: {self.url}")
        self.connected = True

    async def wait_until_identified(self):
        return self.password == self.renderer.password

    async def disconnect(self):
        self.disconnected = True

    async def call(self, request):
        renderer = self.renderer
        if renderer.raise_on_call is not None:
            raise renderer.raise_on_call
        name = request.requestData["inputName"]

        if request.requestType == "GetInputSettings":
            renderer.get_calls.append(name)
            if renderer.refuse_get or name not in renderer.elements:
                return FakeResponse(
                    ok=False, code=600, comment=f"No source was found by the name of `{name}`."
                )
            return FakeResponse(
                data={
                    "inputSettings": copy.deepcopy(renderer.elements[name]),
                    "inputKind": "text_ft2_source_v2",
                }
            )

        if request.requestType == "SetInputSettings":
            if renderer.refuse_set:
                return FakeResponse(ok=False, code=702, comment="Refused")
            settings = copy.deepcopy(request.requestData["inputSettings"])
            renderer.set_calls.append((name, settings))
            renderer.elements[name] = settings
            return FakeResponse()

        return FakeResponse(ok=False, code=204, comment="Unknown request type")


class FakeRenderer:
    """In-memory stand-in for the broadcast tool's websocket server."""

    def __init__(self, password=FAKE_PASSWORD):
        self.password = password
        self.elements = {
            "setli": {"text": "old", "color": 42, "unrelated": True},
        }
        self.clients = []
        self.get_calls = []
        self.set_calls = []
        self.fail_connect = False
        self.refuse_get = False
        self.refuse_set = False
        self.raise_on_call = None

    def factory(self, url, password):
        client = FakeObsClient(self, url, password)
        self.clients.append(client)
        return client


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "obs: marks tests as requiring a live renderer (skipped if unavailable)"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-skip live renderer tests when no renderer host is configured."""
    if OBS_TEST_HOST:
        return

    skip_obs = pytest.mark.skip(reason="SETLI_TEST_OBS_HOST not set")
    for item in items:
        if "obs" in item.keywords:
            item.add_marker(skip_obs)


@pytest.fixture
def runner():
    """A started AsyncRunner, stopped after the test."""
    runner = AsyncRunner()
    runner.start()
    yield runner
    runner.stop()


@pytest.fixture
def fake_renderer():
    return FakeRenderer()


@pytest.fixture
def app_state(runner, fake_renderer):
    """AppState wired to the fake renderer, not yet connected."""
    return AppState(runner=runner, client_factory=fake_renderer.factory)


@pytest.fixture
def connected_state(app_state):
    """AppState with an established fake renderer session."""
    assert app_state.connection.connect("localhost", 4455, FAKE_PASSWORD)
    return app_state


@pytest.fixture
def sync_engine(app_state):
    return SyncEngine(app_state)
