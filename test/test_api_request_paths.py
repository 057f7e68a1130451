import sys
from pathlib import Path

import pytest

# Ensure project root is importable when running tests without installation.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from discord_lite.api import DiscordAPI
from discord_lite.utils import (
    AuthenticationError,
    ResourceUnavailable,
    UnexpectedStatus,
    ReachedMaxRetries,
)


class FakeResponse:
    def __init__(self, status_code, payload=None):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, responses):
        # responses can be a list (iterated) or single response
        if isinstance(responses, list):
            self.responses = responses
        else:
            self.responses = [responses]
        self.calls = 0
        self.last_params = None
        self.last_url = None
        self.last_method = None
        self.last_json = None

    def request(self, method, url, params=None, json=None):
        self.calls += 1
        self.last_method = method
        self.last_url = url
        self.last_params = params or {}
        self.last_json = json
        try:
            response = self.responses[self.calls - 1]
        except IndexError:
            response = self.responses[-1]
        return response


def make_api(fake_session, max_retries=2):
    api = DiscordAPI(token="dummy", max_retries=max_retries, retry_time_buffer=(0, 0))
    api.session = fake_session
    return api


@pytest.fixture(autouse=True)
def no_sleep(monkeypatch):
    monkeypatch.setattr("discord_lite.api.time.sleep", lambda *_: None)


def test_request_raises_authentication_error():
    session = FakeSession(FakeResponse(401, None))
    api = make_api(session)
    with pytest.raises(AuthenticationError):
        api.get_current_user()


def test_request_raises_resource_unavailable():
    session = FakeSession(FakeResponse(403, {"error": "forbidden"}))
    api = make_api(session)
    with pytest.raises(ResourceUnavailable):
        api.get_guilds()


def test_request_raises_unexpected_status():
    session = FakeSession(FakeResponse(418, {"error": "teapot"}))
    api = make_api(session)
    with pytest.raises(UnexpectedStatus):
        api.get_guilds()


def test_request_retries_and_hits_max():
    # Two 429s at max_retries=2 -> two retries, then fail
    responses = [
        FakeResponse(429, {"retry_after": 0}),
        FakeResponse(429, {"retry_after": 0}),
        FakeResponse(429, {"retry_after": 0}),
    ]
    api = make_api(FakeSession(responses), max_retries=2)
    with pytest.raises(ReachedMaxRetries):
        api.get_guilds()
    assert api.session.calls == 3  # initial + two retries


def test_get_channel_messages_sends_limit():
    session = FakeSession(FakeResponse(200, []))
    api = make_api(session)
    assert api.get_channel_messages("c1", limit=50) == []
    assert session.last_method == "get"
    assert session.last_url.endswith("/channels/c1/messages")
    assert session.last_params == {"limit": 50}


def test_create_message_posts_json_body():
    session = FakeSession(FakeResponse(200, {"id": "m1", "content": "hi"}))
    api = make_api(session)
    api.create_message("c1", "hi")
    assert session.last_method == "post"
    assert session.last_json == {"content": "hi"}


def test_update_status_patches_settings():
    session = FakeSession(FakeResponse(200, {"status": "idle"}))
    api = make_api(session)
    api.update_status("idle")
    assert session.last_method == "patch"
    assert session.last_url.endswith("/users/@me/settings")
    assert session.last_json == {"status": "idle"}
