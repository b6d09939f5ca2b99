from urllib.parse import parse_qs, urlparse

import pytest
import httpx
from fastapi import Request
from httpx import AsyncClient

from social_authorize.api.auth import get_strategy
from social_authorize.app import create_app
from social_authorize.sessions import DictSession
from social_authorize.strategies import GoogleStrategy

from conftest import CLIENT_SETTINGS, FakeTransport, contact_entry, feed_page


@pytest.fixture
def configured(monkeypatch):
    monkeypatch.setenv("SOCIAL_AUTHORIZE_GOOGLE__APPLICATION_NAME", CLIENT_SETTINGS["application_name"])
    monkeypatch.setenv("SOCIAL_AUTHORIZE_GOOGLE__REDIRECT_URL", CLIENT_SETTINGS["redirect_url"])
    monkeypatch.setenv("SOCIAL_AUTHORIZE_GOOGLE__CLIENT_ID", CLIENT_SETTINGS["id"])
    monkeypatch.setenv("SOCIAL_AUTHORIZE_GOOGLE__CLIENT_SECRET", CLIENT_SETTINGS["secret"])


def _client(app):
    transport = httpx.ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test", follow_redirects=False)


def _with_fake_transport(app, fake):
    def override(request: Request) -> GoogleStrategy:
        return GoogleStrategy(CLIENT_SETTINGS, DictSession(request.session), transport=fake)

    app.dependency_overrides[get_strategy] = override


@pytest.mark.asyncio
async def test_health_endpoint():
    app = create_app()
    async with _client(app) as ac:
        resp = await ac.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["service"] == "social-authorize"
        assert resp.headers.get("X-Request-ID")


@pytest.mark.asyncio
async def test_login_redirects_to_google(configured):
    app = create_app()
    async with _client(app) as ac:
        resp = await ac.get("/auth/login")
        assert resp.status_code == 307
        location = resp.headers["location"]
        assert location.startswith("https://accounts.google.com/o/oauth2/auth?")
        query = parse_qs(urlparse(location).query)
        assert query["client_id"] == [CLIENT_SETTINGS["id"]]
        assert query["state"][0]


@pytest.mark.asyncio
async def test_login_without_configuration_is_server_error():
    app = create_app()
    async with _client(app) as ac:
        resp = await ac.get("/auth/login")
        assert resp.status_code == 500


@pytest.mark.asyncio
async def test_callback_rejects_unknown_state(configured):
    app = create_app()
    async with _client(app) as ac:
        await ac.get("/auth/login")
        resp = await ac.get("/auth/callback", params={"state": "forged", "code": "4/abc"})
        assert resp.status_code == 400


@pytest.mark.asyncio
async def test_callback_then_friends(configured):
    app = create_app()
    fake = FakeTransport(
        pages={
            "https://www.google.com/m8/feeds/contacts/default/full?alt=json&max-results=700&v=3.0": feed_page(
                [contact_entry(1), {}]
            )
        }
    )
    _with_fake_transport(app, fake)

    async with _client(app) as ac:
        login = await ac.get("/auth/login")
        state = parse_qs(urlparse(login.headers["location"]).query)["state"][0]

        resp = await ac.get("/auth/callback", params={"state": state, "code": "4/abc"})
        assert resp.status_code == 200
        assert resp.json()["email"] == "ada@example.com"
        assert fake.exchanged == ["4/abc"]

        me = await ac.get("/auth/me")
        assert me.json()["access_token"] == "ya29.from-code"

        friends = await ac.get("/auth/friends")
        assert friends.json() == [
            {"email": "c1@example.com", "display_name": "Contact 1"},
            {"email": "", "display_name": ""},
        ]


@pytest.mark.asyncio
async def test_me_requires_login(configured):
    app = create_app()
    async with _client(app) as ac:
        resp = await ac.get("/auth/me")
        assert resp.status_code == 401
        assert resp.json()["error"] == "login_required"


@pytest.mark.asyncio
async def test_logout_redirect():
    app = create_app()
    async with _client(app) as ac:
        resp = await ac.get("/auth/logout")
        assert resp.status_code in (302, 307, 303)
        assert resp.headers.get("location") == "/"
