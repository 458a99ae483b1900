import httpx
import pytest

from echowrite.core.config import settings
from echowrite.core.errors import Unauthenticated
from echowrite.services.identity import Identity, decode_token, fetch_identity, resolve_identity
from tests.helpers import make_token


def test_decode_token_reads_claims():
    identity = decode_token(make_token("abc", email="a@b.co", name="Ada"))
    assert identity.user_id == "abc"
    assert identity.email == "a@b.co"
    assert identity.display_name == "Ada"


def test_decode_token_rejects_wrong_secret():
    with pytest.raises(Unauthenticated):
        decode_token(make_token("abc", secret="other-secret"))


def test_decode_token_rejects_garbage():
    with pytest.raises(Unauthenticated):
        decode_token("not-a-jwt")


@pytest.mark.parametrize("identity, expected", [
    (Identity("1", "jo@x.io", {"full_name": "Jo Doe"}), "Jo Doe"),
    (Identity("1", "jo@x.io"), "jo"),
    (Identity("1"), "User"),
])
def test_display_name_fallbacks(identity, expected):
    assert identity.display_name == expected


@pytest.mark.asyncio
async def test_resolve_identity_requires_token():
    with pytest.raises(Unauthenticated):
        await resolve_identity(None)
    with pytest.raises(Unauthenticated):
        await resolve_identity("  ")


@pytest.mark.asyncio
async def test_fetch_identity_via_supabase(monkeypatch):
    monkeypatch.setattr(settings, "supabase_url", "https://proj.supabase.test")
    monkeypatch.setattr(settings, "supabase_anon_key", "anon")

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/auth/v1/user"
        assert request.headers["apikey"] == "anon"
        if request.headers["Authorization"] == "Bearer good":
            return httpx.Response(200, json={"id": "u-9", "email": "u9@x.io", "user_metadata": {}})
        return httpx.Response(401, json={"msg": "invalid JWT"})

    transport = httpx.MockTransport(handler)
    identity = await fetch_identity("good", transport=transport)
    assert identity == Identity("u-9", "u9@x.io", {})

    with pytest.raises(Unauthenticated):
        await fetch_identity("bad", transport=transport)


@pytest.mark.asyncio
async def test_fetch_identity_unconfigured(monkeypatch):
    monkeypatch.setattr(settings, "supabase_url", "")
    with pytest.raises(Unauthenticated):
        await fetch_identity("anything")


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [
    httpx.Response(200, text="<html>gateway</html>"),
    httpx.Response(200, json=["u-9"]),
    httpx.Response(200, json=None),
])
async def test_fetch_identity_rejects_unusable_user_body(monkeypatch, response):
    monkeypatch.setattr(settings, "supabase_url", "https://proj.supabase.test")
    monkeypatch.setattr(settings, "supabase_anon_key", "anon")

    transport = httpx.MockTransport(lambda request: response)
    with pytest.raises(Unauthenticated):
        await fetch_identity("good", transport=transport)
