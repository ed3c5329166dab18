"""Tests for the read-only table API."""

import pytest

from personachat.core.exceptions import InvalidQueryError
from personachat.server.routes_rest import parse_filter, parse_limit, parse_order
from personachat.stores import LiveStore
from personachat.stores.seed import DEMO_USER_ID, MAYA_ID, ZARA_ID


def test_parse_filter():
    assert parse_filter("eq.abc") == "abc"
    assert parse_filter("eq.") == ""
    for raw in ("gt.3", "abc", "like.%a%"):
        with pytest.raises(InvalidQueryError):
            parse_filter(raw)


def test_parse_order():
    assert parse_order(None) == []
    assert parse_order("created_at.desc,name") == [("created_at", True), ("name", False)]
    with pytest.raises(InvalidQueryError):
        parse_order("name.sideways")


def test_parse_limit():
    assert parse_limit(None) is None
    assert parse_limit("3") == 3
    for raw in ("-1", "ten"):
        with pytest.raises(InvalidQueryError):
            parse_limit(raw)


class TestReadTable:
    """GET /rest/v1/{table}"""

    async def test_characters_newest_first(self, client):
        response = await client.get(
            "/rest/v1/characters",
            params={"select": "*", "is_active": "eq.true", "order": "created_at.desc"},
        )
        assert response.status_code == 200
        rows = response.json()
        assert [row["id"] for row in rows][0] == ZARA_ID
        assert len(rows) == 4
        assert rows[0]["owner_id"] == DEMO_USER_ID

    async def test_eq_filter_and_limit(self, client):
        response = await client.get(
            "/rest/v1/characters", params={"id": f"eq.{MAYA_ID}", "limit": "1"}
        )
        rows = response.json()
        assert len(rows) == 1
        assert rows[0]["name"] == "Maya"

    async def test_select_projection(self, client):
        response = await client.get("/rest/v1/characters", params={"select": "id,name", "limit": "2"})
        assert all(set(row) == {"id", "name"} for row in response.json())

    async def test_profiles(self, client):
        response = await client.get("/rest/v1/profiles", params={"user_id": f"eq.{DEMO_USER_ID}"})
        assert response.json()[0]["email"]

    async def test_no_match(self, client):
        response = await client.get("/rest/v1/chat_sessions", params={"user_id": "eq.nobody"})
        assert response.status_code == 200
        assert response.json() == []

    async def test_unknown_table(self, client):
        response = await client.get("/rest/v1/secrets")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "TABLE_NOT_FOUND"

    @pytest.mark.parametrize(
        "params",
        [
            {"nope": "eq.1"},
            {"is_active": "eq.maybe"},
            {"name": "neq.Maya"},
            {"order": "nope.asc"},
            {"limit": "many"},
            {"select": "id,nope"},
        ],
    )
    async def test_invalid_queries(self, client, params):
        response = await client.get("/rest/v1/characters", params=params)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_QUERY"


class TestApiKeys:
    """Key enforcement when keys are configured."""

    @pytest.fixture
    async def keyed_client(self, make_app):
        from httpx import ASGITransport, AsyncClient

        app = await make_app(ANON_KEY="anon-key", SERVICE_ROLE_KEY="service-key")
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac

    async def test_missing_key_rejected(self, keyed_client):
        response = await keyed_client.get("/rest/v1/characters")
        assert response.status_code == 401

    async def test_wrong_key_rejected(self, keyed_client):
        response = await keyed_client.get(
            "/rest/v1/characters", headers={"Authorization": "Bearer wrong"}
        )
        assert response.status_code == 401

    @pytest.mark.parametrize(
        "headers",
        [
            {"Authorization": "Bearer anon-key"},
            {"Authorization": "Bearer service-key"},
            {"apikey": "anon-key"},
            {"Authorization": "Bearer user-jwt", "apikey": "anon-key"},
        ],
    )
    async def test_accepted_keys(self, keyed_client, headers):
        response = await keyed_client.get("/rest/v1/characters", headers=headers)
        assert response.status_code == 200

    async def test_chat_function_requires_key(self, keyed_client):
        response = await keyed_client.post(
            "/functions/v1/ai-chat", json={"message": "hi", "characterId": MAYA_ID, "userId": "u"}
        )
        assert response.status_code == 401

    async def test_wrong_key_in_both_headers_rejected(self, keyed_client):
        response = await keyed_client.get(
            "/rest/v1/characters", headers={"Authorization": "Bearer user-jwt", "apikey": "wrong"}
        )
        assert response.status_code == 401

    async def test_signed_in_live_store(self, keyed_client):
        store = LiveStore("http://test", anon_key="anon-key", access_token="user-jwt", client=keyed_client)

        characters = await store.list_characters()
        assert len(characters) == 4

        result = await store.send_message(DEMO_USER_ID, MAYA_ID, "Signed in hello")
        assert result is not None
        assert [m.id for m in await store.list_messages(DEMO_USER_ID, MAYA_ID)][-1] == result.ai_message.id
        assert "apikey" not in keyed_client.headers
