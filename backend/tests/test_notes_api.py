"""
Notekeeper Backend: Notes API Tests
====================================

What:  End-to-end tests of the /notes routes through the ASGI app.
How:   HTTPX AsyncClient with an in-memory database behind get_db_session.
       TAKE_DEFAULT_N is 5 for the whole suite (see conftest.py).
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.exceptions import PersistenceError
from notekeeper.models.note import Note
from notekeeper.store import NoteStore, get_note_store


async def _create(client, content, title=None):
    response = await client.post("/notes", json={"title": title, "content": content})
    assert response.status_code == 201
    return response.json()


class TestCreate:

    @pytest.mark.asyncio
    async def test_create_returns_201_and_stored_note(self, test_client):
        response = await test_client.post("/notes", json={"title": "Todo", "content": "Buy milk"})

        assert response.status_code == 201
        body = response.json()
        assert isinstance(body["id"], int)
        assert body["title"] == "Todo"
        assert body["content"] == "Buy milk"

    @pytest.mark.asyncio
    async def test_create_with_empty_title_stores_null(self, test_client):
        body = await _create(test_client, "Hello world", title="")

        assert body["title"] is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [{}, {"content": ""}, {"title": "only title"}])
    async def test_create_without_content_is_400(self, test_client, payload):
        response = await test_client.post("/notes", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"] == {"field": "content"}

    @pytest.mark.asyncio
    async def test_create_without_body_is_400(self, test_client):
        response = await test_client.post("/notes")

        assert response.status_code == 400


class TestRead:

    @pytest.mark.asyncio
    async def test_get_derives_title_from_content(self, test_client):
        created = await _create(test_client, "Hello world")

        response = await test_client.get(f"/notes/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"id": created["id"], "title": "Hello", "content": "Hello world"}

    @pytest.mark.asyncio
    async def test_get_keeps_stored_title(self, test_client):
        created = await _create(test_client, "Hello world", title="Greeting")

        response = await test_client.get(f"/notes/{created['id']}")

        assert response.json()["title"] == "Greeting"

    @pytest.mark.asyncio
    async def test_get_missing_is_404(self, test_client):
        response = await test_client.get("/notes/404")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_get_non_integer_id_is_422(self, test_client):
        response = await test_client.get("/notes/abc")

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_list_all_with_display_titles(self, test_client):
        await _create(test_client, "Hello world")
        await _create(test_client, "Bye")
        await _create(test_client, "Long content here", title="Named")

        response = await test_client.get("/notes")

        assert response.status_code == 200
        assert response.headers["X-Total-Count"] == "3"
        assert [n["title"] for n in response.json()] == ["Hello", "Bye", "Named"]

    @pytest.mark.asyncio
    async def test_list_empty_query_returns_all(self, test_client):
        await _create(test_client, "one")
        await _create(test_client, "two")

        response = await test_client.get("/notes", params={"query": ""})

        assert len(response.json()) == 2

    @pytest.mark.asyncio
    async def test_search_matches_title_or_content(self, test_client):
        in_content = await _create(test_client, "remember the milk")
        in_title = await _create(test_client, "eggs and bread", title="milk run")
        await _create(test_client, "nothing relevant")

        response = await test_client.get("/notes", params={"query": "milk"})

        assert response.status_code == 200
        ids = {n["id"] for n in response.json()}
        assert ids == {in_content["id"], in_title["id"]}
        assert response.headers["X-Total-Count"] == "2"

    @pytest.mark.asyncio
    async def test_search_is_case_sensitive(self, test_client):
        await _create(test_client, "remember the milk")
        capitalized = await _create(test_client, "Milk and honey")

        response = await test_client.get("/notes", params={"query": "Milk"})

        assert [n["id"] for n in response.json()] == [capitalized["id"]]


class TestIdBounds:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("note_id", ["0", "-1", "2147483648", "9223372036854775808"])
    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
    async def test_out_of_range_id_is_422(self, test_client, method, note_id):
        response = await test_client.request(method, f"/notes/{note_id}", json={"content": "x"})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_largest_id_is_accepted_and_not_found(self, test_client):
        response = await test_client.get("/notes/2147483647")

        assert response.status_code == 404


class TestUpdate:

    @pytest.mark.asyncio
    async def test_update_flow_from_hello_to_bye(self, test_client):
        created = await _create(test_client, "Hello world")
        assert (await test_client.get(f"/notes/{created['id']}")).json()["title"] == "Hello"

        response = await test_client.put(f"/notes/{created['id']}", json={"content": "Bye"})

        assert response.status_code == 200
        assert response.json() == {"id": created["id"], "title": None, "content": "Bye"}

        fetched = (await test_client.get(f"/notes/{created['id']}")).json()
        assert fetched["content"] == "Bye"
        assert fetched["title"] == "Bye"

    @pytest.mark.asyncio
    async def test_update_replaces_title_with_null(self, test_client):
        created = await _create(test_client, "Hello world", title="Greeting")

        await test_client.put(f"/notes/{created['id']}", json={"title": "", "content": "Hello world"})

        fetched = (await test_client.get(f"/notes/{created['id']}")).json()
        assert fetched["title"] == "Hello"

    @pytest.mark.asyncio
    async def test_update_missing_is_404_and_store_unchanged(self, test_client):
        await _create(test_client, "keep me")

        response = await test_client.put("/notes/999", json={"content": "x"})

        assert response.status_code == 404
        notes = (await test_client.get("/notes")).json()
        assert [n["content"] for n in notes] == ["keep me"]

    @pytest.mark.asyncio
    async def test_update_missing_with_empty_content_is_still_404(self, test_client):
        response = await test_client.put("/notes/999", json={"content": ""})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_empty_content_is_400(self, test_client):
        created = await _create(test_client, "Hello world")

        response = await test_client.put(f"/notes/{created['id']}", json={"content": ""})

        assert response.status_code == 400
        fetched = (await test_client.get(f"/notes/{created['id']}")).json()
        assert fetched["content"] == "Hello world"


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_returns_note_then_get_is_404(self, test_client):
        created = await _create(test_client, "Gone soon", title="Temp")

        response = await test_client.delete(f"/notes/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"id": created["id"], "title": "Temp", "content": "Gone soon"}
        assert (await test_client.get(f"/notes/{created['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_missing_is_404(self, test_client):
        response = await test_client.delete("/notes/999")

        assert response.status_code == 404


class TestStoreFailure:

    @pytest.mark.asyncio
    async def test_store_failure_is_500_not_400(self, test_client):
        from notekeeper.main import app

        failing = AsyncMock(spec=NoteStore)
        failing.list_all.side_effect = PersistenceError(context={"operation": "list_all"})
        app.dependency_overrides[get_note_store] = lambda: failing

        response = await test_client.get("/notes", headers={"X-Request-ID": "req-123"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert body["request_id"] == "req-123"
        # Internal context is never returned to clients
        assert "details" not in body

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, path, operation",
        [
            ("POST", "/notes", "insert"),
            ("PUT", "/notes/1", "update"),
            ("DELETE", "/notes/1", "delete"),
        ],
    )
    async def test_write_failures_are_500(self, test_client, method, path, operation):
        from notekeeper.main import app

        failing = AsyncMock(spec=NoteStore)
        failing.find_by_id.return_value = Note(id=1, title=None, content="Hello world")
        getattr(failing, operation).side_effect = PersistenceError(context={"operation": operation})
        app.dependency_overrides[get_note_store] = lambda: failing

        response = await test_client.request(method, path, json={"content": "Bye"})

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"

    @pytest.mark.asyncio
    async def test_failed_commit_is_500_and_nothing_saved(self, test_client):
        commit_error = OperationalError("COMMIT", {}, Exception("disk I/O error"))

        with patch.object(AsyncSession, "commit", AsyncMock(side_effect=commit_error)):
            response = await test_client.post("/notes", json={"content": "Hello world"})

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"
        assert (await test_client.get("/notes")).json() == []

    @pytest.mark.asyncio
    async def test_failed_commit_on_update_keeps_old_content(self, test_client):
        created = await _create(test_client, "Hello world")
        commit_error = OperationalError("COMMIT", {}, Exception("database is locked"))

        with patch.object(AsyncSession, "commit", AsyncMock(side_effect=commit_error)):
            response = await test_client.put(f"/notes/{created['id']}", json={"content": "Bye"})

        assert response.status_code == 500
        fetched = (await test_client.get(f"/notes/{created['id']}")).json()
        assert fetched["content"] == "Hello world"
