"""
Todo API - Todo Endpoint Tests
===============================

What:  HTTP-level tests for /api/todos and /health.
How:   HTTPX AsyncClient over ASGITransport against a fresh app per test.
"""

from datetime import datetime

import pytest


async def create(client, text="Buy milk"):
    response = await client.post("/api/todos", json={"text": text})
    assert response.status_code == 200
    return response.json()


class TestListTodos:

    @pytest.mark.asyncio
    async def test_empty_list(self, test_client):
        response = await test_client.get("/api/todos")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_list_in_creation_order(self, test_client):
        for text in ("one", "two", "three"):
            await create(test_client, text)

        response = await test_client.get("/api/todos")

        assert [t["text"] for t in response.json()] == ["one", "two", "three"]


class TestCreateTodo:

    @pytest.mark.asyncio
    async def test_create_returns_todo_shape(self, test_client):
        """Body is exactly {id, text, completed, createdAt}."""
        body = await create(test_client, "Buy milk")

        assert set(body) == {"id", "text", "completed", "createdAt"}
        assert body["text"] == "Buy milk"
        assert body["completed"] is False
        assert body["id"]
        created_at = datetime.fromisoformat(body["createdAt"].replace("Z", "+00:00"))
        assert created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_missing_text_is_400(self, test_client):
        response = await test_client.post("/api/todos", json={})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"]["field"] == "text"
        assert "message" in body

    @pytest.mark.asyncio
    async def test_non_string_text_is_400(self, test_client):
        response = await test_client.post("/api/todos", json={"text": 42})

        assert response.status_code == 400
        assert "must be a string" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_blank_text_is_400(self, test_client):
        response = await test_client.post("/api/todos", json={"text": "   "})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_malformed_json_is_400(self, test_client):
        response = await test_client.post(
            "/api/todos",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_rejected_create_adds_nothing(self, test_client):
        await test_client.post("/api/todos", json={"text": ""})

        response = await test_client.get("/api/todos")
        assert response.json() == []


class TestToggleTodo:

    @pytest.mark.asyncio
    async def test_toggle_flips_completed(self, test_client):
        todo = await create(test_client)

        first = await test_client.patch(f"/api/todos/{todo['id']}")
        second = await test_client.patch(f"/api/todos/{todo['id']}")

        assert first.status_code == 200
        assert first.json()["completed"] is True
        assert second.json()["completed"] is False

    @pytest.mark.asyncio
    async def test_toggle_unknown_returns_null(self, test_client):
        """Unknown ids are not an error: 200 with a JSON null body."""
        response = await test_client.patch("/api/todos/nonexistent-id")

        assert response.status_code == 200
        assert response.json() is None


class TestDeleteTodo:

    @pytest.mark.asyncio
    async def test_delete_existing(self, test_client):
        todo = await create(test_client)

        response = await test_client.delete(f"/api/todos/{todo['id']}")

        assert response.status_code == 200
        assert response.json() == {"success": True}
        listed = (await test_client.get("/api/todos")).json()
        assert todo["id"] not in [t["id"] for t in listed]

    @pytest.mark.asyncio
    async def test_delete_unknown(self, test_client):
        response = await test_client.delete("/api/todos/nonexistent-id")

        assert response.status_code == 200
        assert response.json() == {"success": False}


class TestAppIsolation:

    @pytest.mark.asyncio
    async def test_each_app_has_its_own_store(self, test_client, recording_reporter):
        from httpx import AsyncClient, ASGITransport
        from todo_api.main import create_app

        await create(test_client, "only in the first app")

        other = create_app(error_reporter=recording_reporter)
        async with AsyncClient(transport=ASGITransport(app=other), base_url="http://test") as client:
            response = await client.get("/api/todos")

        assert response.json() == []


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_count(self, test_client):
        await create(test_client, "a")
        await create(test_client, "b")

        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["todo_count"] == 2
        assert body["error_reporter"] == "recording"
