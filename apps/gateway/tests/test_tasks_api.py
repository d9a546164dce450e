"""任务路由测试

测试内容：
1. 创建任务 201（含地点解析）/ 空标题 422
2. 列表与 pending / completed 视图
3. toggle 200 / 404
4. DELETE 幂等 204
5. 到任务地点的路线
6. 请求校验失败统一为 {"error": {...}} 结构
"""

from httpx import AsyncClient


async def _create(client: AsyncClient, **body) -> dict:
    resp = await client.post("/api/tasks", json=body)
    assert resp.status_code == 201
    return resp.json()["task"]


class TestCreateTask:
    async def test_create_returns_201(self, client: AsyncClient):
        resp = await client.post("/api/tasks", json={"title": "  Buy milk "})

        assert resp.status_code == 201
        task = resp.json()["task"]
        assert task["title"] == "Buy milk"
        assert task["completed"] is False
        assert task["priority"] == "medium"
        assert task["location"] is None
        assert len(task["id"]) == 26  # ULID 长度

    async def test_create_with_location(self, client: AsyncClient, tool_server, central_park):
        tool_server.reply("search_places", [central_park])

        task = await _create(client, title="Meet Bob", location="Central Park", priority="high")

        assert task["location"] == {"address": "Central Park, NYC", "lat": 40.78, "lng": -73.96}
        assert task["priority"] == "high"

    async def test_enrichment_failure_still_201(self, client: AsyncClient, tool_server):
        tool_server.fail("search_places", status_code=500)

        task = await _create(client, title="Meet Bob", location="Central Park")

        assert task["location"] is None

    async def test_due_date_roundtrip(self, client: AsyncClient):
        task = await _create(client, title="Pay rent", due_date="2025-05-01T12:00:00.123456Z")

        assert task["due_date"] == "2025-05-01T12:00:00.123+00:00"

    async def test_blank_title_returns_422(self, client: AsyncClient, tool_server):
        resp = await client.post("/api/tasks", json={"title": "   ", "location": "Central Park"})

        assert resp.status_code == 422
        assert resp.json()["error"]["code"] == "INVALID_TASK"
        assert tool_server.requests == []
        assert (await client.get("/api/tasks")).json()["tasks"] == []

    async def test_missing_title_returns_422(self, client: AsyncClient):
        resp = await client.post("/api/tasks", json={"description": "no title"})

        assert resp.status_code == 422
        error = resp.json()["error"]
        assert error["code"] == "INVALID_REQUEST"
        assert "title" in error["message"]

    async def test_unknown_priority_returns_error_body(self, client: AsyncClient):
        resp = await client.post("/api/tasks", json={"title": "Buy milk", "priority": "urgent"})

        assert resp.status_code == 422
        assert set(resp.json()) == {"error"}
        assert resp.json()["error"]["code"] == "INVALID_REQUEST"
        assert "priority" in resp.json()["error"]["message"]

    async def test_request_id_header(self, client: AsyncClient):
        resp = await client.post("/api/tasks", json={"title": "Buy milk"})
        assert len(resp.headers["X-Request-ID"]) == 26


class TestListTasks:
    async def test_views(self, client: AsyncClient):
        a = await _create(client, title="a")
        b = await _create(client, title="b")
        await client.post(f"/api/tasks/{b['id']}/toggle")

        all_ids = [t["id"] for t in (await client.get("/api/tasks")).json()["tasks"]]
        pending = (await client.get("/api/tasks", params={"view": "pending"})).json()["tasks"]
        completed = (await client.get("/api/tasks", params={"view": "completed"})).json()["tasks"]

        assert all_ids == [a["id"], b["id"]]
        assert [t["id"] for t in pending] == [a["id"]]
        assert [t["id"] for t in completed] == [b["id"]]

    async def test_unknown_view_rejected(self, client: AsyncClient):
        resp = await client.get("/api/tasks", params={"view": "archived"})
        assert resp.status_code == 422
        assert resp.json()["error"]["code"] == "INVALID_REQUEST"


class TestToggleTask:
    async def test_toggle_twice(self, client: AsyncClient):
        task = await _create(client, title="Buy milk")

        first = await client.post(f"/api/tasks/{task['id']}/toggle")
        second = await client.post(f"/api/tasks/{task['id']}/toggle")

        assert first.status_code == 200
        assert first.json()["task"]["completed"] is True
        assert second.json()["task"]["completed"] is False

    async def test_toggle_unknown_returns_404(self, client: AsyncClient):
        resp = await client.post("/api/tasks/missing/toggle")

        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "TASK_NOT_FOUND"


class TestDeleteTask:
    async def test_delete_idempotent(self, client: AsyncClient):
        task = await _create(client, title="Buy milk")

        first = await client.delete(f"/api/tasks/{task['id']}")
        second = await client.delete(f"/api/tasks/{task['id']}")

        assert first.status_code == 204
        assert second.status_code == 204
        assert (await client.get("/api/tasks")).json()["tasks"] == []


class TestTaskDirections:
    async def test_directions_to_task(self, client: AsyncClient, tool_server, central_park):
        tool_server.reply("search_places", [central_park])
        tool_server.reply(
            "get_directions",
            {
                "summary": "Broadway",
                "legs": [{"duration": {"text": "20 mins"}, "distance": {"text": "5 km"}}],
            },
        )
        task = await _create(client, title="Meet Bob", location="Central Park")

        resp = await client.get(f"/api/tasks/{task['id']}/directions")

        assert resp.status_code == 200
        data = resp.json()
        assert data["task_id"] == task["id"]
        assert data["destination"] == "Central Park, NYC"
        assert data["direction"]["summary"] == "Broadway"
        assert tool_server.last_call["arguments"] == {
            "origin": "Current Location",
            "destination": "Central Park, NYC",
            "mode": "driving",
        }

    async def test_origin_and_mode_forwarded(self, client: AsyncClient, tool_server, central_park):
        tool_server.reply("search_places", [central_park])
        tool_server.reply("get_directions", {"summary": "", "legs": []})
        task = await _create(client, title="Meet Bob", location="Central Park")

        await client.get(
            f"/api/tasks/{task['id']}/directions",
            params={"origin": "Times Square", "mode": "walking"},
        )

        assert tool_server.last_call["arguments"]["origin"] == "Times Square"
        assert tool_server.last_call["arguments"]["mode"] == "walking"

    async def test_task_without_location(self, client: AsyncClient, tool_server):
        """任务无地点时不调用远端，direction 为 null"""
        task = await _create(client, title="Buy milk")

        resp = await client.get(f"/api/tasks/{task['id']}/directions")

        assert resp.status_code == 200
        assert resp.json() == {"task_id": task["id"], "destination": None, "direction": None}
        assert tool_server.calls == []

    async def test_unknown_task_returns_404(self, client: AsyncClient):
        resp = await client.get("/api/tasks/missing/directions")

        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "TASK_NOT_FOUND"

    async def test_tool_server_failure_returns_502(
        self, client: AsyncClient, tool_server, central_park
    ):
        tool_server.reply("search_places", [central_park])
        tool_server.fail("get_directions", status_code=500)
        task = await _create(client, title="Meet Bob", location="Central Park")

        resp = await client.get(f"/api/tasks/{task['id']}/directions")

        assert resp.status_code == 502
        assert resp.json()["error"]["code"] == "TOOL_SERVER_UNAVAILABLE"
