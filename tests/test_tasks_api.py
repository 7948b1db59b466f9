from datetime import datetime, timedelta, timezone

from taskhub.utils import new_id

from .helpers import create_category, create_task, future, get_category, register


def test_scenario_archive_and_share(client, alice, bob):
    work = create_category(client, alice["headers"], "Work")
    assert work["color"] == "#3B82F6"

    task = create_task(
        client, alice["headers"], "Write report", category=work["id"], dueDate=future()
    )
    assert get_category(client, alice["headers"], work["id"])["taskCount"] == 1

    archived = client.put(
        f"/api/tasks/{task['id']}/status", json={"status": "archived"}, headers=alice["headers"]
    )
    assert archived.status_code == 200
    assert archived.json()["data"]["task"]["status"] == "archived"

    back = client.put(
        f"/api/tasks/{task['id']}/status", json={"status": "todo"}, headers=alice["headers"]
    )
    assert back.status_code == 400
    assert back.json()["error"]["code"] == "INVALID_TRANSITION"

    share = {"userId": bob["user"]["id"]}
    first = client.post(f"/api/tasks/{task['id']}/share", json=share, headers=alice["headers"])
    assert first.status_code == 200
    assert first.json()["data"]["task"]["sharedWith"] == [bob["user"]["id"]]

    second = client.post(f"/api/tasks/{task['id']}/share", json=share, headers=alice["headers"])
    assert second.status_code == 400
    assert second.json()["error"]["code"] == "ALREADY_SHARED"


def test_rearchiving_is_idempotent(client, alice):
    task = create_task(client, alice["headers"], "Old")
    url = f"/api/tasks/{task['id']}/status"

    for _ in range(2):
        resp = client.put(url, json={"status": "archived"}, headers=alice["headers"])
        assert resp.status_code == 200


def test_other_transitions_are_unrestricted(client, alice):
    task = create_task(client, alice["headers"], "Flip")
    url = f"/api/tasks/{task['id']}/status"

    for status in ("completed", "todo", "in-progress", "completed"):
        resp = client.put(url, json={"status": status}, headers=alice["headers"])
        assert resp.json()["data"]["task"]["status"] == status


def test_update_cannot_unarchive(client, alice):
    task = create_task(client, alice["headers"], "Done")
    client.put(f"/api/tasks/{task['id']}/status", json={"status": "archived"}, headers=alice["headers"])

    resp = client.put(f"/api/tasks/{task['id']}", json={"status": "todo"}, headers=alice["headers"])
    assert resp.json()["error"]["code"] == "INVALID_TRANSITION"


def test_invalid_status_value(client, alice):
    task = create_task(client, alice["headers"], "T")

    resp = client.put(
        f"/api/tasks/{task['id']}/status", json={"status": "done"}, headers=alice["headers"]
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


def test_create_defaults(client, alice):
    task = create_task(client, alice["headers"], "  Plain  ")

    assert task["title"] == "Plain"
    assert task["status"] == "todo"
    assert task["priority"] == "medium"
    assert task["category"] is None
    assert task["tags"] == []
    assert task["sharedWith"] == []
    assert task["user"] == alice["user"]["id"]


def test_due_date_must_be_in_the_future(client, alice):
    past = (datetime.now(timezone.utc) - timedelta(days=1)).isoformat()

    resp = client.post("/api/tasks", json={"title": "Late", "dueDate": past}, headers=alice["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"]["details"][0]["field"] == "dueDate"


def test_field_limits(client, alice):
    for payload in (
        {"title": ""},
        {"title": "x" * 201},
        {"title": "ok", "description": "d" * 1001},
        {"title": "ok", "estimatedHours": -1},
        {"title": "ok", "priority": "urgent"},
    ):
        resp = client.post("/api/tasks", json=payload, headers=alice["headers"])
        assert resp.status_code == 400, payload


def test_category_counter_follows_create_and_delete(client, alice):
    work = create_category(client, alice["headers"], "Work")
    task = create_task(client, alice["headers"], "A", category=work["id"])
    create_task(client, alice["headers"], "B", category=work["id"])
    assert get_category(client, alice["headers"], work["id"])["taskCount"] == 2

    resp = client.delete(f"/api/tasks/{task['id']}", headers=alice["headers"])
    assert resp.status_code == 204
    assert get_category(client, alice["headers"], work["id"])["taskCount"] == 1


def test_category_counter_follows_update(client, alice):
    work = create_category(client, alice["headers"], "Work")
    home = create_category(client, alice["headers"], "Home")
    task = create_task(client, alice["headers"], "A", category=work["id"])

    resp = client.put(f"/api/tasks/{task['id']}", json={"category": home["id"]}, headers=alice["headers"])
    assert resp.json()["data"]["task"]["category"] == {
        "id": home["id"],
        "name": "Home",
        "color": "#3B82F6",
    }
    assert get_category(client, alice["headers"], work["id"])["taskCount"] == 0
    assert get_category(client, alice["headers"], home["id"])["taskCount"] == 1

    # Updating other fields leaves the counters alone.
    client.put(f"/api/tasks/{task['id']}", json={"title": "A2"}, headers=alice["headers"])
    assert get_category(client, alice["headers"], home["id"])["taskCount"] == 1

    resp = client.put(f"/api/tasks/{task['id']}", json={"category": None}, headers=alice["headers"])
    assert resp.json()["data"]["task"]["category"] is None
    assert get_category(client, alice["headers"], home["id"])["taskCount"] == 0


def test_failed_category_change_rolls_back(client, alice, bob):
    work = create_category(client, alice["headers"], "Work")
    foreign = create_category(client, bob["headers"], "Bob's")
    task = create_task(client, alice["headers"], "A", category=work["id"])

    resp = client.put(
        f"/api/tasks/{task['id']}",
        json={"category": foreign["id"], "title": "changed"},
        headers=alice["headers"],
    )
    assert resp.status_code == 404
    assert resp.json()["error"]["message"] == "Category not found"

    assert get_category(client, alice["headers"], work["id"])["taskCount"] == 1
    assert get_category(client, bob["headers"], foreign["id"])["taskCount"] == 0
    current = client.get(f"/api/tasks/{task['id']}", headers=alice["headers"]).json()["data"]["task"]
    assert current["title"] == "A"
    assert current["category"]["id"] == work["id"]


def test_create_with_foreign_category(client, alice, bob):
    foreign = create_category(client, bob["headers"], "Bob's")

    resp = client.post(
        "/api/tasks", json={"title": "A", "category": foreign["id"]}, headers=alice["headers"]
    )
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "NOT_FOUND"
    assert get_category(client, bob["headers"], foreign["id"])["taskCount"] == 0


def test_update_does_not_touch_owner_or_id(client, alice, bob):
    task = create_task(client, alice["headers"], "Mine")

    resp = client.put(
        f"/api/tasks/{task['id']}",
        json={"title": "Still mine", "user": bob["user"]["id"], "id": new_id()},
        headers=alice["headers"],
    )
    updated = resp.json()["data"]["task"]
    assert updated["id"] == task["id"]
    assert updated["user"] == alice["user"]["id"]
    assert updated["title"] == "Still mine"


def test_update_rejects_null_title(client, alice):
    task = create_task(client, alice["headers"], "Mine")

    resp = client.put(f"/api/tasks/{task['id']}", json={"title": None}, headers=alice["headers"])
    assert resp.status_code == 400


def test_foreign_tasks_look_missing(client, alice, bob):
    task = create_task(client, alice["headers"], "Private")
    url = f"/api/tasks/{task['id']}"

    responses = [
        client.get(url, headers=bob["headers"]),
        client.put(url, json={"title": "x"}, headers=bob["headers"]),
        client.delete(url, headers=bob["headers"]),
        client.put(f"{url}/status", json={"status": "completed"}, headers=bob["headers"]),
        client.put(f"{url}/priority", json={"priority": "high"}, headers=bob["headers"]),
    ]
    for resp in responses:
        assert resp.status_code == 404
        assert resp.json()["error"] == {"code": "NOT_FOUND", "message": "Task not found"}

    assert client.get(url, headers=alice["headers"]).json()["data"]["task"]["title"] == "Private"


def test_malformed_id(client, alice):
    resp = client.get("/api/tasks/not-an-id", headers=alice["headers"])

    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "INVALID_ID"


def test_set_priority(client, alice):
    task = create_task(client, alice["headers"], "T", priority="low")

    resp = client.put(
        f"/api/tasks/{task['id']}/priority", json={"priority": "high"}, headers=alice["headers"]
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["task"]["priority"] == "high"


def test_list_filters_sorts_and_paginates(client, alice):
    h = alice["headers"]
    create_task(client, h, "t1", dueDate=future(3))
    c1 = create_task(client, h, "c1", dueDate=future(1))
    c2 = create_task(client, h, "c2", dueDate=future(2))
    ip = create_task(client, h, "ip", dueDate=future(4))
    t2 = create_task(client, h, "t2", dueDate=future(5))
    for task, status in ((c1, "completed"), (c2, "completed"), (ip, "in-progress")):
        client.put(f"/api/tasks/{task['id']}/status", json={"status": status}, headers=h)

    resp = client.get(
        "/api/tasks",
        params={"status": "todo,completed", "sortBy": "dueDate:desc", "limit": 2},
        headers=h,
    )
    data = resp.json()["data"]
    assert [t["title"] for t in data["tasks"]] == ["t2", "t1"]
    assert data["pagination"] == {"total": 4, "page": 1, "limit": 2, "pages": 2}

    page2 = client.get(
        "/api/tasks",
        params={"status": "todo,completed", "sortBy": "dueDate:desc", "limit": 2, "page": 2},
        headers=h,
    ).json()["data"]
    assert [t["title"] for t in page2["tasks"]] == ["c2", "c1"]
    assert t2["id"] not in {t["id"] for t in page2["tasks"]}


def test_list_default_sort_is_due_date_ascending(client, alice):
    h = alice["headers"]
    create_task(client, h, "later", dueDate=future(9))
    create_task(client, h, "sooner", dueDate=future(2))

    titles = [t["title"] for t in client.get("/api/tasks", headers=h).json()["data"]["tasks"]]
    assert titles == ["sooner", "later"]


def test_stats_cover_all_tasks_not_just_filtered(client, alice):
    # Status counts are a whole-account dashboard figure, independent of filters.
    h = alice["headers"]
    create_task(client, h, "a")
    done = create_task(client, h, "b")
    client.put(f"/api/tasks/{done['id']}/status", json={"status": "completed"}, headers=h)

    data = client.get("/api/tasks", params={"status": "completed"}, headers=h).json()["data"]
    assert data["pagination"]["total"] == 1
    assert data["stats"] == {"todo": 1, "in-progress": 0, "completed": 1, "archived": 0}


def test_list_is_scoped_to_owner(client, alice, bob):
    create_task(client, alice["headers"], "alice's")
    create_task(client, bob["headers"], "bob's")

    data = client.get("/api/tasks", headers=bob["headers"]).json()["data"]
    assert [t["title"] for t in data["tasks"]] == ["bob's"]
    assert data["stats"]["todo"] == 1


def test_search_matches_title_description_and_tags(client, alice):
    h = alice["headers"]
    create_task(client, h, "Buy MILK")
    create_task(client, h, "Errand", description="get some milk too")
    create_task(client, h, "Dairy", tags=["milkshake"])
    create_task(client, h, "Unrelated", tags=["bread"])

    data = client.get("/api/tasks", params={"search": "milk", "sortBy": "title"}, headers=h).json()["data"]
    assert [t["title"] for t in data["tasks"]] == ["Buy MILK", "Dairy", "Errand"]


def test_filter_by_priority_category_and_due_range(client, alice):
    h = alice["headers"]
    work = create_category(client, h, "Work")
    create_task(client, h, "in", priority="high", category=work["id"], dueDate=future(10))
    create_task(client, h, "too late", priority="high", category=work["id"], dueDate=future(40))
    create_task(client, h, "low", priority="low", category=work["id"], dueDate=future(10))
    create_task(client, h, "no cat", priority="high", dueDate=future(10))

    params = {
        "priority": "high",
        "category": work["id"],
        "dueDate[gte]": future(5),
        "dueDate[lte]": future(20),
    }
    data = client.get("/api/tasks", params=params, headers=h).json()["data"]
    assert [t["title"] for t in data["tasks"]] == ["in"]
    assert data["tasks"][0]["category"]["name"] == "Work"


def test_list_rejects_bad_parameters(client, alice):
    h = alice["headers"]
    for params in ({"status": "done"}, {"sortBy": "secret:asc"}, {"page": 0}, {"limit": 0}):
        resp = client.get("/api/tasks", params=params, headers=h)
        assert resp.status_code == 400, params
        assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


def test_share_errors(client, alice, bob):
    task = create_task(client, alice["headers"], "Shared")
    url = f"/api/tasks/{task['id']}/share"

    missing_user = client.post(url, json={"userId": new_id()}, headers=alice["headers"])
    assert missing_user.status_code == 404
    assert missing_user.json()["error"]["message"] == "User not found"

    not_owner = client.post(url, json={"userId": alice["user"]["id"]}, headers=bob["headers"])
    assert not_owner.status_code == 404
    assert not_owner.json()["error"]["message"] == "Task not found"

    no_user_id = client.post(url, json={}, headers=alice["headers"])
    assert no_user_id.json()["error"]["code"] == "VALIDATION_ERROR"


def test_owner_can_share_with_themselves(client, alice):
    task = create_task(client, alice["headers"], "Mine")
    url = f"/api/tasks/{task['id']}/share"

    resp = client.post(url, json={"userId": alice["user"]["id"]}, headers=alice["headers"])
    assert resp.status_code == 200
    assert resp.json()["data"]["task"]["sharedWith"] == [alice["user"]["id"]]

    again = client.post(url, json={"userId": alice["user"]["id"]}, headers=alice["headers"])
    assert again.json()["error"]["code"] == "ALREADY_SHARED"

    shared = client.get("/api/tasks/shared/me", headers=alice["headers"]).json()["data"]["tasks"]
    assert [t["id"] for t in shared] == [task["id"]]


def test_shared_with_me_is_read_only_visibility(client, alice, bob):
    carol = register(client, "carol")
    work = create_category(client, alice["headers"], "Work", color="#FF0000")
    task = create_task(client, alice["headers"], "Shared", category=work["id"])
    create_task(client, alice["headers"], "Not shared")
    client.post(f"/api/tasks/{task['id']}/share", json={"userId": bob["user"]["id"]}, headers=alice["headers"])

    shared = client.get("/api/tasks/shared/me", headers=bob["headers"]).json()["data"]["tasks"]
    assert [t["title"] for t in shared] == ["Shared"]
    assert shared[0]["owner"] == {
        "id": alice["user"]["id"],
        "username": "alice",
        "email": "alice@x.com",
    }
    assert shared[0]["category"] == {"id": work["id"], "name": "Work", "color": "#FF0000"}

    assert client.get("/api/tasks/shared/me", headers=carol["headers"]).json()["data"]["tasks"] == []

    # Sharing grants no write access and no owner-scoped reads.
    url = f"/api/tasks/{task['id']}"
    assert client.get(url, headers=bob["headers"]).status_code == 404
    assert client.put(url, json={"title": "hijack"}, headers=bob["headers"]).status_code == 404


def test_deleting_a_task_drops_its_shares(client, alice, bob):
    task = create_task(client, alice["headers"], "Shared")
    client.post(f"/api/tasks/{task['id']}/share", json={"userId": bob["user"]["id"]}, headers=alice["headers"])

    client.delete(f"/api/tasks/{task['id']}", headers=alice["headers"])
    assert client.get("/api/tasks/shared/me", headers=bob["headers"]).json()["data"]["tasks"] == []


def test_unknown_route_uses_error_envelope(client):
    resp = client.get("/api/nothing-here")

    assert resp.status_code == 404
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == "NOT_FOUND"
