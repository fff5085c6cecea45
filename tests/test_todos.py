def test_list_todos_signed_out_is_empty(client, supabase, alice):
    client.post("/api/v1/todos", json={"title": "Buy milk"}, headers=alice["headers"])

    r = client.get("/api/v1/todos")
    assert r.status_code == 200
    assert r.json() == []


def test_create_and_list_newest_first(client, alice):
    for title in ("first", "  second  "):
        r = client.post("/api/v1/todos", json={"title": title}, headers=alice["headers"])
        assert r.status_code == 201

    r = client.get("/api/v1/todos", headers=alice["headers"])
    titles = [t["title"] for t in r.json()]
    assert titles == ["second", "first"]
    assert all(t["completed"] is False for t in r.json())


def test_create_blank_title_rejected(client, supabase, alice):
    r = client.post("/api/v1/todos", json={"title": "   "}, headers=alice["headers"])
    assert r.status_code == 400
    assert supabase.rows("todos") == []


def test_create_requires_auth(client, supabase):
    r = client.post("/api/v1/todos", json={"title": "nope"})
    assert r.status_code == 401
    assert supabase.rows("todos") == []


def test_toggle_flips_completed(client, alice):
    todo = client.post("/api/v1/todos", json={"title": "walk"}, headers=alice["headers"]).json()

    r = client.post(f"/api/v1/todos/{todo['id']}/toggle", headers=alice["headers"])
    assert r.status_code == 200
    assert r.json()["completed"] is True

    r = client.post(f"/api/v1/todos/{todo['id']}/toggle", headers=alice["headers"])
    assert r.json()["completed"] is False


def test_todos_are_scoped_to_owner(client, supabase, alice, bob):
    todo = client.post("/api/v1/todos", json={"title": "private"}, headers=alice["headers"]).json()

    assert client.get("/api/v1/todos", headers=bob["headers"]).json() == []
    assert client.post(f"/api/v1/todos/{todo['id']}/toggle", headers=bob["headers"]).status_code == 404

    r = client.delete(f"/api/v1/todos/{todo['id']}", headers=bob["headers"])
    assert r.status_code == 404
    assert len(supabase.rows("todos")) == 1


def test_delete_todo(client, supabase, alice):
    todo = client.post("/api/v1/todos", json={"title": "done soon"}, headers=alice["headers"]).json()

    r = client.delete(f"/api/v1/todos/{todo['id']}", headers=alice["headers"])
    assert r.status_code == 204
    assert supabase.rows("todos") == []


def test_backend_failure_surfaces_as_500(client, supabase, alice):
    supabase.failing_tables.add("todos")

    r = client.get("/api/v1/todos", headers=alice["headers"])
    assert r.status_code == 500


def test_delete_missing_todo_is_404(client, alice):
    r = client.delete("/api/v1/todos/does-not-exist", headers=alice["headers"])
    assert r.status_code == 404
