def test_create_requires_title_and_content(client, supabase, alice):
    for payload in ({"title": "", "content": "body"}, {"title": "Title", "content": "   "}):
        r = client.post("/api/v1/notes", json=payload, headers=alice["headers"])
        assert r.status_code == 400
    assert supabase.rows("notes") == []


def test_update_bumps_note_to_top(client, alice):
    first = client.post("/api/v1/notes", json={"title": "One", "content": "# one"}, headers=alice["headers"]).json()
    client.post("/api/v1/notes", json={"title": "Two", "content": "# two"}, headers=alice["headers"])

    titles = [n["title"] for n in client.get("/api/v1/notes", headers=alice["headers"]).json()]
    assert titles == ["Two", "One"]

    r = client.put(
        f"/api/v1/notes/{first['id']}",
        json={"title": "One (edited)", "content": "# one\n\nmore"},
        headers=alice["headers"],
    )
    assert r.status_code == 200
    assert r.json()["updated_at"] > first["updated_at"]

    titles = [n["title"] for n in client.get("/api/v1/notes", headers=alice["headers"]).json()]
    assert titles == ["One (edited)", "Two"]


def test_update_other_users_note_is_404(client, alice, bob):
    note = client.post("/api/v1/notes", json={"title": "Mine", "content": "x"}, headers=alice["headers"]).json()

    r = client.put(f"/api/v1/notes/{note['id']}", json={"title": "Hijack", "content": "y"}, headers=bob["headers"])
    assert r.status_code == 404


def test_delete_note(client, supabase, alice):
    note = client.post("/api/v1/notes", json={"title": "Gone", "content": "x"}, headers=alice["headers"]).json()

    assert client.delete(f"/api/v1/notes/{note['id']}", headers=alice["headers"]).status_code == 204
    assert supabase.rows("notes") == []


def test_list_signed_out_is_empty(client, alice):
    client.post("/api/v1/notes", json={"title": "Hidden", "content": "x"}, headers=alice["headers"])
    assert client.get("/api/v1/notes").json() == []


def test_delete_other_users_note_is_404(client, supabase, alice, bob):
    note = client.post("/api/v1/notes", json={"title": "Mine", "content": "x"}, headers=alice["headers"]).json()

    assert client.delete(f"/api/v1/notes/{note['id']}", headers=bob["headers"]).status_code == 404
    assert client.delete("/api/v1/notes/does-not-exist", headers=alice["headers"]).status_code == 404
    assert len(supabase.rows("notes")) == 1
