def _upload(client, headers, filename, content=b"\x89PNG fake", content_type="image/png"):
    return client.post(
        "/api/v1/photos",
        files={"file": (filename, content, content_type)},
        headers=headers,
    )


def test_upload_stores_object_and_metadata(client, supabase, alice):
    r = _upload(client, alice["headers"], "beach.png")
    assert r.status_code == 201
    photo = r.json()

    user_id = alice["user"].id
    assert photo["name"] == "beach.png"
    assert photo["storage_path"].startswith(f"{user_id}/")
    assert photo["storage_path"].endswith(".png")
    assert photo["url"].endswith(f"/photos/{photo['storage_path']}")
    assert photo["storage_path"] in supabase.buckets["photos"]
    assert len(supabase.rows("photos")) == 1


def test_upload_without_extension_uses_bare_uuid_key(client, supabase, alice):
    photo = _upload(client, alice["headers"], "README").json()
    key = photo["storage_path"].split("/", 1)[1]
    assert "." not in key


def test_failed_storage_write_inserts_nothing(client, supabase, alice):
    supabase.failing_uploads.add("photos")

    r = _upload(client, alice["headers"], "beach.png")
    assert r.status_code == 500
    assert supabase.rows("photos") == []


def test_failed_metadata_insert_leaves_stored_object(client, supabase, alice):
    supabase.failing_tables.add("photos")

    r = _upload(client, alice["headers"], "beach.png")
    assert r.status_code == 500
    assert len(supabase.buckets["photos"]) == 1


def test_sort_by_name_and_date(client, alice):
    for name in ("b.png", "c.png", "a.png"):
        _upload(client, alice["headers"], name)

    by_name = client.get("/api/v1/photos", params={"sort": "name"}, headers=alice["headers"]).json()
    by_date = client.get("/api/v1/photos", params={"sort": "date"}, headers=alice["headers"]).json()

    assert [p["name"] for p in by_name] == ["a.png", "b.png", "c.png"]
    assert [p["name"] for p in by_date] == ["a.png", "c.png", "b.png"]
    assert len(by_name) == len(by_date)


def test_search_is_case_insensitive(client, alice):
    for name in ("Holiday.png", "receipt.jpg", "holiday-2.png"):
        _upload(client, alice["headers"], name)

    r = client.get("/api/v1/photos", params={"search": "HOLI"}, headers=alice["headers"])
    assert sorted(p["name"] for p in r.json()) == ["Holiday.png", "holiday-2.png"]


def test_list_signed_out_is_empty(client, alice):
    _upload(client, alice["headers"], "beach.png")
    assert client.get("/api/v1/photos").json() == []


def test_rename_trims_and_rejects_blank(client, alice):
    photo = _upload(client, alice["headers"], "beach.png").json()

    r = client.put(f"/api/v1/photos/{photo['id']}", json={"name": "  Sunset  "}, headers=alice["headers"])
    assert r.status_code == 200
    assert r.json()["name"] == "Sunset"

    r = client.put(f"/api/v1/photos/{photo['id']}", json={"name": "  "}, headers=alice["headers"])
    assert r.status_code == 400


def test_delete_removes_object_and_row(client, supabase, alice):
    photo = _upload(client, alice["headers"], "beach.png").json()

    r = client.delete(f"/api/v1/photos/{photo['id']}", headers=alice["headers"])
    assert r.status_code == 204
    assert supabase.buckets["photos"] == {}
    assert supabase.rows("photos") == []


def test_delete_keeps_row_when_storage_remove_fails(client, supabase, alice):
    photo = _upload(client, alice["headers"], "beach.png").json()
    supabase.failing_removes.add("photos")

    r = client.delete(f"/api/v1/photos/{photo['id']}", headers=alice["headers"])
    assert r.status_code == 500
    assert len(supabase.rows("photos")) == 1


def test_cannot_delete_someone_elses_photo(client, supabase, alice, bob):
    photo = _upload(client, alice["headers"], "beach.png").json()

    r = client.delete(f"/api/v1/photos/{photo['id']}", headers=bob["headers"])
    assert r.status_code == 404
    assert len(supabase.buckets["photos"]) == 1
