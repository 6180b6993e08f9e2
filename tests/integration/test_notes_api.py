"""Notes endpoints: tenant isolation, plan enforcement, bulk delete."""

import uuid


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


async def _create(client, headers, **fields):
    payload = {"title": "Note", "content": "content"}
    payload.update(fields)
    return await client.post("/api/notes", json=payload, headers=headers)


async def _invite_member(client, admin_headers):
    await client.post("/api/subscription", json={"plan": "pro"}, headers=admin_headers)
    resp = await client.post(
        "/api/auth/invite",
        json={"email": f"m_{uuid.uuid4().hex[:6]}@example.com", "password": "Password123!"},
        headers=admin_headers,
    )
    assert resp.status_code == 201
    return _auth(resp.json()["token"])


async def test_requires_auth(async_client):
    assert (await async_client.get("/api/notes")).status_code == 401
    assert (await _create(async_client, {})).status_code == 401


async def test_create_and_get(async_client, register_tenant):
    headers, body = await register_tenant()

    resp = await _create(async_client, headers, title="Hello", tags=["Work", "Project X"])
    assert resp.status_code == 201
    created = resp.json()
    assert created["message"] == "Note created successfully"
    note = created["note"]
    assert note["tags"] == ["Work", "Project X"]
    assert note["isPrivate"] is False
    assert note["userId"] == body["user"]["id"]
    assert note["tenantId"] == body["user"]["tenantId"]

    resp = await async_client.get(f"/api/notes/{note['id']}", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["note"]["title"] == "Hello"


async def test_other_tenant_gets_404(async_client, register_tenant):
    headers_a, _ = await register_tenant(tenant_name="A")
    headers_b, _ = await register_tenant(tenant_name="B")
    note_id = (await _create(async_client, headers_a)).json()["note"]["id"]

    for method in ("GET", "DELETE"):
        resp = await async_client.request(method, f"/api/notes/{note_id}", headers=headers_b)
        assert resp.status_code == 404
    resp = await async_client.put(f"/api/notes/{note_id}", json={"title": "x"}, headers=headers_b)
    assert resp.status_code == 404

    listing = (await async_client.get("/api/notes", headers=headers_b)).json()
    assert listing["notes"] == []


async def test_private_note_needs_pro_even_with_old_token(async_client, register_tenant):
    headers, _ = await register_tenant()

    resp = await _create(async_client, headers, isPrivate=True)
    assert resp.status_code == 403
    assert resp.json()["error"] == "authorization_denied"

    resp = await async_client.post("/api/subscription", json={"plan": "pro"}, headers=headers)
    assert resp.status_code == 200

    # same pre-upgrade token
    resp = await _create(async_client, headers, isPrivate=True)
    assert resp.status_code == 201
    assert resp.json()["note"]["isPrivate"] is True


async def test_private_notes_hidden_from_colleagues(async_client, register_tenant):
    admin_headers, _ = await register_tenant()
    member_headers = await _invite_member(async_client, admin_headers)

    private_id = (await _create(async_client, admin_headers, isPrivate=True)).json()["note"]["id"]
    public_id = (await _create(async_client, admin_headers)).json()["note"]["id"]

    assert (await async_client.get(f"/api/notes/{private_id}", headers=member_headers)).status_code == 403
    assert (await async_client.get(f"/api/notes/{public_id}", headers=member_headers)).status_code == 200

    # reading is allowed, changing is not
    resp = await async_client.put(f"/api/notes/{public_id}", json={"title": "x"}, headers=member_headers)
    assert resp.status_code == 403
    resp = await async_client.delete(f"/api/notes/{public_id}", headers=member_headers)
    assert resp.status_code == 403


async def test_tag_limit(async_client, register_tenant):
    headers, _ = await register_tenant()
    resp = await _create(async_client, headers, tags=["a", "b", "c", "d"])
    assert resp.status_code == 403


async def test_update_and_delete(async_client, register_tenant):
    headers, _ = await register_tenant()
    note_id = (await _create(async_client, headers, tags=["a"])).json()["note"]["id"]

    resp = await async_client.put(
        f"/api/notes/{note_id}", json={"content": "new content"}, headers=headers
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Note updated successfully"
    assert body["note"]["content"] == "new content"
    assert body["note"]["title"] == "Note"

    resp = await async_client.delete(f"/api/notes/{note_id}", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Note deleted successfully"
    assert (await async_client.get(f"/api/notes/{note_id}", headers=headers)).status_code == 404


async def test_list_search_tags_and_pagination(async_client, register_tenant):
    headers, _ = await register_tenant()
    await _create(async_client, headers, title="Work plan", tags=["work"])
    await _create(async_client, headers, title="Groceries", content="milk", tags=["home"])
    await _create(async_client, headers, title="Ideas", tags=["misc"])

    listing = (await async_client.get("/api/notes", headers=headers)).json()
    assert [n["title"] for n in listing["notes"]] == ["Ideas", "Groceries", "Work plan"]
    assert listing["pagination"] == {"page": 1, "limit": 10, "total": 3, "totalPages": 1}

    found = (await async_client.get("/api/notes?search=MILK", headers=headers)).json()
    assert [n["title"] for n in found["notes"]] == ["Groceries"]

    tagged = (await async_client.get("/api/notes?tags=work,home", headers=headers)).json()
    assert {n["title"] for n in tagged["notes"]} == {"Work plan", "Groceries"}

    paged = (await async_client.get("/api/notes?limit=2&page=2", headers=headers)).json()
    assert len(paged["notes"]) == 1
    assert paged["pagination"]["totalPages"] == 2

    assert (await async_client.get("/api/notes?limit=101", headers=headers)).status_code == 400


async def test_bulk_delete_mixed_ownership(async_client, register_tenant):
    admin_headers, _ = await register_tenant(tenant_name="A")
    member_headers = await _invite_member(async_client, admin_headers)
    other_headers, _ = await register_tenant(tenant_name="B")

    mine = [(await _create(async_client, admin_headers)).json()["note"]["id"] for _ in range(2)]
    colleague = (await _create(async_client, member_headers)).json()["note"]["id"]
    foreign = (await _create(async_client, other_headers)).json()["note"]["id"]

    resp = await async_client.request(
        "DELETE",
        "/api/notes/bulk",
        json={"noteIds": mine + [colleague, foreign]},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    assert resp.json() == {"message": "2 notes deleted successfully", "deletedCount": 2}

    assert (await async_client.get(f"/api/notes/{colleague}", headers=member_headers)).status_code == 200
    assert (await async_client.get(f"/api/notes/{foreign}", headers=other_headers)).status_code == 200

    resp = await async_client.request(
        "DELETE", "/api/notes/bulk", json={"noteIds": [foreign]}, headers=admin_headers
    )
    assert resp.status_code == 404
    assert resp.json()["message"] == "No notes found to delete"

    resp = await async_client.request(
        "DELETE", "/api/notes/bulk", json={"noteIds": []}, headers=admin_headers
    )
    assert resp.status_code == 400


async def test_bulk_delete_ignores_malformed_ids(async_client, register_tenant):
    headers, _ = await register_tenant()
    note_id = (await _create(async_client, headers)).json()["note"]["id"]

    resp = await async_client.request(
        "DELETE", "/api/notes/bulk", json={"noteIds": [note_id, "not-a-note"]}, headers=headers
    )
    assert resp.status_code == 200
    assert resp.json()["deletedCount"] == 1

    resp = await async_client.request(
        "DELETE", "/api/notes/bulk", json={"noteIds": ["not-a-note"]}, headers=headers
    )
    assert resp.status_code == 404


async def test_malformed_note_id_is_not_found(async_client, register_tenant):
    headers, _ = await register_tenant()

    for method in ("GET", "DELETE"):
        resp = await async_client.request(method, "/api/notes/abc", headers=headers)
        assert resp.status_code == 404
        assert resp.json()["message"] == "Note not found"
    resp = await async_client.put("/api/notes/abc", json={"title": "x"}, headers=headers)
    assert resp.status_code == 404


async def test_search_wildcards_are_literal(async_client, register_tenant):
    headers, _ = await register_tenant()
    await _create(async_client, headers, title="alpha")

    for term in ("alp_a", "%25"):
        listing = (await async_client.get(f"/api/notes?search={term}", headers=headers)).json()
        assert listing["pagination"]["total"] == 0

    listing = (await async_client.get("/api/notes?search=LPH", headers=headers)).json()
    assert listing["pagination"]["total"] == 1


async def test_tag_filter_keeps_case(async_client, register_tenant):
    headers, _ = await register_tenant()
    await _create(async_client, headers, title="Tagged", tags=["Work"])

    found = (await async_client.get("/api/notes?tags=Work", headers=headers)).json()
    assert [n["title"] for n in found["notes"]] == ["Tagged"]
    missed = (await async_client.get("/api/notes?tags=work", headers=headers)).json()
    assert missed["notes"] == []
