"""HTTP tests for the project, video and reference-data endpoints."""

import uuid

import pytest
from sqlalchemy.exc import OperationalError

from translationflow.database import get_session

from tests.helpers import UnavailableSession, auth_headers

API = "/api/v1"


async def create_project(client, payload):
    response = await client.post(f"{API}/projects", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def set_phase(client, project_id, phase, status, **extra):
    return await client.put(
        f"{API}/projects/{project_id}/phases/{phase}",
        json={"status": status, **extra},
    )


@pytest.mark.asyncio
async def test_requires_authentication(app):
    from httpx import ASGITransport, AsyncClient

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as anonymous:
        response = await anonymous.get(f"{API}/projects")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_rejects_token_with_wrong_signature(client):
    import jwt

    forged = jwt.encode({"sub": "user-1"}, "not-the-secret-but-still-32-bytes-long", algorithm="HS256")
    response = await client.get(
        f"{API}/projects", headers={"Authorization": f"Bearer {forged}"}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get(f"{API}/health")
    assert response.status_code == 200
    assert response.json()["database"] == "connected"


@pytest.mark.asyncio
async def test_request_id_is_echoed(client):
    response = await client.get(f"{API}/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"

    generated = await client.get(f"{API}/health")
    assert len(generated.headers["X-Request-ID"]) == 8


@pytest.mark.asyncio
async def test_workflow_reference_data(client):
    response = await client.get(f"{API}/workflow/phases")
    assert response.status_code == 200
    body = response.json()
    assert [p["phase"] for p in body["phases"]] == [
        "subtitle_translation",
        "translation_proofreading",
        "audio_production",
        "audio_review",
    ]
    assert body["phases"][0]["label"] == "Subtitle Translation"
    assert body["phases"][-1]["next_phase"] is None
    assert {s["status"] for s in body["statuses"]} == {"not_started", "in_progress", "completed"}


@pytest.mark.asyncio
async def test_language_search(client):
    response = await client.get(f"{API}/languages", params={"q": "span"})
    assert response.status_code == 200
    assert [lang["code"] for lang in response.json()["languages"]] == ["es"]


@pytest.mark.asyncio
async def test_create_project_defaults(client, project_payload):
    project = await create_project(client, project_payload)

    assert project["name"] == "Documentary S01"
    assert project["created_by"] == "user-1"
    assert project["current_phase"] == "subtitle_translation"
    assert set(project["phases"].values()) == {"not_started"}
    assert len(project["phases"]) == 4
    assert project["progress"] == 0
    assert project["status"] == "not_started"
    assert project["version"] == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"target_languages": ["en", "es"]},
        {"target_languages": []},
        {"name": "   "},
        {"source_language": "xx"},
    ],
)
async def test_create_project_validation(client, project_payload, overrides):
    response = await client.post(f"{API}/projects", json={**project_payload, **overrides})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_detail_includes_workflow_view(client, project_payload):
    project = await create_project(client, project_payload)

    response = await client.get(f"{API}/projects/{project['id']}")
    assert response.status_code == 200
    workflow = response.json()["workflow"]

    assert [step["number"] for step in workflow] == [1, 2, 3, 4]
    assert workflow[0]["is_current"] is True
    assert workflow[0]["startable"] is True
    assert workflow[1]["startable"] is False
    assert workflow[2]["status_label"] == "Not Started"


@pytest.mark.asyncio
async def test_phase_progression_scenario(client, project_payload):
    project = await create_project(client, project_payload)
    pid = project["id"]

    for phase in ("subtitle_translation", "translation_proofreading"):
        assert (await set_phase(client, pid, phase, "in_progress")).status_code == 200
        assert (await set_phase(client, pid, phase, "completed")).status_code == 200

    detail = (await client.get(f"{API}/projects/{pid}")).json()
    assert detail["progress"] == 50
    assert detail["workflow"][2]["startable"] is True

    response = await set_phase(client, pid, "audio_production", "in_progress")
    assert response.status_code == 200
    body = response.json()
    assert body["current_phase"] == "audio_production"
    assert body["phases"] == {
        "subtitle_translation": "completed",
        "translation_proofreading": "completed",
        "audio_production": "in_progress",
        "audio_review": "not_started",
    }
    assert body["status"] == "active"

    reread = (await client.get(f"{API}/projects/{pid}")).json()
    assert reread["phases"] == body["phases"]
    assert reread["current_phase"] == body["current_phase"]


@pytest.mark.asyncio
async def test_backward_phase_change_needs_force(client, project_payload):
    project = await create_project(client, project_payload)
    pid = project["id"]
    await set_phase(client, pid, "subtitle_translation", "completed")

    rejected = await set_phase(client, pid, "subtitle_translation", "in_progress")
    assert rejected.status_code == 409
    assert rejected.json()["code"] == "PHASE_TRANSITION_REJECTED"

    forced = await set_phase(client, pid, "subtitle_translation", "in_progress", force=True)
    assert forced.status_code == 200
    assert forced.json()["phases"]["subtitle_translation"] == "in_progress"


@pytest.mark.asyncio
async def test_unknown_phase_is_rejected(client, project_payload):
    project = await create_project(client, project_payload)
    response = await set_phase(client, project["id"], "voice_casting", "in_progress")
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_edit_keeps_phase_state(client, project_payload):
    project = await create_project(client, project_payload)
    pid = project["id"]
    await set_phase(client, pid, "subtitle_translation", "in_progress")

    response = await client.patch(f"{API}/projects/{pid}", json={"name": "Renamed", "target_languages": ["de"]})
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Renamed"
    assert body["target_languages"] == ["de"]
    assert body["phases"]["subtitle_translation"] == "in_progress"
    assert body["description"] == project_payload["description"]


@pytest.mark.asyncio
async def test_edit_with_stale_version_conflicts(client, project_payload):
    project = await create_project(client, project_payload)
    pid = project["id"]

    ok = await client.patch(f"{API}/projects/{pid}", json={"name": "A", "expected_version": 1})
    assert ok.status_code == 200

    stale = await client.patch(f"{API}/projects/{pid}", json={"name": "B", "expected_version": 1})
    assert stale.status_code == 409
    assert stale.json()["code"] == "VERSION_CONFLICT"


@pytest.mark.asyncio
async def test_edit_source_language_clashing_with_targets(client, project_payload):
    project = await create_project(client, project_payload)
    response = await client.patch(f"{API}/projects/{project['id']}", json={"source_language": "fr"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_other_users_cannot_see_project(client, project_payload):
    project = await create_project(client, project_payload)

    response = await client.get(
        f"{API}/projects/{project['id']}", headers=auth_headers("user-2")
    )
    assert response.status_code == 404
    assert response.json()["code"] == "PROJECT_NOT_FOUND"

    listing = await client.get(f"{API}/projects", headers=auth_headers("user-2"))
    assert listing.json()["total"] == 0


@pytest.mark.asyncio
async def test_list_and_filter_projects(client, project_payload):
    first = await create_project(client, {**project_payload, "name": "First"})
    second = await create_project(client, {**project_payload, "name": "Second"})
    await set_phase(client, first["id"], "subtitle_translation", "in_progress")

    listing = (await client.get(f"{API}/projects")).json()
    assert [p["id"] for p in listing["items"]] == [first["id"], second["id"]]

    active = (await client.get(f"{API}/projects", params={"status": "active"})).json()
    assert [p["id"] for p in active["items"]] == [first["id"]]


@pytest.mark.asyncio
async def test_stats(client, project_payload):
    first = await create_project(client, project_payload)
    await create_project(client, {**project_payload, "source_language": "ja", "target_languages": ["en"]})
    await set_phase(client, first["id"], "subtitle_translation", "in_progress")

    stats = (await client.get(f"{API}/projects/stats")).json()
    assert stats == {
        "active_projects": 2,
        "pending_translations": 1,
        "completed_translations": 0,
        "total_languages": 4,
    }


@pytest.mark.asyncio
async def test_delete_project_cascades_videos(client, project_payload, video_payload):
    project = await create_project(client, project_payload)
    pid = project["id"]
    for title in ("Episode 1", "Episode 2"):
        response = await client.post(f"{API}/projects/{pid}/videos", json={**video_payload, "title": title})
        assert response.status_code == 201

    assert (await client.get(f"{API}/projects/{pid}")).json()["video_count"] == 2

    response = await client.delete(f"{API}/projects/{pid}")
    assert response.status_code == 204

    assert (await client.get(f"{API}/projects/{pid}")).status_code == 404
    assert (await client.get(f"{API}/projects/{pid}/videos")).status_code == 404
    listing = (await client.get(f"{API}/projects")).json()
    assert pid not in [p["id"] for p in listing["items"]]


@pytest.mark.asyncio
async def test_delete_missing_project(client):
    response = await client.delete(f"{API}/projects/{uuid.uuid4()}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_video_endpoints(client, project_payload, video_payload):
    project = await create_project(client, project_payload)
    pid = project["id"]

    created = await client.post(f"{API}/projects/{pid}/videos", json=video_payload)
    assert created.status_code == 201
    video = created.json()
    assert video["status"] == "pending"
    assert video["project_id"] == pid
    vid = video["id"]

    updated = await client.patch(
        f"{API}/projects/{pid}/videos/{vid}",
        json={"translated_file_name": "ep01.es.srt", "translated_file_content": "Hola"},
    )
    assert updated.status_code == 200
    assert updated.json()["translated_file_name"] == "ep01.es.srt"

    status = await client.put(f"{API}/projects/{pid}/videos/{vid}/status", json={"status": "in_progress"})
    assert status.status_code == 200
    assert status.json()["status"] == "in_progress"

    listing = (await client.get(f"{API}/projects/{pid}/videos")).json()
    assert listing["total"] == 1

    assert (await client.delete(f"{API}/projects/{pid}/videos/{vid}")).status_code == 204
    missing = await client.get(f"{API}/projects/{pid}/videos/{vid}")
    assert missing.status_code == 404
    assert missing.json()["code"] == "VIDEO_NOT_FOUND"


@pytest.mark.asyncio
async def test_videos_of_other_users_project_are_hidden(client, project_payload, video_payload):
    project = await create_project(client, project_payload)
    response = await client.post(
        f"{API}/projects/{project['id']}/videos",
        json=video_payload,
        headers=auth_headers("user-2"),
    )
    assert response.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"name": None},
        {"description": None},
        {"source_language": None},
        {"target_languages": None},
    ],
)
async def test_edit_with_null_required_field_is_rejected(client, project_payload, body):
    project = await create_project(client, project_payload)

    response = await client.patch(f"{API}/projects/{project['id']}", json=body)
    assert response.status_code == 422

    unchanged = (await client.get(f"{API}/projects/{project['id']}")).json()
    assert unchanged["version"] == 1
    assert unchanged["name"] == project_payload["name"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"title": None},
        {"source_file_name": None},
        {"source_language": None},
        {"target_language": None},
        {"status": None},
    ],
)
async def test_video_edit_with_null_required_field_is_rejected(client, project_payload, video_payload, body):
    project = await create_project(client, project_payload)
    video = (await client.post(f"{API}/projects/{project['id']}/videos", json=video_payload)).json()

    response = await client.patch(f"{API}/projects/{project['id']}/videos/{video['id']}", json=body)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_video_edit_may_clear_optional_fields(client, project_payload, video_payload):
    project = await create_project(client, project_payload)
    video = (
        await client.post(
            f"{API}/projects/{project['id']}/videos",
            json={**video_payload, "video_url": "https://cdn.test/ep01.mp4"},
        )
    ).json()

    response = await client.patch(
        f"{API}/projects/{project['id']}/videos/{video['id']}", json={"video_url": None}
    )
    assert response.status_code == 200
    assert response.json()["video_url"] is None


@pytest.mark.asyncio
async def test_database_outage_maps_to_503(app, client):
    error = OperationalError("SELECT projects", {}, ConnectionRefusedError("connection refused"))

    async def unavailable_session():
        yield UnavailableSession(error)

    app.dependency_overrides[get_session] = unavailable_session
    try:
        response = await client.get(f"{API}/projects")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 503
    body = response.json()
    assert body["code"] == "BACKEND_UNAVAILABLE"
    assert "error" not in body


@pytest.mark.asyncio
async def test_unhandled_error_returns_500_with_request_id(app, client):
    @app.get("/explode")
    async def explode():
        raise RuntimeError("disk on fire")

    response = await client.get("/explode", headers={"X-Request-ID": "req-500"})

    assert response.status_code == 500
    assert response.headers["X-Request-ID"] == "req-500"
    body = response.json()
    assert body["code"] == "INTERNAL_ERROR"
    assert "error" not in body
