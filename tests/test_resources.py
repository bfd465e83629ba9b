import pytest
from bson import ObjectId

from schemas import LOGO_MAX_LENGTH
from tests.conftest import RESOURCE_CASES, delete

PATHS = sorted(RESOURCE_CASES)
# Keys whose stored value differs from the submitted one
NORMALISED_KEYS = {"startDate", "tags", "activities", "achievements"}


def _create(client, path, payload=None):
    payload = payload if payload is not None else RESOURCE_CASES[path][0]
    return client.post(f"/api/{path}", json=payload)


@pytest.mark.parametrize("path", PATHS)
def test_list_is_empty_list_when_no_documents(client, path):
    response = client.get(f"/api/{path}")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.parametrize("path", PATHS)
def test_create_echoes_submitted_values(client, path):
    payload = RESOURCE_CASES[path][0]
    response = _create(client, path)

    assert response.status_code == 201
    body = response.json()
    assert ObjectId.is_valid(body["_id"])
    assert body["createdAt"] and body["updatedAt"]
    for key, value in payload.items():
        if key not in NORMALISED_KEYS:
            assert body[key] == value


@pytest.mark.parametrize("path", PATHS)
def test_create_missing_required_field_is_rejected(client, path):
    payload, required, _, _ = RESOURCE_CASES[path]
    incomplete = {k: v for k, v in payload.items() if k != required}

    response = _create(client, path, incomplete)

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert client.get(f"/api/{path}").json() == []


@pytest.mark.parametrize("path", PATHS)
def test_update_unknown_id_returns_not_found(client, path):
    _, _, field, value = RESOURCE_CASES[path]
    response = client.put(f"/api/{path}", json={"_id": str(ObjectId()), field: value})
    assert response.status_code == 404
    assert "not found" in response.json()["error"]


@pytest.mark.parametrize("path", PATHS)
def test_update_malformed_id_returns_not_found(client, path):
    response = client.put(f"/api/{path}", json={"_id": "not-an-object-id"})
    assert response.status_code == 404


@pytest.mark.parametrize("path", PATHS)
def test_delete_unknown_id_returns_not_found(client, path):
    response = delete(client, f"/api/{path}", {"_id": str(ObjectId())})
    assert response.status_code == 404


@pytest.mark.parametrize("path", [p for p in PATHS if p != "about"])
def test_update_and_delete_require_id(client, path):
    _, _, field, value = RESOURCE_CASES[path]

    assert client.put(f"/api/{path}", json={field: value}).status_code == 400
    assert delete(client, f"/api/{path}", {}).status_code == 400
    assert delete(client, f"/api/{path}").status_code == 400


@pytest.mark.parametrize("path", PATHS)
def test_round_trip(client, path):
    _, _, field, value = RESOURCE_CASES[path]
    created = _create(client, path).json()

    listed = client.get(f"/api/{path}").json()
    assert [d["_id"] for d in listed] == [created["_id"]]

    response = client.put(f"/api/{path}", json={"_id": created["_id"], field: value})
    assert response.status_code == 200
    updated = response.json()
    assert updated[field] == value
    assert updated["createdAt"] == created["createdAt"]

    listed = client.get(f"/api/{path}").json()
    assert listed[0][field] == value

    response = delete(client, f"/api/{path}", {"_id": created["_id"]})
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert client.get(f"/api/{path}").json() == []


def test_list_is_newest_first(client):
    for name in ("Python", "Go", "Rust"):
        _create(client, "skills", {"type": "Technical Skills", "name": name})

    names = [s["name"] for s in client.get("/api/skills").json()]
    assert names == ["Rust", "Go", "Python"]


def test_server_managed_fields_are_ignored_on_create(client):
    payload = dict(RESOURCE_CASES["skills"][0], _id="abc", createdAt="1999-01-01")
    body = _create(client, "skills", payload).json()

    assert body["_id"] != "abc"
    assert not body["createdAt"].startswith("1999")


def test_update_keeps_fields_not_in_payload(client):
    created = _create(client, "projects").json()

    updated = client.put("/api/projects", json={"_id": created["_id"], "year": "2024"}).json()

    assert updated["year"] == "2024"
    assert updated["title"] == created["title"]
    assert updated["tags"] == ["web", "api"]


def test_update_accepts_snake_case_keys(client):
    created = _create(client, "projects").json()

    response = client.put("/api/projects", json={
        "_id": created["_id"],
        "image_url": "https://images.example.org/new.png",
        "long_description": "Longer story",
    })

    assert response.status_code == 200
    updated = response.json()
    assert updated["imageUrl"] == "https://images.example.org/new.png"
    assert updated["longDescription"] == "Longer story"
    assert "image_url" not in updated
    assert client.get("/api/projects").json()[0]["imageUrl"] == "https://images.example.org/new.png"


def test_about_upsert_accepts_snake_case_keys(client):
    client.put("/api/about", json=RESOURCE_CASES["about"][0])

    body = client.put("/api/about", json={"short_bio": "Still counting."}).json()

    assert body["shortBio"] == "Still counting."
    assert "short_bio" not in body


def test_update_is_revalidated(client):
    created = _create(client, "skills").json()

    response = client.put("/api/skills", json={"_id": created["_id"], "type": "Cooking"})

    assert response.status_code == 400
    assert client.get("/api/skills").json()[0]["type"] == "Technical Skills"


def test_invalid_json_body_is_client_error(client):
    response = client.post(
        "/api/skills", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid input"


# About is a singleton

def test_about_second_create_is_rejected(client):
    assert _create(client, "about").status_code == 201

    response = _create(client, "about")

    assert response.status_code == 400
    assert response.json()["error"] == "About already exists"
    assert len(client.get("/api/about").json()) == 1


def test_about_put_without_id_upserts_singleton(client):
    payload = RESOURCE_CASES["about"][0]

    response = client.put("/api/about", json=payload)
    assert response.status_code == 200
    first = response.json()

    response = client.put("/api/about", json={"motto": "Keep going"})
    assert response.status_code == 200
    second = response.json()

    assert second["_id"] == first["_id"]
    assert second["motto"] == "Keep going"
    assert second["email"] == payload["email"]
    assert len(client.get("/api/about").json()) == 1


def test_about_put_without_id_still_validates(client):
    response = client.put("/api/about", json={"motto": "Incomplete"})
    assert response.status_code == 400
    assert client.get("/api/about").json() == []


def test_about_delete_without_id_removes_singleton(client):
    _create(client, "about")

    assert delete(client, "/api/about").json() == {"success": True}
    response = delete(client, "/api/about")
    assert response.status_code == 404
    assert response.json()["error"] == "No about content found"


# Field normalisation and bounds

def test_project_tags_split_on_commas(client):
    body = _create(client, "projects", dict(
        RESOURCE_CASES["projects"][0], tags=" web, api ,, cms ", technologies="FastAPI,MongoDB"
    )).json()

    assert body["tags"] == ["web", "api", "cms"]
    assert body["technologies"] == ["FastAPI", "MongoDB"]
    assert body["type"] == "individual"


def test_education_activities_split_on_newlines(client):
    body = _create(client, "education").json()

    assert body["activities"] == ["Chess club", "Rowing"]
    assert body["startDate"].startswith("2019-09-01")
    assert body["isCurrentlyEnrolled"] is False


def test_experience_achievements_split_on_newlines(client):
    body = _create(client, "experience").json()
    assert body["achievements"] == ["Shipped v2", "Led migration"]


@pytest.mark.parametrize("path", ["education", "experience"])
def test_logo_size_bound(client, path):
    payload = RESOURCE_CASES[path][0]

    too_big = _create(client, path, dict(payload, logo="a" * (LOGO_MAX_LENGTH + 1)))
    assert too_big.status_code == 400
    assert "Logo image is too large" in str(too_big.json()["details"])

    at_limit = _create(client, path, dict(payload, logo="a" * LOGO_MAX_LENGTH))
    assert at_limit.status_code == 201


def test_gallery_needs_at_least_one_image(client):
    response = _create(client, "gallery", {"title": "Empty", "images": []})
    assert response.status_code == 400


def test_skill_type_must_be_known(client):
    response = _create(client, "skills", {"type": "Cooking", "name": "Pasta"})
    assert response.status_code == 400


def test_skill_name_is_trimmed(client):
    body = _create(client, "skills", {"type": "Languages Spoken", "name": "  French "}).json()
    assert body["name"] == "French"


def test_achievement_category_defaults_to_other(client):
    body = _create(client, "achievements", {"title": "Marathon"}).json()
    assert body["category"] == "other"


def test_message_status_defaults_to_new(client):
    body = _create(client, "messages").json()
    assert body["status"] == "new"


def test_message_status_must_be_known(client):
    created = _create(client, "messages").json()
    response = client.put("/api/messages", json={"_id": created["_id"], "status": "archived"})
    assert response.status_code == 400


def test_contact_email_must_be_valid(client):
    payload = dict(RESOURCE_CASES["contact"][0], email="not-an-email")
    assert _create(client, "contact", payload).status_code == 400
