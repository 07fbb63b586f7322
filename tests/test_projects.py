# File: tests/test_projects.py

import uuid


def test_projects_require_auth(client):
    resp = client.get("/api/v1/projects")
    assert resp.status_code == 401


def test_list_projects_empty(client, auth_headers):
    resp = client.get("/api/v1/projects", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "projects": []}


def test_create_project_runs_analysis(client, auth_headers, project_fields):
    resp = client.post("/api/v1/projects", json=project_fields, headers=auth_headers)
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Project created successfully. Analysis is now processing."
    project = body["project"]
    assert project["dataStatus"] == "processing"
    assert project["timeframe"] == "Last 3 months"
    assert project["aiModel"] == "gpt-4o"

    # The background analysis has finished by the time the test client returns
    detail = client.get(f"/api/v1/projects/{project['id']}", headers=auth_headers).json()
    assert detail["project"]["dataStatus"] == "ready"
    assert detail["project"]["lastRefreshedAt"] is not None
    data = detail["data"]
    assert set(data) == {"brandIdentity", "sentimentAnalysis", "keywordAnalysis"}
    assert data["brandIdentity"]["totalBPM"] == 79
    assert len(data["keywordAnalysis"]["keywords"]) == 10


def test_create_project_trims_fields(client, auth_headers):
    resp = client.post(
        "/api/v1/projects",
        json={"name": "  Acme  ", "market": " Germany ", "language": "German", "industry": "  "},
        headers=auth_headers,
    )
    assert resp.status_code == 201
    project = resp.json()["project"]
    assert project["name"] == "Acme"
    assert project["market"] == "Germany"
    assert project["industry"] is None


def test_create_project_validates_name(client, auth_headers, project_fields):
    project_fields["name"] = "A"
    resp = client.post("/api/v1/projects", json=project_fields, headers=auth_headers)
    assert resp.status_code == 400
    assert "at least 2 characters" in resp.json()["detail"]

    project_fields["name"] = "x" * 101
    resp = client.post("/api/v1/projects", json=project_fields, headers=auth_headers)
    assert resp.status_code == 400


def test_create_project_missing_fields(client, auth_headers, project_fields):
    project_fields["market"] = ""
    resp = client.post("/api/v1/projects", json=project_fields, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Missing required fields: market"


def test_list_projects_newest_first(client, auth_headers, project_fields):
    for name in ("First Brand", "Second Brand"):
        project_fields["name"] = name
        client.post("/api/v1/projects", json=project_fields, headers=auth_headers)

    projects = client.get("/api/v1/projects", headers=auth_headers).json()["projects"]
    assert [p["name"] for p in projects] == ["Second Brand", "First Brand"]


def test_get_project_invalid_uuid(client, auth_headers):
    resp = client.get("/api/v1/projects/not-a-uuid", headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid UUID: not-a-uuid"


def test_get_project_not_found(client, auth_headers):
    resp = client.get(f"/api/v1/projects/{uuid.uuid4()}", headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Project not found"


def test_projects_are_scoped_to_owner(client, auth_headers, created_project, register, sign_in):
    register(client, email="bob@other.co", full_name="Bob")
    bob = {"Authorization": f"Bearer {sign_in(client, email='bob@other.co')}"}

    assert client.get("/api/v1/projects", headers=bob).json()["projects"] == []
    resp = client.get(f"/api/v1/projects/{created_project['id']}", headers=bob)
    assert resp.status_code == 404
    resp = client.delete(f"/api/v1/projects/{created_project['id']}", headers=bob)
    assert resp.status_code == 404


def test_update_project(client, auth_headers, created_project):
    resp = client.put(
        f"/api/v1/projects/{created_project['id']}",
        json={
            "name": "Acme Rockets Europe",
            "market": "Germany",
            "language": "German",
            "websiteUrl": "https://acme.example",
        },
        headers=auth_headers,
    )
    assert resp.status_code == 200
    project = resp.json()["project"]
    assert project["name"] == "Acme Rockets Europe"
    assert project["websiteUrl"] == "https://acme.example"
    assert project["dataStatus"] == "ready"


def test_delete_project(client, auth_headers, created_project):
    resp = client.delete(f"/api/v1/projects/{created_project['id']}", headers=auth_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["projectId"] == created_project["id"]
    assert body["projectName"] == "Acme Rockets"

    resp = client.get(f"/api/v1/projects/{created_project['id']}", headers=auth_headers)
    assert resp.status_code == 404


def test_refresh_project(client, auth_headers, created_project):
    resp = client.post(f"/api/v1/projects/{created_project['id']}/refresh", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Refresh in progress"

    detail = client.get(f"/api/v1/projects/{created_project['id']}", headers=auth_headers).json()
    assert detail["project"]["dataStatus"] == "ready"
