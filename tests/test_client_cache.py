# File: tests/test_client_cache.py

from datetime import datetime, timedelta, timezone

from brandsense.client.cache import (
    KEY_ACCESS_TOKEN,
    KEY_PROJECTS,
    KEY_USER_EMAIL,
    KEY_USER_FULL_NAME,
    LocalCache,
    should_suggest_refresh,
)

PROJECT_A = {"id": "11111111-1111-4111-8111-111111111111", "name": "Acme", "market": "Germany", "language": "German"}
PROJECT_B = {"id": "22222222-2222-4222-8222-222222222222", "name": "Globex", "market": "France", "language": "French"}


def test_missing_file_reads_empty(cache):
    assert cache.load_projects() == []
    assert cache.get_access_token() is None
    assert cache.validate_projects_format() is True


def test_save_and_replace_project(cache):
    cache.save_project(dict(PROJECT_A))
    cache.save_project(dict(PROJECT_B))
    cache.save_project(dict(PROJECT_A, name="Acme Corp"))

    projects = cache.load_projects()
    assert [p["name"] for p in projects] == ["Acme Corp", "Globex"]


def test_delete_selected_project_clears_selection(cache):
    cache.save_projects([dict(PROJECT_A), dict(PROJECT_B)])
    cache.set_selected_project(PROJECT_A["id"])

    cache.delete_project(PROJECT_A["id"])

    assert cache.get_selected_project_id() is None
    assert [p["id"] for p in cache.load_projects()] == [PROJECT_B["id"]]


def test_update_project_data_marks_ready(cache):
    cache.save_project(dict(PROJECT_A, dataStatus="processing"))
    cache.update_project_data(PROJECT_A["id"], {"brandIdentity": {}})

    project = cache.get_project(PROJECT_A["id"])
    assert project["dataStatus"] == "ready"
    assert project["data"] == {"brandIdentity": {}}
    assert project["lastRefreshedAt"] is not None


def test_update_project_status_records_error(cache):
    cache.save_project(dict(PROJECT_A))
    cache.update_project_status(PROJECT_A["id"], "error", error="quota")
    assert cache.get_project(PROJECT_A["id"])["error"] == "quota"

    cache.update_project_status(PROJECT_A["id"], "ready")
    assert "error" not in cache.get_project(PROJECT_A["id"])


def test_mark_refreshing(cache):
    assert cache.mark_project_refreshing(PROJECT_A["id"]) is False
    cache.save_project(dict(PROJECT_A, dataStatus="ready"))
    assert cache.mark_project_refreshing(PROJECT_A["id"]) is True
    assert cache.get_project(PROJECT_A["id"])["dataStatus"] == "processing"


def test_save_user_profile_sets_identity_keys(cache):
    cache.save_user_profile({"id": "u1", "email": "jane@acme.io", "fullName": "Jane Doe"})
    assert cache.get_item(KEY_USER_EMAIL) == "jane@acme.io"
    assert cache.get_item(KEY_USER_FULL_NAME) == "Jane Doe"
    assert cache.get_user_profile()["id"] == "u1"


def test_clear_all_and_restore_auth_keeps_identity(cache):
    cache.save_user_profile({"email": "jane@acme.io", "fullName": "Jane Doe"})
    cache.set_access_token("old")
    cache.save_projects([dict(PROJECT_A)])
    cache.set_selected_project(PROJECT_A["id"])

    cache.clear_all_and_restore_auth("new-token")

    assert cache.get_access_token() == "new-token"
    assert cache.get_item(KEY_USER_EMAIL) == "jane@acme.io"
    assert cache.get_item(KEY_PROJECTS) is None
    assert cache.get_selected_project_id() is None


def test_sync_projects_selects_first(cache):
    cache.sync_projects_from_backend([])
    assert cache.get_item(KEY_PROJECTS) is None

    cache.sync_projects_from_backend([dict(PROJECT_B), dict(PROJECT_A)])
    assert cache.get_selected_project()["id"] == PROJECT_B["id"]


def test_validate_projects_format(cache):
    cache.save_projects([dict(PROJECT_A)])
    assert cache.validate_projects_format() is True

    cache.save_projects([dict(PROJECT_A), {"id": "1700000000000", "name": "Legacy"}])
    assert cache.validate_projects_format() is False

    cache.set_item(KEY_PROJECTS, "nope")
    assert cache.validate_projects_format() is False


def test_corrupted_file_is_invalid_and_recoverable(tmp_path):
    path = tmp_path / "cache.json"
    path.write_text("{not json", encoding="utf-8")
    cache = LocalCache(path)

    assert cache.validate_projects_format() is False
    assert cache.load_projects() == []

    cache.clear_all()
    cache.set_item(KEY_ACCESS_TOKEN, "t")
    assert cache.get_access_token() == "t"


def test_should_suggest_refresh():
    now = datetime(2024, 6, 15, tzinfo=timezone.utc)
    stale = {"lastRefreshedAt": (now - timedelta(days=7)).isoformat()}
    fresh = {"lastRefreshedAt": (now - timedelta(days=6, hours=23)).isoformat()}

    assert should_suggest_refresh(stale, now=now) is True
    assert should_suggest_refresh(fresh, now=now) is False
    assert should_suggest_refresh({"lastRefreshedAt": None}, now=now) is False
    assert should_suggest_refresh({"lastRefreshedAt": "2024-06-01T00:00:00Z"}, now=now) is True
