# File: tests/test_analysis_service.py

import json
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import httpx
import openai
import pytest

from brandsense.models.analysis_cache import AnalysisCacheEntry
from brandsense.models.project import Project
from brandsense.models.user import User
from brandsense.services.analysis_service import (
    cache_key,
    get_cached_payload,
    normalize_payload,
    run_project_analysis,
    store_cached_payload,
)
from brandsense.services.chatgpt import AnalysisError, ChatGPTClient
from brandsense.services.demo_data import DEMO_BRAND_IDENTITY, demo_section
from brandsense.services.prompts import SECTION_BRAND_IDENTITY, SECTIONS, build_prompt


class FakeCompletions:
    def __init__(self, content):
        self.content = content
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_openai(content):
    completions = FakeCompletions(content)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


class FailingChatGPT:
    def complete_json(self, prompt, section):
        raise AnalysisError("boom")


@pytest.fixture()
def project(db):
    user = User(email="jane@acme.io", hashed_password="x", full_name="Jane")
    db.add(user)
    db.commit()
    project = Project(
        user_id=user.id,
        name="Acme",
        market="Germany",
        language="German",
        timeframe="Last 3 months",
        ai_model="gpt-4o",
        data_status="processing",
    )
    db.add(project)
    db.commit()
    return project


def test_cache_key_is_case_insensitive():
    assert cache_key(" Acme ", "Germany", "German") == "analysis:acme:germany:german"
    assert cache_key("ACME", "GERMANY", "german") == cache_key("acme", "germany", "German")


def test_cached_payload_expires(db):
    store_cached_payload(db, "analysis:a:b:c", {"x": 1}, ttl_seconds=60)
    db.commit()

    assert get_cached_payload(db, "analysis:a:b:c") == {"x": 1}
    later = datetime.now(timezone.utc) + timedelta(seconds=61)
    assert get_cached_payload(db, "analysis:a:b:c", now=later) is None
    assert get_cached_payload(db, "analysis:missing") is None


def test_normalize_payload_recomputes_bpm_and_clamps_scores():
    identity = dict(DEMO_BRAND_IDENTITY, totalBPM=12)
    identity["bpmData"] = [
        {"name": "Visibility", "score": 150, "description": ""},
        {"name": "Consistency", "score": "70.4", "description": ""},
    ]
    payload = normalize_payload({SECTION_BRAND_IDENTITY: identity})

    bpm = payload["brandIdentity"]["bpmData"]
    assert [m["score"] for m in bpm] == [100, 70]
    assert payload["brandIdentity"]["totalBPM"] == 85
    assert payload["sentimentAnalysis"]["primarySentiments"] == []
    assert payload["keywordAnalysis"]["keywords"] == []


def test_build_prompt_mentions_brand_market_language():
    for section in SECTIONS:
        prompt = build_prompt(section, "Acme", "Germany", "German")
        assert "Acme" in prompt
        assert "Germany" in prompt
        assert "German" in prompt

    with pytest.raises(ValueError):
        build_prompt("unknown", "Acme", "Germany", "German")


def test_demo_mode_returns_canned_section(demo_settings):
    chatgpt = ChatGPTClient(demo_settings)
    assert chatgpt.demo_mode is True
    section = chatgpt.complete_json("prompt", SECTION_BRAND_IDENTITY)
    assert section == demo_section(SECTION_BRAND_IDENTITY)


def test_complete_json_unwraps_section_key(demo_settings):
    settings = demo_settings.model_copy(update={"demo_mode": False, "openai_api_key": "sk-test"})
    client, completions = fake_openai(json.dumps({"brandIdentity": {"totalBPM": 50}}))

    result = ChatGPTClient(settings, client=client).complete_json("prompt", "brandIdentity")

    assert result == {"totalBPM": 50}
    call = completions.calls[0]
    assert call["model"] == settings.openai_model
    assert call["response_format"] == {"type": "json_object"}
    assert call["messages"][1]["content"] == "prompt"


def test_complete_json_rejects_invalid_json(demo_settings):
    settings = demo_settings.model_copy(update={"demo_mode": False, "openai_api_key": "sk-test"})
    client, _ = fake_openai("not json")

    with pytest.raises(AnalysisError):
        ChatGPTClient(settings, client=client).complete_json("prompt", "brandIdentity")


def test_run_project_analysis_stores_payload_and_cache(db, session_factory, project):
    status = run_project_analysis(project.id, session_factory)
    assert status == "ready"

    db.expire_all()
    stored = db.get(Project, project.id)
    assert stored.data_status == "ready"
    assert stored.last_refreshed_at is not None
    assert stored.data.payload["brandIdentity"]["totalBPM"] == 79
    assert get_cached_payload(db, cache_key("Acme", "Germany", "German")) == stored.data.payload


def test_run_project_analysis_reuses_cached_payload(db, session_factory, project):
    cached = normalize_payload({})
    store_cached_payload(db, cache_key("acme", "germany", "german"), cached, ttl_seconds=3600)
    db.commit()

    status = run_project_analysis(project.id, session_factory, chatgpt=FailingChatGPT())
    assert status == "ready"

    db.expire_all()
    assert db.get(Project, project.id).data.payload == cached


def test_run_project_analysis_marks_error(db, session_factory, project):
    status = run_project_analysis(project.id, session_factory, chatgpt=FailingChatGPT())
    assert status == "error"

    db.expire_all()
    stored = db.get(Project, project.id)
    assert stored.data_status == "error"
    assert stored.data is None


def test_run_project_analysis_missing_project(session_factory):
    assert run_project_analysis("00000000-0000-0000-0000-000000000000", session_factory) is None


class RaisingCompletions:
    def __init__(self, error):
        self.error = error

    def create(self, **kwargs):
        raise self.error


def raising_openai(error):
    return SimpleNamespace(chat=SimpleNamespace(completions=RaisingCompletions(error)))


def _openai_response(status_code):
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    return httpx.Response(status_code, request=request)


@pytest.fixture()
def live_settings(demo_settings):
    return demo_settings.model_copy(update={"demo_mode": False, "openai_api_key": "sk-test"})


def test_rate_limit_falls_back_to_demo_section(live_settings):
    error = openai.RateLimitError("Rate limit reached", response=_openai_response(429), body=None)
    chatgpt = ChatGPTClient(live_settings, client=raising_openai(error))

    assert chatgpt.complete_json("prompt", SECTION_BRAND_IDENTITY) == demo_section(SECTION_BRAND_IDENTITY)


def test_insufficient_quota_falls_back_to_demo_section(live_settings):
    error = openai.APIStatusError(
        "You exceeded your current quota: insufficient_quota",
        response=_openai_response(403),
        body={"error": {"code": "insufficient_quota"}},
    )
    chatgpt = ChatGPTClient(live_settings, client=raising_openai(error))

    assert chatgpt.complete_json("prompt", "sentimentAnalysis") == demo_section("sentimentAnalysis")


def test_other_api_errors_raise_analysis_error(live_settings):
    error = openai.APIStatusError("Internal server error", response=_openai_response(500), body=None)
    chatgpt = ChatGPTClient(live_settings, client=raising_openai(error))

    with pytest.raises(AnalysisError, match="ChatGPT API failed: 500"):
        chatgpt.complete_json("prompt", SECTION_BRAND_IDENTITY)


def test_concurrent_cache_write_keeps_project_ready(db, session_factory, project):
    key = cache_key("Acme", "Germany", "German")
    lookups = []

    def racing_session_factory():
        session = session_factory()
        real_get = session.get

        def get(entity, ident, **kwargs):
            if entity is AnalysisCacheEntry:
                lookups.append(ident)
                if len(lookups) == 2:
                    # another analysis of the same brand finishes first
                    other = session_factory()
                    other.add(
                        AnalysisCacheEntry(
                            cache_key=ident,
                            payload={"winner": True},
                            expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
                        )
                    )
                    other.commit()
                    other.close()
                    return None
            return real_get(entity, ident, **kwargs)

        session.get = get
        return session

    status = run_project_analysis(project.id, racing_session_factory)

    assert status == "ready"
    assert lookups == [key, key]
    db.expire_all()
    stored = db.get(Project, project.id)
    assert stored.data_status == "ready"
    assert stored.data.payload["brandIdentity"]["totalBPM"] == 79
    assert get_cached_payload(db, key) == {"winner": True}


def test_store_cached_payload_reports_lost_race(db, session_factory):
    key = "analysis:a:b:c"
    other = session_factory()
    other.add(
        AnalysisCacheEntry(
            cache_key=key,
            payload={"winner": True},
            expires_at=datetime.now(timezone.utc) + timedelta(hours=1),
        )
    )
    other.commit()
    other.close()

    # lookup ran before the other writer committed
    db.get = lambda entity, ident, **kwargs: None
    assert store_cached_payload(db, key, {"x": 1}, ttl_seconds=60) is False
