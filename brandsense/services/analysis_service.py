# File: brandsense/services/analysis_service.py

"""
Brand analysis runner.

Runs after the response has been sent (FastAPI ``BackgroundTasks``) with its
own database session:

  1. Reuse a fresh cached payload for the same brand / market / language.
  2. Otherwise ask for the three sections concurrently and normalize them.
  3. Store the payload on the project and in the shared cache.

Any failure leaves the project in the ``error`` state.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from brandsense.core.config import Settings, get_settings
from brandsense.models.analysis_cache import AnalysisCacheEntry
from brandsense.models.project import STATUS_ERROR, STATUS_READY, Project
from brandsense.models.project_data import ProjectData
from brandsense.schemas.analysis import (
    BrandIdentityData,
    KeywordAnalysisData,
    SentimentAnalysisData,
)
from brandsense.services.chatgpt import ChatGPTClient
from brandsense.services.prompts import (
    SECTION_BRAND_IDENTITY,
    SECTION_KEYWORDS,
    SECTION_SENTIMENT,
    SECTIONS,
    build_prompt,
)

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], Session]


def cache_key(brand_name: str, market: str, language: str) -> str:
    parts = [p.strip().lower() for p in (brand_name, market, language)]
    return "analysis:" + ":".join(parts)


def _as_aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def get_cached_payload(db: Session, key: str, now: Optional[datetime] = None) -> Optional[dict[str, Any]]:
    entry = db.get(AnalysisCacheEntry, key)
    if entry is None:
        return None
    now = now or datetime.now(timezone.utc)
    if _as_aware(entry.expires_at) <= now:
        return None
    return entry.payload


def store_cached_payload(db: Session, key: str, payload: dict[str, Any], ttl_seconds: int) -> bool:
    """
    Write a payload to the shared cache and commit it.

    Returns False when another analysis inserted the same key first; that
    entry is kept and the caller carries on with its own payload.
    """
    now = datetime.now(timezone.utc)
    entry = db.get(AnalysisCacheEntry, key)
    if entry is None:
        entry = AnalysisCacheEntry(cache_key=key, payload=payload, expires_at=now)
        db.add(entry)
    entry.payload = payload
    entry.created_at = now
    entry.expires_at = now + timedelta(seconds=ttl_seconds)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Analysis cache %s was written concurrently, keeping the existing entry", key)
        return False
    return True


def normalize_payload(sections: dict[str, dict[str, Any]]) -> dict[str, Any]:
    """
    Validate raw sections and return the stored camelCase document.

    ``totalBPM`` is always recomputed from the BPM sub-scores.
    """
    identity = BrandIdentityData.model_validate(sections.get(SECTION_BRAND_IDENTITY) or {})
    identity.total_bpm = identity.computed_bpm()
    sentiment = SentimentAnalysisData.model_validate(sections.get(SECTION_SENTIMENT) or {})
    keywords = KeywordAnalysisData.model_validate(sections.get(SECTION_KEYWORDS) or {})

    return {
        SECTION_BRAND_IDENTITY: identity.model_dump(by_alias=True),
        SECTION_SENTIMENT: sentiment.model_dump(by_alias=True),
        SECTION_KEYWORDS: keywords.model_dump(by_alias=True),
    }


def generate_payload(
    brand_name: str,
    market: str,
    language: str,
    chatgpt: ChatGPTClient,
) -> dict[str, Any]:
    with ThreadPoolExecutor(max_workers=len(SECTIONS)) as pool:
        futures = {
            section: pool.submit(
                chatgpt.complete_json,
                build_prompt(section, brand_name, market, language),
                section,
            )
            for section in SECTIONS
        }
        sections = {section: future.result() for section, future in futures.items()}
    return normalize_payload(sections)


def _save_project_payload(db: Session, project: Project, payload: dict[str, Any]) -> None:
    if project.data is None:
        project.data = ProjectData(project_id=project.id, payload=payload)
    else:
        project.data.payload = payload
    project.data_status = STATUS_READY
    project.last_refreshed_at = datetime.now(timezone.utc)


def run_project_analysis(
    project_id: str,
    session_factory: SessionFactory,
    settings: Optional[Settings] = None,
    chatgpt: Optional[ChatGPTClient] = None,
) -> Optional[str]:
    """
    Analyze one project and return its final ``data_status``.

    Returns None when the project no longer exists.
    """
    settings = settings or get_settings()
    db = session_factory()
    try:
        project = db.get(Project, project_id)
        if project is None:
            logger.warning("Analysis skipped, project %s no longer exists", project_id)
            return None

        brand_name, market, language = project.name, project.market, project.language
        key = cache_key(brand_name, market, language)
        logger.info("Starting analysis for %s in %s (%s)", brand_name, market, language)

        try:
            payload = get_cached_payload(db, key)
            if payload is not None:
                logger.info("Using cached analysis %s", key)
            else:
                payload = generate_payload(
                    brand_name, market, language, chatgpt or ChatGPTClient(settings)
                )
                store_cached_payload(db, key, payload, settings.analysis_cache_ttl_seconds)

            _save_project_payload(db, project, payload)
            db.commit()
            logger.info("Analysis complete for %s (%s)", brand_name, project_id)
            return STATUS_READY

        except Exception:
            logger.exception("Analysis failed for project %s", project_id)
            db.rollback()
            project = db.get(Project, project_id)
            if project is None:
                return None
            project.data_status = STATUS_ERROR
            db.commit()
            return STATUS_ERROR
    finally:
        db.close()
