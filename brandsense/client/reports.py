# File: brandsense/client/reports.py

"""
Report views for the three dashboard tabs.

Each builder takes a cached project (with its ``data`` payload) and returns
a view ready for display. A missing or mismatched section yields the
placeholder view instead of stale numbers.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from brandsense.client.mismatch import detect_data_mismatch
from brandsense.schemas.analysis import (
    BPMMetric,
    BrandIdentityData,
    KeywordAnalysisData,
    SentimentAnalysisData,
)

REPORT_IDENTITY = "identity"
REPORT_SENTIMENT = "sentiment"
REPORT_KEYWORDS = "keywords"

REPORT_SECTIONS = {
    REPORT_IDENTITY: "brandIdentity",
    REPORT_SENTIMENT: "sentimentAnalysis",
    REPORT_KEYWORDS: "keywordAnalysis",
}

BPM_DIMENSIONS = (
    ("Visibility", "How often and prominently the brand appears across LLM-generated contexts."),
    ("Consistency", "How coherent its tone, values, and messaging appear across topics."),
    ("Emotional Resonance", "How strongly the brand evokes emotional or cultural reactions."),
    ("Distinctiveness", "How clearly it stands out from category-level or generic mentions."),
)


@dataclass
class ReportView:
    kind: str
    project_id: Optional[str]
    brand_name: str
    is_placeholder: bool
    mismatched_brand: Optional[str] = None
    sections: dict[str, Any] = field(default_factory=dict)


def _section(project: dict[str, Any], kind: str) -> tuple[Optional[dict[str, Any]], Optional[str]]:
    data = project.get("data") or {}
    section = data.get(REPORT_SECTIONS[kind])
    if not section:
        return None, None
    mismatched = detect_data_mismatch(project.get("name", ""), section)
    if mismatched:
        return None, mismatched
    return section, None


def _placeholder_identity() -> BrandIdentityData:
    return BrandIdentityData(
        bpm_data=[BPMMetric(name=name, score=0, description=desc) for name, desc in BPM_DIMENSIONS],
        total_bpm=0,
        brand_power_statement="Analysis data will appear here once processing is complete.",
    )


def build_brand_identity_view(project: dict[str, Any]) -> ReportView:
    raw, mismatched = _section(project, REPORT_IDENTITY)
    identity = BrandIdentityData.model_validate(raw) if raw else _placeholder_identity()

    return ReportView(
        kind=REPORT_IDENTITY,
        project_id=project.get("id"),
        brand_name=project.get("name", ""),
        is_placeholder=raw is None,
        mismatched_brand=mismatched,
        sections={
            "bpm": [(m.name, m.score, m.description) for m in identity.bpm_data],
            "totalBPM": identity.computed_bpm(),
            "tone": [(t.full_name or t.trait, t.score) for t in identity.tone_data],
            "brandPowerStatement": identity.brand_power_statement,
            "brandIdentitySummary": identity.brand_identity_summary,
            "dominantThemes": [(t.title, t.description, t.impact) for t in identity.dominant_themes],
            "coreBrandPersona": identity.core_brand_persona,
            "keyAssociations": list(identity.key_associations),
        },
    )


def build_sentiment_view(project: dict[str, Any]) -> ReportView:
    raw, mismatched = _section(project, REPORT_SENTIMENT)
    sentiment = SentimentAnalysisData.model_validate(raw or {})

    return ReportView(
        kind=REPORT_SENTIMENT,
        project_id=project.get("id"),
        brand_name=project.get("name", ""),
        is_placeholder=raw is None,
        mismatched_brand=mismatched,
        sections={
            "overallSummary": sentiment.overall_summary,
            "primarySentiments": [(s.category, s.score, s.themes) for s in sentiment.primary_sentiments],
            "emotionalClusters": [(c.name, c.score, c.explanation) for c in sentiment.emotional_clusters],
            "sentimentProfile": [
                (d.dimension, d.score, d.trend, d.summary) for d in sentiment.sentiment_profile
            ],
        },
    )


def build_keyword_view(project: dict[str, Any]) -> ReportView:
    raw, mismatched = _section(project, REPORT_KEYWORDS)
    keywords = KeywordAnalysisData.model_validate(raw or {})
    ranked = sorted(keywords.keywords, key=lambda k: k.visibility, reverse=True)

    return ReportView(
        kind=REPORT_KEYWORDS,
        project_id=project.get("id"),
        brand_name=project.get("name", ""),
        is_placeholder=raw is None,
        mismatched_brand=mismatched,
        sections={
            "summary": keywords.summary,
            "keywords": [
                (k.keyword, k.visibility, k.trend, k.tone, k.share, k.explanation) for k in ranked
            ],
        },
    )


REPORT_BUILDERS = {
    REPORT_IDENTITY: build_brand_identity_view,
    REPORT_SENTIMENT: build_sentiment_view,
    REPORT_KEYWORDS: build_keyword_view,
}


def build_report(kind: str, project: dict[str, Any]) -> ReportView:
    try:
        builder = REPORT_BUILDERS[kind]
    except KeyError:
        raise ValueError(f"Unknown report: {kind}") from None
    return builder(project)
