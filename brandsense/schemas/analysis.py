# File: brandsense/schemas/analysis.py

"""
Shape of the analysis payload stored per project.

The models parse model output, so they are lenient: every field has
a default, unknown keys are ignored and scores are coerced to integers in
0..100. ``model_dump(by_alias=True)`` gives back the camelCase document the
dashboard reads.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, ConfigDict, Field

from brandsense.schemas.base import APIModel


def _coerce_score(value: Any) -> int:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    return int(round(min(max(number, 0.0), 100.0)))


Score = Annotated[int, BeforeValidator(_coerce_score)]


class PayloadModel(APIModel):
    model_config = ConfigDict(extra="ignore")


class BPMMetric(PayloadModel):
    name: str = ""
    score: Score = 0
    description: str = ""


class ToneMetric(PayloadModel):
    trait: str = ""
    full_name: str = ""
    score: Score = 0


class DominantTheme(PayloadModel):
    title: str = ""
    description: str = ""
    impact: str = ""


class BrandIdentityData(PayloadModel):
    bpm_data: list[BPMMetric] = Field(default_factory=list)
    total_bpm: Score = Field(default=0, alias="totalBPM")
    tone_data: list[ToneMetric] = Field(default_factory=list)
    brand_power_statement: str = ""
    brand_identity_summary: str = ""
    dominant_themes: list[DominantTheme] = Field(default_factory=list)
    core_brand_persona: str = ""
    key_associations: list[str] = Field(default_factory=list)

    def computed_bpm(self) -> int:
        """Brand Power Metric: the mean of the BPM sub-scores."""
        if not self.bpm_data:
            return 0
        return int(round(sum(m.score for m in self.bpm_data) / len(self.bpm_data)))


class PrimarySentiment(PayloadModel):
    category: str = ""
    score: Score = 0
    color_type: str = ""
    themes: str = ""


class EmotionalCluster(PayloadModel):
    name: str = ""
    score: Score = 0
    explanation: str = ""


class SentimentDimension(PayloadModel):
    dimension: str = ""
    score: Score = 0
    trend: str = "stable"
    themes: str = ""
    summary: str = ""


class SentimentAnalysisData(PayloadModel):
    overall_summary: str = ""
    primary_sentiments: list[PrimarySentiment] = Field(default_factory=list)
    emotional_clusters: list[EmotionalCluster] = Field(default_factory=list)
    sentiment_profile: list[SentimentDimension] = Field(default_factory=list)


class KeywordMetric(PayloadModel):
    keyword: str = ""
    visibility: Score = 0
    trend: str = "stable"
    tone: str = "Neutral"
    share: Score = 0
    explanation: str = ""


class KeywordAnalysisData(PayloadModel):
    summary: str = ""
    keywords: list[KeywordMetric] = Field(default_factory=list)
