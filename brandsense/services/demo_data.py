# File: brandsense/services/demo_data.py

"""
Canned analysis sections used in demo mode and when the OpenAI quota is
exhausted. The text is brand-neutral so it never trips mismatch detection.
"""

import copy
from typing import Any

from brandsense.services.prompts import SECTION_BRAND_IDENTITY, SECTION_KEYWORDS, SECTION_SENTIMENT

DEMO_BRAND_IDENTITY: dict[str, Any] = {
    "bpmData": [
        {"name": "Visibility", "score": 84, "description": "How often and prominently the brand appears across LLM-generated contexts."},
        {"name": "Consistency", "score": 78, "description": "How coherent its tone, values, and messaging appear across topics."},
        {"name": "Emotional Resonance", "score": 81, "description": "How strongly the brand evokes emotional or cultural reactions."},
        {"name": "Distinctiveness", "score": 73, "description": "How clearly it stands out from category-level or generic mentions."},
    ],
    "totalBPM": 79,
    "toneData": [
        {"trait": "Innovation", "fullName": "Innovation", "score": 85},
        {"trait": "Trust", "fullName": "Trust / Reliability", "score": 88},
        {"trait": "Accessibility", "fullName": "Accessibility / Mass Appeal", "score": 72},
        {"trait": "Prestige", "fullName": "Prestige / Premium Feel", "score": 66},
        {"trait": "Activism", "fullName": "Activism / Social Responsibility", "score": 48},
        {"trait": "Performance", "fullName": "Performance / Technical Expertise", "score": 80},
    ],
    "brandPowerStatement": "A trusted, innovative brand delivering reliable quality with a clear and consistent voice across conversations.",
    "brandIdentitySummary": "The brand shows a <strong>strong market presence</strong> with high scores in trust and reliability. Innovation perception is strong, positioning the brand well for future growth.",
    "dominantThemes": [
        {"title": "Innovation Leadership", "description": "Consistently recognized as a market innovator", "impact": "Very High"},
        {"title": "Quality Excellence", "description": "Strong reputation for superior product quality", "impact": "High"},
        {"title": "Customer Trust", "description": "High levels of consumer confidence and brand advocacy", "impact": "High"},
    ],
    "coreBrandPersona": "A reliable innovator that combines modern solutions with proven quality",
    "keyAssociations": [
        "Innovation", "Quality", "Trust", "Premium", "Reliability",
        "Design", "Community", "Service", "Value", "Heritage",
    ],
}

DEMO_SENTIMENT: dict[str, Any] = {
    "overallSummary": "Predominantly positive sentiment with strong emotional connections. Minor areas for improvement in customer service response times.",
    "primarySentiments": [
        {"category": "Positive", "score": 64, "colorType": "success", "themes": "Product quality, innovation, reliability"},
        {"category": "Neutral", "score": 20, "colorType": "primary", "themes": "Pricing discussions, feature comparisons"},
        {"category": "Negative", "score": 9, "colorType": "destructive", "themes": "Support response times, availability"},
        {"category": "Mixed", "score": 7, "colorType": "foreground", "themes": "Value for money"},
    ],
    "emotionalClusters": [
        {"name": "Excitement", "score": 58, "explanation": "Strong positive reactions to product launches"},
        {"name": "Trust", "score": 72, "explanation": "High confidence in brand promises and delivery"},
        {"name": "Aspiration", "score": 61, "explanation": "Seen as a brand people want to be associated with"},
    ],
    "sentimentProfile": [
        {"dimension": "Trust", "score": 82, "trend": "stable", "themes": "Quality, consistency", "summary": "Consistently high confidence in the brand"},
        {"dimension": "Innovation", "score": 78, "trend": "up", "themes": "Launches, technology", "summary": "Positive and strengthening innovation image"},
        {"dimension": "Value", "score": 66, "trend": "stable", "themes": "Pricing, durability", "summary": "Good value perception with some price concerns"},
    ],
}

DEMO_KEYWORDS: dict[str, Any] = {
    "summary": "Strong visibility in core categories with growing presence in emerging segments. Brand keywords show positive sentiment alignment.",
    "keywords": [
        {"keyword": "innovative", "visibility": 92, "trend": "up", "tone": "Positive", "share": 15, "explanation": "Frequently associated with new product launches"},
        {"keyword": "quality", "visibility": 88, "trend": "stable", "tone": "Positive", "share": 18, "explanation": "Core brand attribute consistently mentioned"},
        {"keyword": "reliable", "visibility": 85, "trend": "stable", "tone": "Positive", "share": 16, "explanation": "Performance and consistency references"},
        {"keyword": "trusted", "visibility": 82, "trend": "up", "tone": "Positive", "share": 14, "explanation": "Brand confidence and advocacy"},
        {"keyword": "modern", "visibility": 78, "trend": "up", "tone": "Positive", "share": 11, "explanation": "Design and technology associations"},
        {"keyword": "premium", "visibility": 75, "trend": "up", "tone": "Neutral", "share": 12, "explanation": "Price positioning discussions"},
        {"keyword": "professional", "visibility": 72, "trend": "stable", "tone": "Positive", "share": 9, "explanation": "Business and enterprise context"},
        {"keyword": "sustainable", "visibility": 58, "trend": "up", "tone": "Neutral", "share": 6, "explanation": "Growing interest in sourcing and footprint"},
        {"keyword": "support", "visibility": 51, "trend": "stable", "tone": "Neutral", "share": 4, "explanation": "Service and after-sales questions"},
        {"keyword": "expensive", "visibility": 45, "trend": "down", "tone": "Negative", "share": 5, "explanation": "Price concern mentions declining"},
    ],
}

_DEMO_SECTIONS = {
    SECTION_BRAND_IDENTITY: DEMO_BRAND_IDENTITY,
    SECTION_SENTIMENT: DEMO_SENTIMENT,
    SECTION_KEYWORDS: DEMO_KEYWORDS,
}


def demo_section(section: str) -> dict[str, Any]:
    """Return a fresh copy of the demo payload for one section."""
    return copy.deepcopy(_DEMO_SECTIONS[section])
