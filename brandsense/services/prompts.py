# File: brandsense/services/prompts.py

"""
Prompt builders for the three analysis sections.

Each prompt asks for a single JSON object in the exact shape stored in
``project_data.payload``.
"""

SYSTEM_PROMPT = "You are a brand analyst. Always respond with valid JSON only, no additional text."

SECTION_BRAND_IDENTITY = "brandIdentity"
SECTION_SENTIMENT = "sentimentAnalysis"
SECTION_KEYWORDS = "keywordAnalysis"

SECTIONS = (SECTION_BRAND_IDENTITY, SECTION_SENTIMENT, SECTION_KEYWORDS)


def brand_identity_prompt(brand_name: str, market: str, language: str) -> str:
    return f"""Analyze {brand_name}'s brand identity in {market} ({language} language).

RESPOND WITH VALID JSON ONLY. Use this exact structure:

{{
  "bpmData": [
    {{"name": "Visibility", "score": 0-100, "description": "How often and prominently the brand appears across LLM-generated contexts."}},
    {{"name": "Consistency", "score": 0-100, "description": "How coherent its tone, values, and messaging appear across topics."}},
    {{"name": "Emotional Resonance", "score": 0-100, "description": "How strongly the brand evokes emotional or cultural reactions."}},
    {{"name": "Distinctiveness", "score": 0-100, "description": "How clearly it stands out from category-level or generic mentions."}}
  ],
  "totalBPM": (average of 4 BPM scores),
  "toneData": [
    {{"trait": "Innovation", "fullName": "Innovation", "score": 0-100}},
    {{"trait": "Trust", "fullName": "Trust / Reliability", "score": 0-100}},
    {{"trait": "Accessibility", "fullName": "Accessibility / Mass Appeal", "score": 0-100}},
    {{"trait": "Prestige", "fullName": "Prestige / Premium Feel", "score": 0-100}},
    {{"trait": "Activism", "fullName": "Activism / Social Responsibility", "score": 0-100}},
    {{"trait": "Performance", "fullName": "Performance / Technical Expertise", "score": 0-100}}
  ],
  "brandPowerStatement": "Brief statement about brand power (200-300 characters)",
  "brandIdentitySummary": "Summary of brand positioning (300-400 characters, can use <strong> tags)",
  "dominantThemes": [
    {{"title": "Theme 1", "description": "Description", "impact": "Very High|High|Medium"}},
    {{"title": "Theme 2", "description": "Description", "impact": "Very High|High|Medium"}},
    {{"title": "Theme 3", "description": "Description", "impact": "Very High|High|Medium"}}
  ],
  "coreBrandPersona": "Description of how ChatGPT portrays the brand",
  "keyAssociations": ["association1", "association2", ... at least 10 items]
}}

Analyze authentically for {market} market context."""


def sentiment_prompt(brand_name: str, market: str, language: str) -> str:
    return f"""Analyze sentiment for {brand_name} in {market} ({language} language).

RESPOND WITH VALID JSON ONLY. Use this exact structure:

{{
  "overallSummary": "Summary of overall sentiment (300-400 characters)",
  "primarySentiments": [
    {{"category": "Positive", "score": 0-100, "colorType": "success", "themes": "Main positive themes"}},
    {{"category": "Neutral", "score": 0-100, "colorType": "primary", "themes": "Main neutral themes"}},
    {{"category": "Negative", "score": 0-100, "colorType": "destructive", "themes": "Main negative themes"}},
    {{"category": "Mixed", "score": 0-100, "colorType": "foreground", "themes": "Mixed sentiment themes"}}
  ],
  "emotionalClusters": [
    {{"name": "Excitement", "score": 0-100, "explanation": "Why this emotion is associated"}},
    {{"name": "Trust", "score": 0-100, "explanation": "Why this emotion is associated"}},
    {{"name": "Aspiration", "score": 0-100, "explanation": "Why this emotion is associated"}}
  ],
  "sentimentProfile": [
    {{"dimension": "Trust", "score": 0-100, "trend": "up|stable|down", "themes": "Key themes", "summary": "Brief summary"}},
    {{"dimension": "Innovation", "score": 0-100, "trend": "up|stable|down", "themes": "Key themes", "summary": "Brief summary"}},
    {{"dimension": "Value", "score": 0-100, "trend": "up|stable|down", "themes": "Key themes", "summary": "Brief summary"}}
  ]
}}

Note: primarySentiments scores should total approximately 100."""


def keyword_prompt(brand_name: str, market: str, language: str) -> str:
    return f"""Analyze keywords for {brand_name} in {market} ({language} language).

RESPOND WITH VALID JSON ONLY. Use this exact structure:

{{
  "summary": "Brief summary of keyword analysis (300-400 characters)",
  "keywords": [
    {{"keyword": "keyword1", "visibility": 0-100, "trend": "up|stable|down", "tone": "Positive|Neutral|Negative", "share": 0-100, "explanation": "Why this keyword matters"}},
    ... at least 10-15 keywords
  ]
}}

Include diverse keywords covering: product categories, brand attributes, themes, concerns, etc."""


PROMPT_BUILDERS = {
    SECTION_BRAND_IDENTITY: brand_identity_prompt,
    SECTION_SENTIMENT: sentiment_prompt,
    SECTION_KEYWORDS: keyword_prompt,
}


def build_prompt(section: str, brand_name: str, market: str, language: str) -> str:
    try:
        builder = PROMPT_BUILDERS[section]
    except KeyError:
        raise ValueError(f"Unknown analysis section: {section}") from None
    return builder(brand_name, market, language)
