# File: brandsense/services/chatgpt.py

"""
Thin wrapper around the OpenAI chat completions API that returns parsed JSON.
"""

import json
import logging
from typing import Any, Optional

import openai
from openai import OpenAI

from brandsense.core.config import Settings, get_settings
from brandsense.services.demo_data import demo_section
from brandsense.services.prompts import SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class AnalysisError(Exception):
    """Raised when a section cannot be produced from the model response."""


def _is_quota_error(error: openai.APIStatusError) -> bool:
    return error.status_code == 429 or "insufficient_quota" in str(error)


class ChatGPTClient:
    """
    Produce analysis sections from ChatGPT.

    In demo mode (``DEMO_MODE`` set or no API key) the canned demo sections
    are returned instead, and quota exhaustion falls back to them as well.
    """

    def __init__(self, settings: Optional[Settings] = None, client: Optional[OpenAI] = None):
        self.settings = settings or get_settings()
        self.demo_mode = self.settings.use_demo_analysis
        self._client = client
        if self._client is None and not self.demo_mode:
            self._client = OpenAI(api_key=self.settings.openai_api_key)

    def complete_json(self, prompt: str, section: str) -> dict[str, Any]:
        if self.demo_mode:
            logger.info("Demo mode: using canned %s section", section)
            return demo_section(section)

        try:
            response = self._client.chat.completions.create(
                model=self.settings.openai_model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
                temperature=0.7,
            )
        except openai.APIStatusError as e:
            if _is_quota_error(e):
                logger.warning("OpenAI quota exceeded, falling back to demo %s section", section)
                return demo_section(section)
            logger.error("ChatGPT API error for %s: %s", section, e)
            raise AnalysisError(f"ChatGPT API failed: {e.status_code}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise AnalysisError(f"No content in ChatGPT response for {section}")

        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as e:
            raise AnalysisError(f"ChatGPT returned invalid JSON for {section}") from e

        if not isinstance(parsed, dict):
            raise AnalysisError(f"ChatGPT returned a non-object for {section}")

        # Some responses wrap the section in its own key
        if section in parsed and isinstance(parsed[section], dict):
            parsed = parsed[section]
        return parsed
