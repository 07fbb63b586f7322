# File: brandsense/client/mismatch.py

"""
Data mismatch detection.

A cached payload is considered stale when it mentions a well-known brand
other than the project's own. The check is a heuristic over a fixed list.
"""

import json
import logging
import re
from typing import Any, Optional

logger = logging.getLogger(__name__)

KNOWN_BRANDS = (
    "vodafone", "nike", "apple", "samsung", "coca-cola", "pepsi",
    "puma", "adidas", "reebok", "under armour", "new balance",
    "balparmak", "ülker", "eti", "türk telekom", "turkcell",
    "microsoft", "google", "amazon", "facebook", "meta",
    "tesla", "bmw", "mercedes", "audi", "volkswagen",
    "mcdonalds", "burger king", "starbucks", "dunkin",
)

_BRAND_PATTERNS = {brand: re.compile(rf"\b{re.escape(brand)}\b", re.IGNORECASE) for brand in KNOWN_BRANDS}


def detect_data_mismatch(brand_name: str, payload: Any) -> Optional[str]:
    """
    Return the first foreign known brand mentioned in ``payload``, or None.

    Brands that are part of the project's own name never count, so a project
    called "Nike Running" may mention Nike freely.
    """
    if not payload:
        return None

    text = json.dumps(payload, ensure_ascii=False).lower()
    own_name = (brand_name or "").strip().lower()

    for brand, pattern in _BRAND_PATTERNS.items():
        if pattern.search(own_name):
            continue
        if pattern.search(text):
            logger.error("Data mismatch: project %r contains data for %r", brand_name, brand)
            return brand
    return None
