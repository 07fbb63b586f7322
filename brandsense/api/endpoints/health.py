# File: brandsense/api/endpoints/health.py

from datetime import datetime, timezone

from fastapi import APIRouter

from brandsense.core.config import get_settings

router = APIRouter()


# -----------------------------
# LIVENESS + CONFIG FLAGS
# -----------------------------
@router.get("/healthz")
def healthz():
    settings = get_settings()
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": {
            "databaseUrl": bool(settings.database_url),
            "openaiApiKey": bool(settings.openai_api_key),
            "resendApiKey": bool(settings.resend_api_key),
            "demoMode": settings.use_demo_analysis,
        },
    }
