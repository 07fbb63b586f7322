# File: brandsense/core/config.py

import os
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    model_config = ConfigDict(validate_default=True)

    # Basic app info
    PROJECT_NAME: str = "Brand Sense API"
    VERSION: str = "0.1.0"

    api_v1_prefix: str = "/api/v1"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # CORS
    backend_cors_origins: List[str] = os.getenv(
        "BACKEND_CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173"
    )

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./brandsense.db")

    # Security / auth
    secret_key: str = os.getenv("SECRET_KEY", "CHANGE_ME_IN_PRODUCTION")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24))  # 24h
    algorithm: str = os.getenv("JWT_ALGORITHM", "HS256")

    # Analysis
    openai_api_key: Optional[str] = os.getenv("OPENAI_API_KEY") or None
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-4o")
    demo_mode: bool = _env_flag("DEMO_MODE")
    analysis_cache_ttl_seconds: int = int(os.getenv("ANALYSIS_CACHE_TTL_SECONDS", 86400))
    default_timeframe: str = "Last 3 months"

    # Feedback mail
    resend_api_key: Optional[str] = os.getenv("RESEND_API_KEY") or None
    feedback_recipient: str = os.getenv("FEEDBACK_RECIPIENT", "feedback@brandsense.app")
    feedback_sender: str = os.getenv("FEEDBACK_SENDER", "Brand Sense <onboarding@resend.dev>")

    @field_validator("backend_cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        if isinstance(v, list):
            return v
        return []

    @property
    def use_demo_analysis(self) -> bool:
        return self.demo_mode or not self.openai_api_key


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
