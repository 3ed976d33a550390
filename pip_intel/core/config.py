import os
import logging
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()

class AISettings(BaseModel):
    openrouter_api_key: Optional[str] = Field(default=os.getenv("OPENROUTER_API_KEY"))
    model_name: str = Field(default=os.getenv("AI_MODEL_NAME", "google/gemini-2.0-flash-001"))
    kill_switch: bool = Field(default=os.getenv("AI_KILL_SWITCH", "false").lower() == "true")
    temperature: float = 0.4
    # Upper bound for the whole AI-assisted review call, retries included
    timeout_seconds: float = float(os.getenv("AI_TIMEOUT_SECONDS", "45"))
    request_timeout_seconds: float = float(os.getenv("AI_REQUEST_TIMEOUT_SECONDS", "30"))


class EnginePolicy(BaseModel):
    """Thresholds shared by the alerting and recommendation rules."""
    check_in_overdue_days: int = 7
    recent_window_days: int = 14
    stagnant_after_day: int = 14
    clarify_after_day: int = 20
    majority_failing_after_day: int = 30
    approaching_lead_days: int = 5
    # Milestones that get the approaching/overdue alert pair. Only the 30-day
    # milestone is covered unless configured otherwise.
    milestone_alerts: List[str] = Field(
        default_factory=lambda: [
            m.strip()
            for m in os.getenv("MILESTONE_ALERTS", "30_day").split(",")
            if m.strip()
        ],
        validate_default=True,
    )

    @field_validator("milestone_alerts")
    @classmethod
    def known_milestones(cls, value: List[str]) -> List[str]:
        unknown = [m for m in value if m not in ("30_day", "60_day", "90_day")]
        if unknown:
            raise ValueError(f"Unknown milestones in MILESTONE_ALERTS: {', '.join(unknown)}")
        return value


class Config(BaseModel):
    app_name: str = "PIP Intelligence Engine"
    environment: str = os.getenv("APP_ENV", "development")
    api_prefix: str = "/api"
    version: str = "1.0.0"
    request_id_header: str = "X-Request-ID"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # AI Components
    ai: AISettings = AISettings()
    ai_fallback_model: str = os.getenv("AI_FALLBACK_MODEL", "google/gemini-2.0-flash-lite-preview-02-05:free")

    # Per-organization lexicon overrides (performance.json / potential.json)
    lexicon_dir: Optional[str] = os.getenv("LEXICON_DIR")

    engine: EnginePolicy = EnginePolicy()

    # Date format handed to the document generator
    document_date_format: str = os.getenv("DOCUMENT_DATE_FORMAT", "%B %d, %Y")
    # Shorter form used for audit trail timeline entries
    audit_date_format: str = os.getenv("AUDIT_DATE_FORMAT", "%b %d, %Y")

    cors_origins: List[str] = Field(
        default_factory=lambda: [
            o.strip()
            for o in os.getenv(
                "CORS_ORIGINS",
                "http://localhost:3000,http://127.0.0.1:3000",
            ).split(",")
            if o.strip()
        ]
    )

settings = Config()

_logger = logging.getLogger(__name__)
if settings.environment != "development" and not settings.ai.openrouter_api_key:
    _logger.warning("OPENROUTER_API_KEY is not set; review analysis will use keyword matching only.")
