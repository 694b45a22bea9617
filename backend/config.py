import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False
    log_level: str = "INFO"

    max_resume_chars: int = 50000
    max_job_description_chars: int = 10000

    # Analysis pipeline
    min_step_duration_ms: int = 300  # floor per step so progress stays observable
    analysis_timeout_seconds: float = 120.0
    progress_retention_seconds: float = 30.0  # finished progress states are pruned after this
    retry_window_seconds: float = 3600.0  # submitted text is kept this long after a run finishes
    log_progress_events: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
