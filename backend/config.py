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
    rate_limit: str = "30/minute"

    # Matching engine settings
    taxonomy_path: str = ""  # optional JSON file replacing the built-in title tables
    expanded_match_ceiling: float = 0.9  # cap for title matches found only through expansion

    # Fraud-detection settings
    discrepancy_threshold: int = 10  # discrepancy score above this is significant
    high_similarity_threshold: int = 80  # cross-candidate score at/above this is suspicious

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
