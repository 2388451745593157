import os

from dotenv import load_dotenv

load_dotenv()


def _csv(v: str):
    return [x.strip() for x in (v or "").split(",") if x.strip()]


def _env_bool(name: str, default: bool = False) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in ("1", "true", "yes", "y", "on")


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


# Config only reads the environment. Policy lives in domain/policies.py
class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "local-dev-secret")

    ENV = os.getenv("FLASK_ENV", "production")

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///repurposer.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_recycle": 280,
    }

    # -------------------------
    # Quota / input limits
    # -------------------------
    FREE_DAILY_LIMIT = _env_int("FREE_DAILY_LIMIT", 5)
    MAX_INPUT_CHARS = _env_int("MAX_INPUT_CHARS", 10000)
    MAX_TARGETS = _env_int("MAX_TARGETS", 10)

    # -------------------------
    # Provider (LLM)
    # -------------------------
    PROVIDER_DEFAULT = os.getenv("PROVIDER_DEFAULT", "openrouter").lower()

    OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY", "")
    OPENROUTER_BASE_URL = os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1").rstrip("/")
    OPENROUTER_MODEL = os.getenv("OPENROUTER_MODEL", "google/gemini-2.5-flash-preview")

    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
    OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4.1")

    ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY", "")
    CLAUDE_MODEL = os.getenv("CLAUDE_MODEL", "claude-sonnet-4-5-20250929")

    PROVIDER_MAX_TOKENS = _env_int("PROVIDER_MAX_TOKENS", 1000)
    PROVIDER_TEMPERATURE = _env_float("PROVIDER_TEMPERATURE", 0.7)
    PROVIDER_TIMEOUT = _env_float("PROVIDER_TIMEOUT", 60.0)

    # sent to OpenRouter as attribution headers
    APP_URL = os.getenv("APP_URL", "https://ai-content-repurposer.lovable.app")
    APP_TITLE = os.getenv("APP_TITLE", "AI Content Repurposer")

    # -------------------------
    # Identity
    # -------------------------
    # AUTH_VERIFY_URL set -> remote verification (Supabase style /auth/v1/user)
    # otherwise bearer tokens are itsdangerous-signed with SECRET_KEY
    AUTH_VERIFY_URL = os.getenv("AUTH_VERIFY_URL", "").strip()
    AUTH_API_KEY = os.getenv("AUTH_API_KEY", "").strip()
    AUTH_VERIFY_TIMEOUT = _env_float("AUTH_VERIFY_TIMEOUT", 5.0)
    AUTH_TOKEN_SALT = "bearer-token-v1"
    AUTH_TOKEN_TTL = _env_int("AUTH_TOKEN_TTL", 60 * 60 * 24 * 7)

    # -------------------------
    # CORS
    # -------------------------
    CORS_ORIGINS = _csv(os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173"))

    # -------------------------
    # Rate limiting (Flask-Limiter standard keys)
    # -------------------------
    REDIS_URL = os.getenv("REDIS_URL", "")
    RATELIMIT_STORAGE_URI = REDIS_URL if REDIS_URL else "memory://"
    RATELIMIT_DEFAULT = os.getenv("RATELIMIT_DEFAULT", "200 per hour")
    RATELIMIT_ENABLED = _env_bool("RATELIMIT_ENABLED", True)
    GENERATE_RATE_LIMIT = os.getenv("GENERATE_RATE_LIMIT", "60/minute")

    MAX_CONTENT_LENGTH = 256 * 1024
