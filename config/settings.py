"""
Centralized configuration using pydantic-settings.

How it works:
- Reads environment variables automatically (e.g., WASH_DURATION env var → Settings.WASH_DURATION)
- Falls back to defaults defined here if env vars are not set
- Can also read from a .env file in the project root

Every module imports `settings` from here instead of hardcoding values.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Redis ───────────────────────────────────────────────────
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0

    # ── Worker ──────────────────────────────────────────────────
    WORKER_POOL_SIZE: int = 4          # car jobs processed in parallel (one bay per thread)
    WORKER_POLL_TIMEOUT: int = 1       # seconds BLPOP waits before re-checking shutdown

    # ── Simulated work ──────────────────────────────────────────
    WASH_DURATION: float = 1.0         # seconds each wash tier takes
    ADDON_DURATION: float = 1.0        # seconds each add-on takes

    # ── App ─────────────────────────────────────────────────────
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    @property
    def redis_url(self) -> str:
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton, import this everywhere
settings = Settings()
