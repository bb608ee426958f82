from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Validation
    MAX_DEPTH: int = 100      # Default reference-hop limit for new registries
    FANOUT_WORKERS: int = 4   # Default pool size for AllOf.parallel()

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for production (structured JSON), False for dev (colored)

    class Config:
        env_prefix = "SIEVE_"
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
