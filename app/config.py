"""Environment-driven settings for the catalog service.

Every field can be overridden with a ``CATALOG_``-prefixed environment
variable or a ``.env`` file. List values are given as JSON, e.g.
``CATALOG_API_KEYS='["k1", "k2"]'``.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CATALOG_", env_file=".env", case_sensitive=False)

    environment: str = "production"
    host: str = "127.0.0.1"
    port: int = 8085

    # Auth allow-list
    api_keys: List[str] = [
        "plp-student-2025",
        "week2-express-api",
        "test-api-key-123",
    ]

    cors_origins: List[str] = ["*"]

    # Store
    seed_sample_data: bool = True

    # Pagination
    default_page_size: int = 10
    max_page_size: int = 100

    # Observability
    log_level: str = "INFO"
    log_format: str = "rich"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
