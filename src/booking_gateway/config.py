import os
from dataclasses import dataclass, field
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()

CACHE_BACKENDS = ("redis", "memory")


def _split_paths(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # Cache
    cache_backend: str = os.getenv("CACHE_BACKEND", "redis")
    cache_query_ttl: int = int(os.getenv("CACHE_QUERY_TTL", "300"))  # 5 minutes
    response_cache_ttl: int = int(os.getenv("RESPONSE_CACHE_TTL", "300"))
    response_cache_paths: tuple[str, ...] = field(
        default_factory=lambda: _split_paths(
            os.getenv("RESPONSE_CACHE_PATHS", os.getenv("PROXY_BASE_PATH", "/api/v1/booking"))
        )
    )

    # Upstream hotel provider
    upstream_base_url: str = os.getenv("UPSTREAM_BASE_URL", "https://booking-com.p.rapidapi.com")
    upstream_host: str = os.getenv("UPSTREAM_HOST", "booking-com.p.rapidapi.com")
    rapidapi_key: str | None = os.getenv("RAPIDAPI_KEY")
    proxy_base_path: str = os.getenv("PROXY_BASE_PATH", "/api/v1/booking")
    upstream_timeout: float = float(os.getenv("UPSTREAM_TIMEOUT", "10.0"))

    # Fallback payloads (built-in catalog when unset)
    fallback_data_dir: str | None = os.getenv("FALLBACK_DATA_DIR")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "3030"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str | None = os.getenv("LOG_FILE")

    @property
    def api_key_configured(self) -> bool:
        """Check whether a provider API key is available for upstream calls."""
        return bool(self.rapidapi_key)

    @property
    def masked_api_key(self) -> str | None:
        """Return the provider key with everything but the last 4 characters hidden."""
        if not self.rapidapi_key:
            return None
        return "****" + self.rapidapi_key[-4:]

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_backend not in CACHE_BACKENDS:
            raise ValueError(
                f"CACHE_BACKEND must be one of {list(CACHE_BACKENDS)}, got {self.cache_backend!r}"
            )

        if self.cache_query_ttl <= 0:
            raise ValueError("CACHE_QUERY_TTL must be a positive number of seconds")

        if self.response_cache_ttl < 0:
            raise ValueError("RESPONSE_CACHE_TTL must be zero (disabled) or positive")

        if self.upstream_timeout <= 0:
            raise ValueError("UPSTREAM_TIMEOUT must be positive")

        if not self.proxy_base_path.startswith("/") or self.proxy_base_path.endswith("/"):
            raise ValueError(
                f"PROXY_BASE_PATH must start with '/' and not end with '/', got {self.proxy_base_path!r}"
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client(config: Settings | None = None) -> redis.Redis:
    """Create an asyncio Redis client instance."""
    config = config or settings
    return redis.from_url(
        config.redis_url,
        password=config.redis_password,
        decode_responses=True,
    )
