# src/petcare_api/core/config.py
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PLACEHOLDER_KEYS = frozenset({"YOUR_KEY", "YOUR_ACCESS_KEY", "CHANGEME"})


class Settings(BaseSettings):
    # App
    app_name: str = "PetCare API"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # API Keys: Mapping von API-Key zu User-ID (JSON-String als Env-Var)
    # Format: '{"key_abc123": "user_alice", "key_xyz789": "user_bob"}'
    api_keys: dict[str, str] = Field(default_factory=dict)

    # Amazon Product Advertising API 5
    amazon_access_key: str = ""
    amazon_secret_key: str = ""
    amazon_partner_tag: str = ""
    amazon_host: str = "webservices.amazon.com"
    amazon_region: str = "us-east-1"
    amazon_marketplace: str = "www.amazon.com"
    amazon_search_index: str = "PetSupplies"
    amazon_item_count: int = Field(default=10, ge=1, le=10)

    # Produktsuche: Timeout, globaler Cooldown und Cache-TTLs
    provider_timeout_seconds: float = Field(default=10.0, gt=0)
    provider_cooldown_ms: int = Field(default=2000, ge=0)
    search_cache_ttl_seconds: int = Field(default=86400, ge=0)
    # 0 = Fallback-Daten werden nicht gecacht
    fallback_cache_ttl_seconds: int = Field(default=300, ge=0)

    # CORS
    cors_origins: list[str] = Field(default=["*"])

    # Rate Limiting (HTTP-Ebene, pro Client)
    search_rate_limit: str = "100/15minutes"

    # Click-Tracking
    database_url: str = "sqlite+aiosqlite:///./petcare.db"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @property
    def amazon_configured(self) -> bool:
        """True, wenn alle Credentials gesetzt sind und der Access Key kein Platzhalter ist."""
        key = self.amazon_access_key.strip()
        if not key or not self.amazon_secret_key or not self.amazon_partner_tag:
            return False
        return key.upper() not in _PLACEHOLDER_KEYS and len(key) >= 5


@lru_cache
def get_settings() -> Settings:
    return Settings()
