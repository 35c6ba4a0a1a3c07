"""
Application settings loaded from environment variables (prefix HWALLET_) or a .env file.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# HS256 keys shorter than this are rejected at startup.
MIN_JWT_KEY_BYTES = 32


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="HWALLET_", extra="ignore")

    # --- Application ---
    app_name: str = "HWallets"
    debug: bool = False
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    # --- Persistence ---
    database_url: str = Field(
        default="sqlite+aiosqlite:///./hwallet.db", description="SQLAlchemy async database URL"
    )

    # --- Authentication ---
    jwt_key: str = Field(..., description="Symmetric signing key for issued tokens")
    jwt_duration: int = Field(..., ge=1, description="Token time-to-live in minutes")
    bcrypt_rounds: int = Field(default=12, ge=4, le=31, description="bcrypt work factor")

    @field_validator("jwt_key")
    @classmethod
    def _check_jwt_key_length(cls, value: str) -> str:
        if len(value.encode("utf-8")) < MIN_JWT_KEY_BYTES:
            raise ValueError(f"jwt_key should produce at least {MIN_JWT_KEY_BYTES} bytes.")
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()
