from dataclasses import dataclass
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_ISSUER = "gatehouse"
DEFAULT_JWT_AUDIENCE = "gatehouse-clients"


@dataclass(frozen=True)
class JwtSettings:
    """Token signing configuration, fixed at startup."""
    secret_key: str
    issuer: str = DEFAULT_JWT_ISSUER
    audience: str = DEFAULT_JWT_AUDIENCE
    algorithm: str = "HS256"
    expiration_hours: int = 24


@dataclass(frozen=True)
class HasherSettings:
    """Argon2id cost parameters, fixed at startup."""
    time_cost: int = 2
    memory_cost: int = 65536  # KiB
    parallelism: int = 2
    hash_len: int = 64
    salt_len: int = 16


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    database_url: str

    # Security
    secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = DEFAULT_JWT_ISSUER
    jwt_audience: str = DEFAULT_JWT_AUDIENCE
    jwt_expiration_hours: int = 24
    argon2_time_cost: int = 2
    argon2_memory_cost: int = 65536
    argon2_parallelism: int = 2

    # App
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    app_name: str = "Gatehouse"
    app_version: str = "0.1.0"

    # CORS: use a JSON array in .env: CORS_ORIGINS=["http://localhost:5173"]
    cors_origins: list[str] = ["http://localhost:5173"]

    @field_validator("jwt_issuer", "jwt_audience", mode="before")
    @classmethod
    def blank_falls_back_to_default(cls, v, info):
        if v is None or not str(v).strip():
            return DEFAULT_JWT_ISSUER if info.field_name == "jwt_issuer" else DEFAULT_JWT_AUDIENCE
        return v

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def jwt_settings(self) -> JwtSettings:
        return JwtSettings(
            secret_key=self.secret_key,
            issuer=self.jwt_issuer,
            audience=self.jwt_audience,
            algorithm=self.jwt_algorithm,
            expiration_hours=self.jwt_expiration_hours,
        )

    def hasher_settings(self) -> HasherSettings:
        return HasherSettings(
            time_cost=self.argon2_time_cost,
            memory_cost=self.argon2_memory_cost,
            parallelism=self.argon2_parallelism,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
