# carnet/common/settings.py
from __future__ import annotations

from functools import lru_cache
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, AliasChoices, field_validator, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from carnet.common.strings.normalize import csv_to_list


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    return s in {"1", "true", "yes", "y", "on"}


class APIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    prefix: str = "/api"
    graphql_path: str = "/graphql"

    cors_allow_origins: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    cors_allow_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "OPTIONS"])
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = False

    @field_validator("cors_allow_origins", "cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def _split_csv(cls, v):
        return csv_to_list(v)


class DBConfig(BaseModel):
    driver: str = "postgresql+psycopg"
    host: str = "localhost"
    port: int = 5432
    name: str = "carnet"
    user: str = "carnet"
    password: str = "carnet"
    schema_name: str = Field(default="carnet", alias="DB_SCHEMA")
    echo: bool = False
    pool_pre_ping: bool = True

    # Optional single URL (if set, it takes precedence)
    url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "database_url", "url"),
    )

    model_config = ConfigDict(populate_by_name=True)

    @computed_field  # type: ignore[misc]
    @property
    def effective_url(self) -> str:
        if self.url:
            return self.url
        return f"{self.driver}://{self.user}:{self.password}@{self.host}:{self.port}/{self.name}"


class FeatureFlags(BaseModel):
    graphql_enabled: bool = True
    reset_enabled: bool = True

    @field_validator("*", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v, default=True)


class PersonRules(BaseModel):
    min_age_years: int = Field(1, ge=0, description="Minimum age (whole years) accepted on create")


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "carnet"
    app_env: str = "development"  # development|test|staging|production
    log_level: str = "INFO"

    # -------- Sub-configs --------
    api: APIConfig = APIConfig()
    db: DBConfig = DBConfig()
    features: FeatureFlags = FeatureFlags()
    rules: PersonRules = PersonRules()

    # Top-level DATABASE_URL (the usual deployment knob) overrides db.url and the parts
    database_url_override: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "database_url_override"),
        exclude=True,
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _apply_database_url(self) -> "Settings":
        if self.database_url_override:
            self.db = self.db.model_copy(update={"url": self.database_url_override})
        return self

    # ===== Convenience: DB URL & schema =====
    @computed_field  # type: ignore[misc]
    @property
    def database_url(self) -> str:
        return self.db.effective_url

    @computed_field  # type: ignore[misc]
    @property
    def db_schema(self) -> str:
        return self.db.schema_name


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from carnet.common.settings import get_settings
        cfg = get_settings()
    """
    return Settings()  # pydantic_settings will read from .env automatically
