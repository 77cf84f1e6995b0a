from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    firestore_project_id: Optional[str] = Field(default=None, alias="FIRESTORE_PROJECT_ID")
    firestore_api_key: Optional[str] = Field(default=None, alias="FIRESTORE_API_KEY")
    firestore_database: str = Field(default="(default)", alias="FIRESTORE_DATABASE")
    firestore_collection: str = Field(default="test_transactions", alias="FIRESTORE_COLLECTION")
    firestore_base_url: str = Field(
        default="https://firestore.googleapis.com/v1", alias="FIRESTORE_BASE_URL"
    )

    currency_prefix: str = Field(default="Rs. ", alias="CURRENCY_PREFIX")
    http_timeout_seconds: float = Field(default=20.0, alias="HTTP_TIMEOUT_SECONDS")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    def validate_firestore(self) -> None:
        if not self.firestore_project_id:
            raise ValueError("FIRESTORE_PROJECT_ID is required to read from Firestore")

        if not self.firestore_collection:
            raise ValueError("FIRESTORE_COLLECTION must not be empty")


@lru_cache
def load_settings() -> Settings:
    return Settings()
