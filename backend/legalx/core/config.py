"""
Configurações da aplicação usando Pydantic Settings.

Carrega variáveis de ambiente e valida configurações necessárias.
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configurações globais da aplicação."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Aplicação
    PROJECT_NAME: str = "LegalX API"
    VERSION: str = "0.1.0"
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"
    ENVIRONMENT: str = "development"  # development, staging, production

    # Segurança (tokens locais de desenvolvimento)
    SECRET_KEY: str = "CHANGE-ME-IN-PRODUCTION"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 24 horas
    ALGORITHM: str = "HS256"

    # CORS
    ALLOWED_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Firebase (Authentication + Firestore)
    FIREBASE_CREDENTIALS_PATH: str = ""  # Caminho para service account JSON (dev)
    FIREBASE_PROJECT_ID: str = ""  # Usado em produção com ADC

    # Backend de documentos
    DOCUMENT_BACKEND: Literal["firestore", "memory"] = "firestore"

    # Convites de equipe
    FRONTEND_URL: str = "http://localhost:5173"
    INVITE_EXPIRATION_HOURS: int = 72

    # Backup
    BACKUP_FORMAT_VERSION: str = "1.0"

    # Resumo financeiro
    MONTHLY_SUMMARY_MONTHS: int = 6

    @field_validator("FRONTEND_URL", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Remove barra final para montar links de convite."""
        if isinstance(v, str):
            return v.rstrip("/")
        return v


@lru_cache
def get_settings() -> Settings:
    """Retorna instância cacheada das configurações."""
    return Settings()


settings = get_settings()
