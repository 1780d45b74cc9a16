"""Définition et chargement des paramètres de configuration applicative.

Objectif du module
------------------
- Centraliser les paramètres (env/.env) via Pydantic Settings
- Résoudre le fichier `.env` à utiliser selon la stratégie: ENV_FILE > .env.{APP_ENV} > .env
"""

import os
from datetime import date
from pathlib import Path

from pydantic import AnyHttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

# Détermination du fichier .env à utiliser avec priorité:
# 1) ENV_FILE (chemin explicite)
# 2) .env.{APP_ENV} si présent
# 3) .env (défaut)
_cwd = Path.cwd()
_env_file_from_env = os.getenv("ENV_FILE")
if _env_file_from_env:
    _ENV_FILE_PATH = _env_file_from_env
else:
    _app_env = os.getenv("APP_ENV", "dev")
    _candidate_specific = _cwd / f".env.{_app_env}"
    _candidate_default = _cwd / ".env"
    if _candidate_specific.exists():
        _ENV_FILE_PATH = _candidate_specific
    else:
        _ENV_FILE_PATH = _candidate_default


class Settings(BaseSettings):
    """Modèle de configuration chargé depuis l'environnement et .env."""

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE_PATH,
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
    )
    APP_NAME: str = "stargate-api"
    APP_ENV: str = "dev"
    APP_DEBUG: bool = False
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 5204
    LOG_LEVEL: str = "DEBUG"

    # L'UI d'administration tourne sur un autre port en développement
    CORS_ORIGINS: list[AnyHttpUrl] | list[str] = ["http://localhost:4200"]
    DATABASE_URL: str | None = None
    DB_AUTO_CREATE: bool = True

    # Règles métier des affectations
    RETIRED_DUTY_TITLE: str = "RETIRED"
    MIN_DUTY_START_DATE: date = date(1900, 1, 1)
    CLEAR_CAREER_END_ON_REINSTATEMENT: bool = False

    # Journal d'audit des requêtes (table Log)
    AUDIT_LOG_ENABLED: bool = True


def get_settings() -> Settings:
    """Construit et retourne la configuration de l'application."""
    return Settings()
