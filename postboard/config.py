"""Gestion centralisée de la configuration du client PostBoard."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_LOG_LEVEL = "INFO"


class ConfigError(RuntimeError):
    """Erreur levée lorsque la configuration est invalide."""


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Paramètres nécessaires pour dialoguer avec le service de posts."""

    api_url: str
    log_level: str = DEFAULT_LOG_LEVEL

    def api_url_is_configured(self) -> bool:
        """Indique si l'URL du service a été renseignée."""
        return bool(self.api_url)

    def endpoint(self, path: str) -> str:
        if not self.api_url_is_configured():
            raise ConfigError(
                "The post service URL is not configured. "
                "Set POSTBOARD_API_URL."
            )
        return f"{self.api_url}/{path.lstrip('/')}"


def load_config() -> AppConfig:
    """Charge la configuration depuis l'environnement (et un éventuel .env)."""
    load_dotenv()

    api_url = os.getenv("POSTBOARD_API_URL", "").strip().rstrip("/")
    log_level = os.getenv("POSTBOARD_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()

    return AppConfig(api_url=api_url, log_level=log_level or DEFAULT_LOG_LEVEL)
