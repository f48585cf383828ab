"""
Configuration loader for the Veritas Guard application.

This module is responsible for loading all application configurations and secrets.
It follows a priority system for loading secrets:
1. HashiCorp Vault (for production)
2. Environment variables (can be populated by a .env file for development)
"""

import logging
import os
from typing import Any, Dict, Optional

import hvac
import yaml
from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings

from .schemas import AppConfig

# Get a logger instance for this specific file
logger = logging.getLogger(__name__)


def get_secrets_from_vault() -> Dict[str, Any]:
    """
    Fetches secrets from a configured HashiCorp Vault instance.
    This is the recommended method for production environments.
    """
    try:
        vault_addr = os.getenv("VAULT_ADDR")
        vault_token = os.getenv("VAULT_TOKEN")
        vault_path = os.getenv("VAULT_SECRET_PATH")

        if not all([vault_addr, vault_token, vault_path]):
            logger.info(
                "Vault environment variables not fully set. Skipping Vault integration."
            )
            return {}
        client = hvac.Client(url=vault_addr, token=vault_token)
        if not client.is_authenticated():
            logger.error("Vault authentication failed. Please check your VAULT_TOKEN.")
            return {}
        response = client.secrets.kv.v2.read_secret_version(path=vault_path)
        secrets = response.get("data", {}).get("data", {})
        logger.info("Successfully loaded secrets from HashiCorp Vault.")
        return secrets
    except Exception as e:
        logger.error(f"Failed to fetch secrets from Vault: {e}")
        return {}


class ApiKeys(BaseSettings):
    """
    Loads the credentials for the remote AI endpoint.
    """

    # Accepts API_KEY as well, which is what browser builds of the dashboard used.

    google_api_key: Optional[str] = Field(
        None, validation_alias=AliasChoices("GOOGLE_API_KEY", "API_KEY")
    )

    class Config:
        """Pydantic-settings configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra fields from Vault that don't match

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        """
        Customizes the loading priority for settings.
        1. Values passed directly to the constructor.
        2. Secrets from HashiCorp Vault.
        3. Environment variables (including those from .env file).
        4. File-based secrets (not used here).
        """
        return (
            init_settings,
            get_secrets_from_vault,
            dotenv_settings,
            env_settings,
            file_secret_settings,
        )


def load_config_from_yaml(path: str = "config.yaml") -> AppConfig:
    """
    Loads and validates the main application configuration from 'config.yaml'.
    """
    try:
        with open(path, "r") as f:
            config_data = yaml.safe_load(f) or {}
        return AppConfig(**config_data)
    except FileNotFoundError:
        logger.warning(f"{path} not found. Using default application settings.")
        return AppConfig.model_validate({})
    except ValidationError as e:
        logger.critical(
            f"Invalid configuration in {path}. Please check the structure. Error: {e}"
        )
        raise SystemExit(1)
    except Exception as e:
        logger.critical(f"An unexpected error occurred while loading {path}: {e}")
        raise SystemExit(1)


# --- Single Source of Truth ---
# Loaded once when this module is first imported. Other modules use
# `from .config_loader import CONFIG, API_KEYS`.


CONFIG = load_config_from_yaml(os.getenv("VERITAS_CONFIG", "config.yaml"))
API_KEYS = ApiKeys()  # type: ignore
