"""Settings loader with environment variable, .env and Docker secrets integration."""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from studio_admin.core.exceptions import ConfigurationError

SECRETS_DIR = Path("/run/secrets")

logger = logging.getLogger(__name__)


def _load_secret_from_file(secret_name: str, env_var: str | None = None) -> str | None:
    """
    Load secret from /run/secrets (Docker secrets pattern).

    Priority:
    1. /run/secrets/{secret_name} (Docker secrets mount)
    2. Environment variable (fallback)

    Args:
        secret_name: Name of the secret file in /run/secrets
        env_var: Optional environment variable name to check as fallback

    Returns:
        Secret value or None if not found
    """
    secret_file = SECRETS_DIR / secret_name

    if secret_file.exists() and secret_file.is_file():
        try:
            secret_value = secret_file.read_text().strip()
        except OSError as e:
            logger.warning(f"Failed to read {secret_file}: {e}")
        else:
            if secret_value:
                logger.info(f"Loaded {secret_name} from {SECRETS_DIR}")
                return secret_value

    if env_var:
        secret_value = os.getenv(env_var)
        if secret_value:
            return secret_value.strip()

    return None


@dataclass
class AppConfig:
    """Application configuration container."""
    # Asset host
    cloudinary_cloud_name: str
    cloudinary_api_key: str
    cloudinary_api_secret: str
    cloudinary_api_base_url: str = "https://api.cloudinary.com"

    # Identity directory / record store
    firebase_credentials_file: str = "serviceAccountKey.json"
    firebase_database_url: str = ""

    # HTTP
    port: int = 3000
    cors_origins: str = "*"

    # Logging
    log_level: str = "INFO"

    # Deprovisioning
    asset_user_folder_template: str = "user/{uid}"

    @property
    def cors_origin_list(self) -> list[str] | str:
        origins = [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]
        if not origins or origins == ["*"]:
            return "*"
        return origins


def _required(var_name: str, secret_name: str | None = None) -> str:
    value = _load_secret_from_file(secret_name, var_name) if secret_name else os.environ.get(var_name, "").strip()
    if not value:
        raise ConfigurationError(f"Environment variable {var_name} is required.")
    return value


def load_settings(env_file: str | None = None) -> AppConfig:
    """Load application settings from .env, environment and /run/secrets.

    Raises:
        ConfigurationError: If any asset host credential or the database URL is missing
    """
    # Existing environment variables always win over .env entries
    load_dotenv(env_file, override=False)

    cloud_name = _required("CLOUDINARY_CLOUD_NAME")
    api_key = _required("CLOUDINARY_API_KEY", "cloudinary_api_key")
    api_secret = _required("CLOUDINARY_API_SECRET", "cloudinary_api_secret")
    database_url = _required("FIREBASE_DATABASE_URL")

    credentials_file = os.environ.get("FIREBASE_CREDENTIALS_FILE", "serviceAccountKey.json")
    secret_credentials = SECRETS_DIR / "firebase_service_account.json"
    if "FIREBASE_CREDENTIALS_FILE" not in os.environ and secret_credentials.is_file():
        credentials_file = str(secret_credentials)

    port_str = os.environ.get("PORT", "3000")
    try:
        port = int(port_str)
    except ValueError as exc:
        raise ConfigurationError(f"PORT must be an integer, got {port_str!r}") from exc

    folder_template = os.environ.get("ASSET_USER_FOLDER_TEMPLATE", "user/{uid}")
    if "{uid}" not in folder_template:
        raise ConfigurationError("ASSET_USER_FOLDER_TEMPLATE must contain the {uid} placeholder")

    cfg = AppConfig(
        cloudinary_cloud_name=cloud_name,
        cloudinary_api_key=api_key,
        cloudinary_api_secret=api_secret,
        cloudinary_api_base_url=os.environ.get("CLOUDINARY_API_BASE_URL", "https://api.cloudinary.com"),
        firebase_credentials_file=credentials_file,
        firebase_database_url=database_url,
        port=port,
        cors_origins=os.environ.get("CORS_ORIGINS", "*"),
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        asset_user_folder_template=folder_template,
    )
    logger.info(f"Settings loaded; cloud={cfg.cloudinary_cloud_name}; port={cfg.port}")
    return cfg
