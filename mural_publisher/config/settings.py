"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ─────────────────────────────────────────────────
#
# pydantic-settings reads configuration from two sources (priority order):
#
#   1. **Environment variables** — e.g. CONTENTFUL_SPACE_ID=abc123
#   2. **.env file** — key=value lines in the working directory's .env
#
# Field `contentful_space_id` maps to env var `CONTENTFUL_SPACE_ID`.
# Defaults apply when neither source sets a value.  Credentials default to
# empty strings and are checked by require_credentials() before any
# command talks to Contentful.
#
# The .env file holds a management token: keep it out of version control.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from mural_publisher.utils.errors import ConfigurationError


class Settings(BaseSettings):
    """Mural publisher settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # === Contentful ===
    contentful_management_token: str = ""
    contentful_space_id: str = ""
    # Empty = use the environment named in config.yaml ("master" by default).
    contentful_environment: str = ""

    # === Submissions ===
    # Empty = use publishing.templates_dir from config.yaml.
    mural_templates_dir: str = ""

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    def missing_credentials(self) -> list[str]:
        """Return the env var names of required credentials that are unset."""
        missing: list[str] = []
        if not self.contentful_management_token.strip():
            missing.append("CONTENTFUL_MANAGEMENT_TOKEN")
        if not self.contentful_space_id.strip():
            missing.append("CONTENTFUL_SPACE_ID")
        return missing

    def require_credentials(self) -> None:
        """Raise :class:`ConfigurationError` unless token and space id are set."""
        missing = self.missing_credentials()
        if missing:
            raise ConfigurationError(
                message=f"Missing required environment variable(s): {', '.join(missing)}",
            )
