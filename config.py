# ─────────────────────────────────────────────────────────────────
# config.py — Application Settings
#
# Every tunable value lives here and can be overridden through
# environment variables prefixed with THERMOMAN_ or a .env file
# in the project root, e.g.
#
#   THERMOMAN_PORT=4000
#   THERMOMAN_ADMIN_TOKEN=letmein
# ─────────────────────────────────────────────────────────────────

from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).resolve().parent / ".env"
if ENV_FILE.exists():
    load_dotenv(ENV_FILE)


class Settings(BaseSettings):
    """Settings shared by the thermostat REST server and the device API."""

    model_config = SettingsConfigDict(env_prefix="THERMOMAN_", extra="ignore")

    # Application
    app_name: str = "Thermoman"
    log_level: str = Field(default="INFO", description="Logging level")

    # Thermostat REST server
    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=3333, ge=1, le=65535, description="REST server port")

    # Device API
    device_api_port: int = Field(default=8080, ge=1, le=65535, description="Device API port")
    cors_debug: bool = Field(default=True, description="Log CORS decisions")

    # Admin routes are only reachable with this token in X-Admin-Token.
    # Left unset, /admin always answers 403.
    admin_token: Optional[str] = Field(default=None, description="Admin access token")

    # Seed values for the simulated device
    device_ip: str = "192.168.1.123"
    device_ssid: str = "MrWhite"
    device_passphrase: str = "F"


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance"""
    return Settings()
