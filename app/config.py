"""Configuration settings for the Skyview backend."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger("skyview.config")


def _get_bool(env_var: str, default: bool = False) -> bool:
    """Parse an environment variable into a boolean with a default."""

    value = os.getenv(env_var)
    if value is None:
        return default

    return value.lower() in {"1", "true", "yes", "on"}


def _get_list(env_var: str, default: str) -> list[str]:
    raw = os.getenv(env_var, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@lru_cache(maxsize=1)
def _ssm_client():
    # Default to a region so lookups do not fail in environments without AWS
    # configuration (e.g. CI test runners).
    return boto3.client(
        "ssm",
        region_name=os.getenv("AWS_REGION")
        or os.getenv("AWS_DEFAULT_REGION")
        or "us-east-1",
    )


def get_maps_api_key() -> str:
    """Resolve the map widget API key.

    ``MAPS_API_KEY`` wins when set. Otherwise, if
    ``MAPS_API_KEY_SSM_PARAMETER`` names a parameter, it is fetched from AWS
    SSM Parameter Store. Any failure results in a runtime error; callers
    decide whether that is fatal.
    """

    value = os.getenv("MAPS_API_KEY")
    if value:
        return value

    parameter = os.getenv("MAPS_API_KEY_SSM_PARAMETER")
    if not parameter:
        raise RuntimeError("MAPS_API_KEY is not configured")

    try:
        response = _ssm_client().get_parameter(Name=parameter, WithDecryption=True)
        value = response.get("Parameter", {}).get("Value")
    except (ClientError, BotoCoreError) as exc:  # pragma: no cover - AWS error passthrough
        logger.error("Failed to load map API key from SSM: %s", exc)
        raise RuntimeError("Unable to load map API key from SSM") from exc

    if not value:
        logger.error("Received empty map API key from SSM parameter %s", parameter)
        raise RuntimeError("Map API key not configured in SSM")

    return value


@dataclass
class Settings:
    """Application configuration loaded from environment variables."""

    skyview_env: str = os.getenv("SKYVIEW_ENV", "local")
    log_level: str = os.getenv("SKYVIEW_LOG_LEVEL", "INFO")

    # Upstream aircraft-state API
    opensky_states_url: str = os.getenv(
        "OPENSKY_STATES_URL",
        "https://opensky-network.org/api/states/all",
    )
    opensky_timeout: float = float(os.getenv("OPENSKY_TIMEOUT", "10.0"))

    # Map widget
    maps_api_key: str = ""

    # Viewer / tracker behaviour
    viewer_min_zoom: float = float(os.getenv("VIEWER_MIN_ZOOM", "7"))
    viewer_initial_lat: float = float(os.getenv("VIEWER_INITIAL_LAT", "35.681236"))
    viewer_initial_lon: float = float(os.getenv("VIEWER_INITIAL_LON", "139.767125"))
    viewer_initial_zoom: float = float(os.getenv("VIEWER_INITIAL_ZOOM", "7"))
    viewer_discard_stale: bool = _get_bool("VIEWER_DISCARD_STALE", default=True)
    viewer_gateway_url: str | None = os.getenv("VIEWER_GATEWAY_URL") or None

    cors_allow_origins: list[str] = field(
        default_factory=lambda: _get_list("CORS_ALLOW_ORIGINS", "*")
    )

    @property
    def maps_configured(self) -> bool:
        return bool(self.maps_api_key)


settings = Settings()

# A missing key is surfaced to users by the viewer page, not at startup
try:
    settings.maps_api_key = get_maps_api_key()
except RuntimeError:
    logger.warning("Map API key not available at import time")

__all__ = ["settings", "Settings", "get_maps_api_key"]
