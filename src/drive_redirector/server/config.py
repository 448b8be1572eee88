"""Settings for the HTTP listener.

The boot record (FILE_ID, AUTH_USER, AUTH_PASSWORD) is loaded separately by
:func:`drive_redirector.config.load_config`. These knobs only shape how the
server runs and all have working defaults.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from drive_redirector.log_level import DEFAULT_INTERVAL_SECONDS
from drive_redirector.resource import DRIVE_URL_TEMPLATE


class ServerSettings(BaseSettings):
    """Settings for the redirect server.

    Environment variables:
    - REDIRECTOR_HOST
    - REDIRECTOR_PORT
    - REDIRECTOR_LOG_LEVEL_INTERVAL_SECONDS
    - REDIRECTOR_URL_TEMPLATE
    """

    host: str = Field(default="0.0.0.0", description="Interface to bind")
    port: int = Field(default=80, ge=1, le=65535, description="Plain HTTP port")

    log_level_interval_seconds: float = Field(
        default=DEFAULT_INTERVAL_SECONDS,
        gt=0,
        description="How often LOG_LEVEL is re-read from the environment.",
    )

    url_template: str = Field(
        default=DRIVE_URL_TEMPLATE,
        description="Redirect target; '{file_id}' is replaced with the current identifier.",
    )

    model_config = SettingsConfigDict(env_prefix="REDIRECTOR_", env_file=".env", extra="ignore")

    @field_validator("url_template")
    @classmethod
    def _check_url_template(cls, value: str) -> str:
        marker = "\x00file-id\x00"
        try:
            rendered = value.format(file_id=marker)
        except (AttributeError, IndexError, KeyError, TypeError, ValueError) as e:
            raise ValueError(
                f"url_template may only use the '{{file_id}}' placeholder: {e!r}"
            ) from e
        if marker not in rendered:
            raise ValueError("url_template must contain '{file_id}'")
        return value
