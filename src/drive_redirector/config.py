"""Boot-time configuration for the redirector.

Environment variables:
- FILE_ID        (required) identifier of the Drive file to redirect to
- AUTH_USER      (required) Basic-Auth username for updates
- AUTH_PASSWORD  (required) Basic-Auth password, base64-encoded

The record is a snapshot taken once at startup. Later updates to the current
file identifier live in :class:`drive_redirector.resource.RedirectResource`.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from drive_redirector.envconfig import EnvField, load_model

FILE_ID_ENV = "FILE_ID"

CONFIG_SCHEMA: tuple[EnvField, ...] = (
    EnvField.parse("file_id", f"{FILE_ID_ENV},required"),
    EnvField.parse("username", "AUTH_USER,required"),
    EnvField.parse("password", "AUTH_PASSWORD,required,base64"),
)


class RedirectorConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    file_id: str = Field(default="", min_length=1)
    username: str = Field(default="", min_length=1)
    password: str = Field(default="", min_length=1, repr=False)


def load_config(environ: Mapping[str, str] | None = None) -> RedirectorConfig:
    """Load :class:`RedirectorConfig` from ``environ`` (defaults to ``os.environ``).

    Raises:
        ConfigError: if a variable is missing, malformed or empty.
    """

    return load_model(RedirectorConfig, CONFIG_SCHEMA, environ)
