"""Exception hierarchy shared by the loader, the resource and the HTTP layer."""

from __future__ import annotations


class RedirectorError(Exception):
    """Base class for all drive-redirector errors."""


class ConfigError(RedirectorError):
    """Raised at startup when the configuration cannot be loaded.

    These are fatal: the process exits before serving.
    """


class MissingRequiredVariable(ConfigError):
    def __init__(self, name: str) -> None:
        super().__init__(f"{name!r} is not set")
        self.name = name


class InvalidFieldTag(ConfigError):
    pass


class DecodeError(ConfigError):
    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"failed to decode {name!r}: {reason}")
        self.name = name
        self.reason = reason


class InvalidSchema(ConfigError):
    """The schema is not a flat sequence of named, taggable fields."""


class InvalidConfig(ConfigError):
    """Loaded values did not validate against the target record."""


class ValidationError(RedirectorError):
    """A write request was stale or malformed (HTTP 400)."""


class Unauthorized(RedirectorError):
    """Credentials were missing or did not match (HTTP 401)."""


class PersistenceError(RedirectorError):
    """The new identifier could not be written to the environment (HTTP 500).

    The in-memory identifier has already been updated when this is raised.
    """

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"failed to set value at {key}: {reason}")
        self.key = key
        self.reason = reason
