"""Declarative environment-variable loader.

A schema is a flat sequence of :class:`EnvField` descriptors. Each one names the
record field it fills, the environment variable it reads, and a few options:

- ``required``: the variable must be present (it may still be empty)
- ``base64``: the value is standard base64 and is decoded before use
- ``default``: used when the variable is absent or empty

Example::

    SCHEMA = (
        EnvField.parse("file_id", "FILE_ID,required"),
        EnvField.parse("password", "AUTH_PASSWORD,required,base64"),
        EnvField.parse("port", "PORT,default=80"),
    )
    values = load(SCHEMA)
"""

from __future__ import annotations

import base64
import binascii
import os
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from drive_redirector.errors import (
    DecodeError,
    InvalidConfig,
    InvalidFieldTag,
    InvalidSchema,
    MissingRequiredVariable,
)

_ENV_NAME = re.compile(r"^[A-Z0-9]([A-Z0-9_]*[A-Z0-9])?$")
_DEFAULT_PREFIX = "default="

ModelT = TypeVar("ModelT", bound=BaseModel)


def is_valid_env_name(name: str) -> bool:
    return bool(_ENV_NAME.match(name))


@dataclass(frozen=True, slots=True)
class EnvField:
    name: str
    env: str
    required: bool = False
    base64: bool = False
    default: str | None = None

    def __post_init__(self) -> None:
        if not is_valid_env_name(self.env):
            raise InvalidFieldTag(f"invalid key {self.env!r}")

    @classmethod
    def parse(cls, name: str, tag: str) -> EnvField:
        """Build a field from a compact tag such as ``"AUTH_PASSWORD,required,base64"``.

        Unknown options are ignored. A ``default`` option must be written as
        ``default=<value>``.
        """

        key, *options = tag.split(",")
        if not is_valid_env_name(key):
            raise InvalidFieldTag(f"invalid key {key!r}")

        required = False
        encoded = False
        default: str | None = None
        for opt in options:
            if opt.startswith("default"):
                if not opt.startswith(_DEFAULT_PREFIX):
                    raise InvalidFieldTag(
                        "invalid default option syntax; must follow pattern of 'default=<value>'"
                    )
                default = opt[len(_DEFAULT_PREFIX) :]
                continue
            required = required or opt == "required"
            encoded = encoded or opt == "base64"

        return cls(name=name, env=key, required=required, base64=encoded, default=default)

    def resolve(self, environ: Mapping[str, str]) -> str:
        """Look up and decode this field's value."""

        if self.required and self.env not in environ:
            raise MissingRequiredVariable(self.env)

        raw = environ.get(self.env, "")
        if raw == "":
            if not self.default:
                return ""
            raw = self.default

        if not self.base64:
            return raw

        try:
            decoded = base64.b64decode(raw, validate=True)
        except binascii.Error as e:
            raise DecodeError(self.env, str(e)) from e
        try:
            return decoded.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(self.env, "decoded value is not valid UTF-8") from e


def _check_schema(schema: object) -> Sequence[EnvField]:
    if isinstance(schema, (str, bytes)) or not isinstance(schema, Sequence):
        raise InvalidSchema("schema must be a sequence of EnvField descriptors")

    seen: set[str] = set()
    for item in schema:
        if not isinstance(item, EnvField):
            raise InvalidSchema(f"schema entries must be EnvField, got {type(item).__name__}")
        if not item.name.isidentifier():
            raise InvalidSchema(f"invalid field name {item.name!r}")
        if item.name in seen:
            raise InvalidSchema(f"duplicate field name {item.name!r}")
        seen.add(item.name)
    return schema


def load(schema: Sequence[EnvField], environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Resolve every field in ``schema`` against ``environ`` (defaults to ``os.environ``).

    Fields that resolve to an empty string are left out of the result so the
    target record's own defaults apply.
    """

    fields = _check_schema(schema)
    env = os.environ if environ is None else environ

    values: dict[str, str] = {}
    for field in fields:
        value = field.resolve(env)
        if value == "":
            continue
        values[field.name] = value
    return values


def load_model(
    model_cls: type[ModelT],
    schema: Sequence[EnvField],
    environ: Mapping[str, str] | None = None,
) -> ModelT:
    """Load ``schema`` and validate the values into ``model_cls``.

    Non-string model fields are coerced by pydantic.
    """

    if not (isinstance(model_cls, type) and issubclass(model_cls, BaseModel)):
        raise InvalidSchema("target record must be a pydantic model class")

    fields = _check_schema(schema)
    unknown = [f.name for f in fields if f.name not in model_cls.model_fields]
    if unknown:
        raise InvalidSchema(f"{model_cls.__name__} has no field(s): {', '.join(unknown)}")

    values = load(fields, environ)
    try:
        return model_cls.model_validate(values)
    except PydanticValidationError as e:
        raise InvalidConfig(str(e)) from e
