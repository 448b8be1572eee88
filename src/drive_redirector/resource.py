"""The redirect resource: a single, lock-guarded current file identifier."""

from __future__ import annotations

import logging
import os
import threading
from typing import Protocol

from drive_redirector.config import FILE_ID_ENV
from drive_redirector.errors import PersistenceError, ValidationError

logger = logging.getLogger(__name__)

DRIVE_URL_TEMPLATE = "https://drive.google.com/file/d/{file_id}/view"


def drive_url(file_id: str, template: str = DRIVE_URL_TEMPLATE) -> str:
    return template.format(file_id=file_id)


class EnvironmentStore(Protocol):
    def set(self, key: str, value: str) -> None: ...


class ProcessEnvironment:
    """Write-through store backed by ``os.environ``.

    Values survive a logical reload inside the process but not a restart.
    """

    def set(self, key: str, value: str) -> None:
        os.environ[key] = value


class RedirectResource:
    """Holds the current file identifier and produces redirect targets.

    Reads and writes are serialized by one lock. The stale-request check, the
    mutation and the environment write all happen under it, so two writers
    racing with the same ``requested_current`` cannot both succeed.
    """

    def __init__(
        self,
        file_id: str,
        *,
        environment: EnvironmentStore | None = None,
        env_key: str = FILE_ID_ENV,
        url_template: str = DRIVE_URL_TEMPLATE,
    ) -> None:
        self._file_id = file_id
        self._environment = environment if environment is not None else ProcessEnvironment()
        self._env_key = env_key
        self._url_template = url_template
        self._lock = threading.Lock()

    @property
    def current_file_id(self) -> str:
        with self._lock:
            return self._file_id

    def read(self) -> str:
        with self._lock:
            return drive_url(self._file_id, self._url_template)

    def write(self, requested_current: str, new_id: str) -> str:
        """Repoint the resource to ``new_id`` and return the new redirect target.

        Raises:
            ValidationError: ``requested_current`` is stale or ``new_id`` is empty.
            PersistenceError: the environment write failed. The in-memory
                identifier is already updated in that case.
        """

        with self._lock:
            if requested_current != self._file_id:
                raise ValidationError("current file id does not match")
            if not new_id:
                raise ValidationError("new_file_id must not be empty")

            self._file_id = new_id
            try:
                self._environment.set(self._env_key, new_id)
            except (OSError, ValueError) as e:
                raise PersistenceError(self._env_key, str(e)) from e

            logger.info("Redirect target updated", extra={"file_id": new_id})
            return drive_url(new_id, self._url_template)
