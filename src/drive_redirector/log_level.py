"""Background watcher that re-applies ``LOG_LEVEL`` on a fixed interval."""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Mapping

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "LOG_LEVEL"
ACCESS_LOGGER = "uvicorn.access"
DEFAULT_INTERVAL_SECONDS = 15 * 60
DEFAULT_LEVEL = logging.DEBUG

# One step above CRITICAL so nothing is emitted.
OFF = logging.CRITICAL + 10
logging.addLevelName(OFF, "OFF")

LOG_LEVELS: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "OFF": OFF,
}


def resolve_level(raw: str | None) -> int | None:
    """Map a ``LOG_LEVEL`` value to a logging level, or ``None`` if unrecognized."""

    if raw is None:
        return None
    return LOG_LEVELS.get(raw.strip())


def apply_level(level: int, logger: logging.Logger | None = None) -> None:
    """Set ``level`` on ``logger`` (the root logger by default).

    When the root level changes, uvicorn's access log is kept at INFO or above
    so per-request lines never appear at DEBUG.
    """

    target = logger if logger is not None else logging.getLogger()
    target.setLevel(level)
    if target is logging.getLogger():
        logging.getLogger(ACCESS_LOGGER).setLevel(max(level, logging.INFO))


class LogLevelWatcher:
    """Periodically reads ``LOG_LEVEL`` and applies it to a logger.

    The loop runs in a daemon thread until :meth:`stop` is called or the
    process exits. A failing pass is logged and the loop carries on.
    """

    def __init__(
        self,
        *,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        environ: Mapping[str, str] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.interval_seconds = interval_seconds
        self._environ = environ
        self._logger = logger
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def check(self) -> int:
        """Run one pass and return the level that was applied."""

        env = os.environ if self._environ is None else self._environ
        raw = env.get(LOG_LEVEL_ENV, "")

        if raw == "":
            apply_level(DEFAULT_LEVEL, self._logger)
            logger.info("LOG_LEVEL is not set; defaulting to DEBUG")
            return DEFAULT_LEVEL

        level = resolve_level(raw)
        if level is None:
            apply_level(DEFAULT_LEVEL, self._logger)
            logger.warning(
                "LOG_LEVEL is not recognized; defaulting to DEBUG",
                extra={"log_level": raw, "allowed": sorted(LOG_LEVELS)},
            )
            return DEFAULT_LEVEL

        apply_level(level, self._logger)
        return level

    def run(self) -> None:
        while not self._stop.is_set():
            try:
                self.check()
            except Exception:
                logger.exception("Log level check failed")
            self._stop.wait(self.interval_seconds)

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self.run, name="log-level-watcher", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
