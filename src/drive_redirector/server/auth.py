"""HTTP Basic-Auth gate for the update endpoint."""

from __future__ import annotations

from collections.abc import Callable

from fastapi import Depends, HTTPException
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from drive_redirector.errors import Unauthorized

_basic = HTTPBasic(auto_error=False)


class BasicAuthGate:
    """Checks a credential pair against the single configured pair.

    Comparison is plain, case-sensitive equality.
    """

    def __init__(self, username: str, password: str) -> None:
        self._username = username
        self._password = password

    def verify(self, credentials: HTTPBasicCredentials | None) -> str:
        if credentials is None:
            raise Unauthorized("credentials required")
        if credentials.username != self._username or credentials.password != self._password:
            raise Unauthorized("invalid credentials")
        return credentials.username

    def dependency(self) -> Callable[..., str]:
        """Return a FastAPI dependency that enforces this gate."""

        def require_basic_auth(
            credentials: HTTPBasicCredentials | None = Depends(_basic),
        ) -> str:
            try:
                return self.verify(credentials)
            except Unauthorized as e:
                raise HTTPException(
                    status_code=401,
                    detail="Unauthorized",
                    headers={"WWW-Authenticate": "Basic"},
                ) from e

        return require_basic_auth
