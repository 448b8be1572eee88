"""FastAPI server adapter for drive-redirector.

Design intent:
- Keep the redirect state and its rules in `drive_redirector.resource`
- Keep HTTP concerns (routing, auth, status mapping) here
"""

from __future__ import annotations

__all__ = ["create_app"]

from drive_redirector.server.app import create_app
