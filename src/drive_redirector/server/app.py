"""FastAPI app factory.

Endpoints are thin wrappers over :class:`drive_redirector.resource.RedirectResource`.
"""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse, RedirectResponse
from pydantic import ValidationError as PydanticValidationError

from drive_redirector import __version__
from drive_redirector.config import RedirectorConfig, load_config
from drive_redirector.errors import PersistenceError, ValidationError
from drive_redirector.resource import EnvironmentStore, RedirectResource
from drive_redirector.server.auth import BasicAuthGate
from drive_redirector.server.config import ServerSettings
from drive_redirector.server.models import UpdateFileRequest

logger = logging.getLogger(__name__)


def create_app(
    config: RedirectorConfig | None = None,
    settings: ServerSettings | None = None,
    *,
    environment: EnvironmentStore | None = None,
) -> FastAPI:
    config = config if config is not None else load_config()
    settings = settings if settings is not None else ServerSettings()

    app = FastAPI(
        title="Drive Redirector",
        version=__version__,
        description="Redirects to a single Google Drive file that can be repointed at runtime.",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    resource = RedirectResource(
        config.file_id,
        environment=environment,
        url_template=settings.url_template,
    )
    gate = BasicAuthGate(config.username, config.password)

    # Expose for request handlers and the process entrypoint.
    app.state.settings = settings
    app.state.resource = resource

    @app.get("/", include_in_schema=False)
    def redirect() -> RedirectResponse:
        return RedirectResponse(
            resource.read(),
            status_code=308,
            headers={"Cache-Control": "no-cache"},
        )

    @app.put("/{file_id}", response_class=PlainTextResponse)
    async def update_file(
        file_id: str,
        request: Request,
        _user: str = Depends(gate.dependency()),
    ) -> PlainTextResponse:
        # The body is parsed only once the gate has passed.
        try:
            req = UpdateFileRequest.model_validate_json(await request.body())
        except PydanticValidationError as e:
            raise HTTPException(
                status_code=400,
                detail=e.errors(include_url=False, include_context=False, include_input=False),
            ) from e

        try:
            target = await run_in_threadpool(resource.write, file_id, req.new_file_id)
        except ValidationError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        except PersistenceError as e:
            logger.exception("Failed to persist file id", extra={"key": e.key})
            raise HTTPException(status_code=500, detail=str(e)) from e
        return PlainTextResponse(target, status_code=200)

    return app
