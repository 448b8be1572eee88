"""Pydantic models for the REST server."""

from __future__ import annotations

from pydantic import BaseModel, Field


class UpdateFileRequest(BaseModel):
    new_file_id: str = Field(default="", description="Identifier to redirect to from now on")
