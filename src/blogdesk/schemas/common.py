"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema whose JSON field names are camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """Body returned for every error status."""

    error: str = Field(..., description="Human readable error message")
    details: Any | None = Field(None, description="Extra context outside production")
    stack: str | None = Field(None, description="Traceback outside production")


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str
