"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class CreateLinkRequest(BaseModel):
    """Request to create a link.

    ``url`` is optional at the schema level so a missing field is reported
    as an invalid URL instead of a generic body error.
    """

    url: Optional[str] = Field(None, description="The URL to shorten; bare domains get https://")
    code: Optional[str] = Field(None, description="Optional custom code, 6-8 alphanumeric characters")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://example.com/very/long/path/to/resource",
                },
                {
                    "url": "github.com/user/repo",
                    "code": "myrepo1",
                }
            ]
        }
    }


class LinkResponse(BaseModel):
    """A stored link record."""

    code: str
    url: str
    clicks: int
    created_at: datetime
    last_clicked: Optional[datetime] = None

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "examples": [
                {
                    "code": "aB3dE9",
                    "url": "https://example.com/very/long/path",
                    "clicks": 0,
                    "created_at": "2024-01-01T12:00:00Z",
                    "last_clicked": None,
                }
            ]
        }
    }


class HealthResponse(BaseModel):
    """Health check response."""

    ok: bool = Field(..., description="Service is up")
    version: str = Field(..., description="Service version")


class OkResponse(BaseModel):
    """Acknowledgement for operations without a payload."""

    ok: bool = True


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
