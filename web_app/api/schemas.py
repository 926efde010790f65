"""Pydantic schemas for API requests and responses.

Field names are snake_case in Python and camelCase on the wire, which is what
the link-management client sends and expects. Requests accept either form.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateLinkRequest(CamelModel):
    """Request to register a link."""

    title: str = Field(..., description="Display title")
    url: str = Field(..., description="Absolute http(s) URL to redirect to")
    description: Optional[str] = Field(None, description="Optional description")
    custom_code: Optional[str] = Field(None, description="Optional custom short code")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "title": "Example",
                    "url": "https://example.com/very/long/path/to/resource",
                },
                {
                    "title": "Repo",
                    "url": "https://github.com/user/repo",
                    "description": "Project source",
                    "customCode": "myrepo",
                },
            ]
        },
    )


class UpdateLinkRequest(CamelModel):
    """Edit of a link's mutable fields. Omitted fields stay unchanged."""

    title: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = Field(None, description="Empty string clears the description")


class LinkOut(CamelModel):
    """A link as returned by the API."""

    id: int
    custom_code: str
    short_url: str
    title: str
    url: str
    description: Optional[str] = None
    click_count: int
    created_at: datetime
    updated_at: datetime


class LinkResponse(CamelModel):
    """Envelope for a single link."""

    status: Literal["success"] = "success"
    data: LinkOut


class LinkListResponse(CamelModel):
    """Envelope for a list of links."""

    status: Literal["success"] = "success"
    data: List[LinkOut]


class DeletedLink(CamelModel):
    id: int


class DeleteResponse(CamelModel):
    """Envelope for a deletion."""

    status: Literal["success"] = "success"
    data: DeletedLink


class ErrorResponse(CamelModel):
    """Error response."""

    status: Literal["error"] = "error"
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Detailed error information")


class HealthStatus(CamelModel):
    """Health check result."""

    status: str = Field(..., description="Overall status")
    store: str = Field(..., description="Link store status")
    timestamp: datetime = Field(..., description="Check timestamp")


class Statistics(CamelModel):
    """Service-wide totals."""

    total_links: int
    total_clicks: int
    backend: str
    custom_codes_enabled: bool


class HealthResponse(CamelModel):
    """Envelope for a health check."""

    status: Literal["success"] = "success"
    data: HealthStatus


class StatisticsResponse(CamelModel):
    """Envelope for statistics."""

    status: Literal["success"] = "success"
    data: Statistics
