"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class CreateLinkRequest(BaseModel):
    """Request to create a short link."""

    target_url: str = Field(..., alias="targetUrl", description="The URL to shorten")
    custom_code: Optional[str] = Field(
        None,
        alias="customCode",
        description="Optional custom short code (6-8 letters or digits)",
    )

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "targetUrl": "https://example.com/very/long/path/to/resource",
                },
                {
                    "targetUrl": "https://github.com/user/repo",
                    "customCode": "myrepo1"
                }
            ]
        }
    }


class LinkResponse(BaseModel):
    """A stored short link."""

    id: int
    code: str
    target_url: str
    total_clicks: int
    last_clicked_at: Optional[datetime] = None
    created_at: datetime

    model_config = {
        "from_attributes": True,
        "json_schema_extra": {
            "examples": [
                {
                    "id": 1,
                    "code": "abc123",
                    "target_url": "https://example.com/very/long/path",
                    "total_clicks": 0,
                    "last_clicked_at": None,
                    "created_at": "2024-01-01T12:00:00Z"
                }
            ]
        }
    }


class DeleteResponse(BaseModel):
    """Response after deleting a link."""

    success: bool


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
