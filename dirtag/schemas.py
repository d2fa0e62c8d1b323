"""
Pydantic records returned to consumers of the core (CLI, scripts).

The services hand out SQLAlchemy rows, these schemas turn them into plain
serializable records:
    DirectoryWithTags.model_validate(directory_row)
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# ============================================================================
# TAG SCHEMAS
# ============================================================================


class TagResponse(BaseModel):
    """
    A tag.

    Example:
    {
        "id": 1,
        "name": "frontend",
        "description": "Web UI projects",
        "created_at": "2026-01-18T12:00:00",
        "updated_at": "2026-01-18T12:00:00"
    }
    """

    id: int
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TagWithUsage(TagResponse):
    """Tag with the number of directories using it."""

    usage_count: int = Field(0, ge=0, description="Number of tagged directories")


# ============================================================================
# DIRECTORY SCHEMAS
# ============================================================================


class DirectoryResponse(BaseModel):
    """A tracked directory without its tags."""

    id: int
    path: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DirectoryWithTags(DirectoryResponse):
    """
    A tracked directory with its tags sorted by name.

    Example:
    {
        "id": 3,
        "path": "/home/me/projects/app",
        "created_at": "2026-01-18T12:00:00",
        "updated_at": "2026-01-18T12:00:00",
        "tags": [{"id": 1, "name": "frontend", ...}, {"id": 2, "name": "react", ...}]
    }
    """

    tags: list[TagResponse] = []


class RetagResponse(BaseModel):
    """Result of a retag command."""

    path: str
    added: list[str] = []
    removed: list[str] = []
    changes: list[str] = []

    model_config = ConfigDict(from_attributes=True)


# ============================================================================
# ERROR SCHEMAS
# ============================================================================


class ErrorDetail(BaseModel):
    """Detail about one offending field."""

    field: str
    message: str


class ErrorBody(BaseModel):
    """
    Error as printed by the CLI in --json mode.

    Example:
    {
        "code": "CONFLICT",
        "message": "Tag with name='frontend' already exists",
        "details": [{"field": "name", "message": "Value 'frontend' is already in use"}]
    }
    """

    code: str
    message: str
    details: list[ErrorDetail] | None = None
