"""Request models for API endpoints."""

from pydantic import BaseModel, Field
from portfolio_app.services.ordering import MoveDirection


class LoginRequest(BaseModel):
    """Request model for admin sign-in."""

    email: str = Field(
        ...,
        description="Admin email address",
        example="admin@example.com"
    )
    password: str = Field(
        ...,
        description="Admin password",
        example="secret"
    )


class VisibilityUpdateRequest(BaseModel):
    """Request model for showing or hiding a page section."""

    visible: bool = Field(
        ...,
        description="Whether the section is shown on the public site",
        example=False
    )


class MoveCategoryRequest(BaseModel):
    """Request model for moving a skill category one place."""

    direction: MoveDirection = Field(
        ...,
        description="Direction to move the category in the display order (up or down)",
        example="up"
    )
