"""Response models for API endpoints."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error response model."""

    detail: str = Field(
        ...,
        description="Error message describing what went wrong",
        example="Backend is not available. Cannot add project."
    )


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(
        ...,
        description="Service status",
        example="ok"
    )
    backend: str = Field(
        ...,
        description="Whether the content backend is configured (available) or the site runs on default content (unavailable)",
        example="available"
    )


class RootResponse(BaseModel):
    """Root endpoint response model."""

    message: str = Field(
        ...,
        description="API name",
        example="Portfolio API"
    )
    version: str = Field(
        ...,
        description="API version",
        example="1.0.0"
    )


class TokenResponse(BaseModel):
    """Access token issued on sign-in."""

    access_token: str = Field(..., description="JWT bearer token")
    token_type: str = Field("bearer", description="Token type")


class IdentityResponse(BaseModel):
    """Currently signed-in admin."""

    email: str = Field(..., description="Admin email", example="admin@example.com")
    role: str = Field(..., description="Role", example="admin")


class NextOrderResponse(BaseModel):
    """Suggested order for a new skill category."""

    order: int = Field(..., description="One past the highest existing order, or 1", example=7)


class UploadResponse(BaseModel):
    """Uploaded file location."""

    url: str = Field(
        ...,
        description="Public URL of the stored file",
        example="http://localhost:8000/uploads/projects/1700000000000_screenshot.png"
    )
