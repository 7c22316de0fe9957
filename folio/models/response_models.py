"""Response models for API endpoints."""

from typing import Optional
from pydantic import BaseModel, Field

from folio.models.domain import Locale
from folio.services.access import AccessState


class ErrorResponse(BaseModel):
    """Error response model."""

    detail: str = Field(
        ...,
        description="Error message describing what went wrong",
        examples=["Portfolio not found: demo"]
    )


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(
        ...,
        description="Service status",
        examples=["ok"]
    )


class RootResponse(BaseModel):
    """Root endpoint response model."""

    message: str = Field(
        ...,
        description="API name and version information",
        examples=["Folio API"]
    )
    version: str = Field(
        ...,
        description="API version",
        examples=["1.0.0"]
    )


class AccessResponse(BaseModel):
    """Access state of a user's subscription."""

    user_id: str = Field(..., description="User identifier", examples=["demo"])
    state: AccessState = Field(..., description="active, trial, grace or blocked", examples=["grace"])
    plan_tier: Optional[str] = Field(None, description="Subscription plan", examples=["pro"])


class LocaleResponse(BaseModel):
    """Stored preferred locale."""

    locale: Locale = Field(..., description="Preferred locale", examples=["en"])
