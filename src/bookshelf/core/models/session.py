"""Authentication models."""

from typing import Any

from pydantic import BaseModel, Field


class TokenClaims(BaseModel):
    """Structured representation of verified access-token claims."""

    raw_token: str = Field(default="", description="Original JWT token")
    issuer: str = Field(description="Issuer")
    subject: str = Field(description="Subject")
    user_id: str = Field(description="Caller's user id, read from the configured claim")
    audience: str | list[str] = Field(description="Audience")
    expires_at: int = Field(description="Expiration time")
    issued_at: int | None = Field(default=None, description="Issued at")
    jti: str | None = Field(default=None, description="JWT ID (unique token identifier)")
    email: str | None = Field(default=None, description="Email address")
    name: str | None = Field(default=None, description="Full name")
    custom_claims: dict[str, Any] = Field(
        default_factory=dict, description="Claims not mapped to a field"
    )
