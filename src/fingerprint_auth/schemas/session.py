"""Pydantic schemas for accounts, session nonces and link nonces."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Nonce(BaseModel):
    """Current session credential of an account."""

    model_config = ConfigDict(frozen=True)

    token: str = Field(..., description="Unguessable session token")
    issued_at: int = Field(..., description="Issue time in milliseconds since the epoch")

    def is_fresh(self, now: int, ttl_ms: int) -> bool:
        """Return True while the nonce is inside its validity window."""
        return now <= self.issued_at + ttl_ms


class LinkNonce(BaseModel):
    """Credential to be redeemed by a second client when linking sessions."""

    model_config = ConfigDict(frozen=True)

    token: str
    issued_at: int


class Account(BaseModel):
    """Account record stored under a fingerprint hash."""

    model_config = ConfigDict(frozen=True)

    client_id: str = Field(default="", description="Client id cookie captured at first contact")
    password_hash: str = Field(..., description="bcrypt hash of the account password")
    nonce: Nonce | None = None
    pending_link_id: str | None = None


class SignInRequest(BaseModel):
    """Body of a sign-in request."""

    password: str = Field(default="", description="Account password; blank values are rejected")

    @field_validator("password")
    @classmethod
    def strip_password(cls, value: str) -> str:
        return value.strip()
