"""
Pydantic models for client data.

A client is the customer placing orders.  The ``owner`` field records
the identity of the caller that created the client; it never changes
and is what order, delivery and review operations are authorized
against.
"""

from pydantic import BaseModel, Field

from .common import U64_MAX


class ClientCreate(BaseModel):
    """Schema for registering a client."""

    name: str = Field(..., min_length=2, examples=["Jane Doe"])
    address: str = Field(..., min_length=4, examples=["12 Market Street"])
    phone: str = Field("", examples=["+1-555-0100"])
    email: str = Field("", examples=["jane@example.com"])


class ClientRead(ClientCreate):
    """Schema for reading a client; also the stored record."""

    id: int = Field(..., ge=0, le=U64_MAX)
    owner: str
