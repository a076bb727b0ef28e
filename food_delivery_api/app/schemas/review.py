"""
Pydantic schemas for item reviews.

A review is written on behalf of a client owned by the caller and
refers to an existing item.  Reviews are removed together with their
item.
"""

from pydantic import BaseModel, Field, field_validator

from .common import U64_MAX


class ReviewCreate(BaseModel):
    """Schema for creating a new review."""

    client_id: int = Field(..., ge=0, le=U64_MAX, description="Client on whose behalf the review is written")
    item_id: int = Field(..., ge=0, le=U64_MAX, description="Identifier of the item being reviewed")
    rating: int = Field(..., ge=1, le=5, description="Rating from 1 to 5")
    comment: str = Field("", description="Optional textual comment")

    @field_validator("comment")
    @classmethod
    def sanitize_comment(cls, v: str) -> str:
        """Trim whitespace from the comment and enforce a maximum length."""
        v = v.strip()
        if len(v) > 500:
            raise ValueError("Comment must be 500 characters or fewer")
        return v


class ReviewRead(BaseModel):
    """Schema for reading a review; also the stored record."""

    id: int = Field(..., ge=0, le=U64_MAX)
    client_id: int = Field(..., ge=0, le=U64_MAX)
    item_id: int = Field(..., ge=0, le=U64_MAX)
    rating: int
    comment: str = ""
