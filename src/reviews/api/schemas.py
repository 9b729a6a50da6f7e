"""Request and response schemas for the Reviews API.

The submission endpoint receives the website's HTML form, so the request
schema is a set of typed ``Form``/``File`` parameters keyed by the form's
field names. Responses use camelCase keys, matching what the website reads.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from fastapi import File, Form, UploadFile
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Request fields (multipart/form-data)
# ---------------------------------------------------------------------------
FullNameField = Annotated[str, Form(alias="review-name", min_length=1, max_length=100)]
CompanyField = Annotated[str | None, Form(alias="review-company", max_length=150)]
EmailField = Annotated[str, Form(alias="review-email", min_length=3, max_length=254)]
PositionField = Annotated[str | None, Form(alias="review-position", max_length=100)]
ProductField = Annotated[str, Form(alias="review-product", min_length=1, max_length=200)]
RatingField = Annotated[int, Form(alias="rating", ge=1, le=5)]
TitleField = Annotated[str, Form(alias="review-title", min_length=1, max_length=200)]
MessageField = Annotated[str, Form(alias="review-message", min_length=1, max_length=5000)]
ConsentField = Annotated[str | None, Form(alias="review-consent")]
ImagesField = Annotated[list[UploadFile] | None, File(alias="review-image")]

CHECKBOX_ON = "on"


def consent_given(raw_value: str | None) -> bool:
    """An HTML checkbox posts ``on`` when ticked and nothing otherwise."""
    return raw_value == CHECKBOX_ON


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ReviewResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    full_name: str
    company_name: str | None = None
    email: str
    position: str | None = None
    product: str
    rating: int
    review_title: str
    review_message: str
    images: list[str] = Field(default_factory=list)
    consent: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_review(cls, review) -> ReviewResponse:
        return cls(
            id=str(review.id),
            full_name=review.full_name,
            company_name=review.company_name,
            email=review.email,
            position=review.position,
            product=review.product,
            rating=review.rating.score,
            review_title=review.review_title,
            review_message=review.review_message,
            images=list(review.images or []),
            consent=bool(review.consent),
            created_at=review.created_at,
            updated_at=review.updated_at,
        )


class SubmitReviewResponse(BaseModel):
    message: str
    id: str


class ErrorResponse(BaseModel):
    error: str
    fields: dict[str, list[str]] | None = None
