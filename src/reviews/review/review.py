"""Review aggregate: a customer's product review submitted from the website.

Reviews are write-once: they are created on submission and only read
afterwards. Attached images are referenced by their stored filename.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Integer, List, String, Text, ValueObject

from reviews.domain import reviews
from reviews.review.events import ReviewSubmitted

MAX_IMAGES = 3
MIN_RATING = 1
MAX_RATING = 5


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@reviews.value_object(part_of="Review")
class Rating:
    """A star rating from 1 to 5."""

    score = Integer(required=True)

    @invariant.post
    def score_must_be_in_range(self):
        if self.score is not None and (self.score < MIN_RATING or self.score > MAX_RATING):
            raise ValidationError({"rating": [f"Rating must be between {MIN_RATING} and {MAX_RATING}"]})


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@reviews.aggregate
class Review:
    """A product review left by a customer, with up to three images."""

    # Submitter
    full_name = String(required=True, max_length=100)
    company_name = String(max_length=150)
    email = String(required=True, max_length=254)
    position = String(max_length=100)

    # Content
    product = String(required=True, max_length=200)
    rating = ValueObject(Rating, required=True)
    review_title = String(required=True, max_length=200)
    review_message = Text(required=True)

    # Media
    images = List(content_type=String)  # stored filenames, in upload order

    consent = Boolean(default=False)

    # Timestamps
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def images_cannot_exceed_maximum(self):
        if self.images and len(self.images) > MAX_IMAGES:
            raise ValidationError({"images": [f"Cannot attach more than {MAX_IMAGES} images to a review"]})

    @invariant.post
    def email_must_have_a_domain(self):
        if self.email is None:
            return
        local_part, _, domain_part = self.email.partition("@")
        if not local_part or "." not in domain_part or " " in self.email:
            raise ValidationError({"email": ["Enter a valid email address"]})

    @invariant.post
    def text_fields_must_not_be_blank(self):
        for name in ("full_name", "product", "review_title", "review_message"):
            value = getattr(self, name)
            if value is not None and not value.strip():
                raise ValidationError({name: ["This field cannot be blank"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def submit(
        cls,
        full_name,
        email,
        product,
        rating,
        review_title,
        review_message,
        company_name=None,
        position=None,
        images=None,
        consent=False,
        submitted_at=None,
    ):
        """Create a new review and record the submission."""
        now = submitted_at or datetime.now(UTC)
        images = list(images or [])

        review = cls(
            full_name=full_name,
            company_name=company_name,
            email=email,
            position=position,
            product=product,
            rating=Rating(score=rating),
            review_title=review_title,
            review_message=review_message,
            images=images,
            consent=bool(consent),
            created_at=now,
            updated_at=now,
        )

        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                full_name=full_name,
                email=email,
                product=product,
                rating=rating,
                review_title=review_title,
                image_count=len(images),
                consent=bool(consent),
                submitted_at=now,
            )
        )

        return review
