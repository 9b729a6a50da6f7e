"""Domain events for the Review aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from reviews.domain import reviews


@reviews.event(part_of="Review")
class ReviewSubmitted:
    """A customer submitted a new product review."""

    __version__ = "v1"

    review_id = Identifier(required=True)
    full_name = String(required=True)
    email = String(required=True)
    product = String(required=True)
    rating = Integer(required=True)
    review_title = String(required=True)
    image_count = Integer(default=0)
    consent = Boolean(default=False)
    submitted_at = DateTime(required=True)
