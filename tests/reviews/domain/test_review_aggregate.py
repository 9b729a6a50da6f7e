"""Tests for Review aggregate creation and structure."""

from datetime import UTC, datetime

from reviews.review.events import ReviewSubmitted
from reviews.review.review import Review


def _make_review(**overrides):
    defaults = {
        "full_name": "Ada Lovelace",
        "email": "ada@example.com",
        "product": "Analytical Engine",
        "rating": 5,
        "review_title": "Remarkable machine",
        "review_message": "It weaves algebraic patterns just as the Jacquard loom weaves flowers.",
    }
    defaults.update(overrides)
    return Review.submit(**defaults)


class TestReviewSubmission:
    def test_submit_creates_review(self):
        review = _make_review()
        assert review.id is not None
        assert review.full_name == "Ada Lovelace"
        assert review.product == "Analytical Engine"

    def test_submit_sets_rating(self):
        review = _make_review(rating=3)
        assert review.rating.score == 3

    def test_optional_fields_default_to_none(self):
        review = _make_review()
        assert review.company_name is None
        assert review.position is None

    def test_optional_fields_are_kept(self):
        review = _make_review(company_name="Babbage and Co", position="Analyst")
        assert review.company_name == "Babbage and Co"
        assert review.position == "Analyst"

    def test_images_default_to_empty_list(self):
        review = _make_review()
        assert list(review.images) == []

    def test_images_keep_upload_order(self):
        names = ["1700000000000-a.png", "1700000000001-b.png", "1700000000002-c.png"]
        review = _make_review(images=names)
        assert list(review.images) == names

    def test_consent_defaults_to_false(self):
        review = _make_review()
        assert review.consent is False

    def test_consent_true(self):
        review = _make_review(consent=True)
        assert review.consent is True


class TestReviewTimestamps:
    def test_submit_sets_timestamps(self):
        review = _make_review()
        assert review.created_at is not None
        assert review.updated_at == review.created_at

    def test_explicit_submission_time(self):
        submitted_at = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
        review = _make_review(submitted_at=submitted_at)
        assert review.created_at == submitted_at


class TestReviewSubmittedEvent:
    def test_submit_raises_event(self):
        review = _make_review(images=["1-a.png", "2-b.png"], consent=True)
        assert len(review._events) == 1

        event = review._events[0]
        assert isinstance(event, ReviewSubmitted)
        assert str(event.review_id) == str(review.id)
        assert event.product == "Analytical Engine"
        assert event.rating == 5
        assert event.image_count == 2
        assert event.consent is True

    def test_event_version(self):
        assert ReviewSubmitted.__version__ == "v1"
