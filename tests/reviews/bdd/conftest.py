"""Shared BDD fixtures and step definitions for the Reviews domain."""

import pytest
from pytest_bdd import parsers, then
from reviews.review.events import ReviewSubmitted


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the review is created")
def review_created(review, error):
    assert error["exc"] is None
    assert review is not None
    assert review.id is not None


@then(parsers.cfparse("the review has {count:d} images"))
def review_has_images(review, count):
    assert len(review.images) == count


@then("a ReviewSubmitted event is raised")
def review_submitted_event(review):
    assert any(isinstance(event, ReviewSubmitted) for event in review._events)


@then(parsers.cfparse('the submission fails with "{message}"'))
def submission_fails(error, message):
    assert error["exc"] is not None
    assert message in str(error["exc"])
