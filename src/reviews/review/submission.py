"""SubmitReview: persist a review submitted through the website form.

Image files are already stored by the time the command is processed; the
command only carries their generated filenames.
"""

import json

from protean.fields import Boolean, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from reviews.domain import reviews
from reviews.review.review import Review


@reviews.command(part_of="Review")
class SubmitReview:
    full_name = String(required=True, max_length=100)
    company_name = String(max_length=150)
    email = String(required=True, max_length=254)
    position = String(max_length=100)
    product = String(required=True, max_length=200)
    rating = Integer(required=True)
    review_title = String(required=True, max_length=200)
    review_message = Text(required=True)
    images = Text()  # JSON array of stored filenames
    consent = Boolean(default=False)


@reviews.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        images = json.loads(command.images) if command.images else []

        review = Review.submit(
            full_name=command.full_name,
            company_name=command.company_name,
            email=command.email,
            position=command.position,
            product=command.product,
            rating=command.rating,
            review_title=command.review_title,
            review_message=command.review_message,
            images=images,
            consent=command.consent,
        )
        current_domain.repository_for(Review).add(review)
        return str(review.id)
