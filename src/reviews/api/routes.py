"""FastAPI routes for the Reviews bounded context.

The submission route stores uploaded images, translates the form into a
SubmitReview command and then sends the mailbox notice.
"""

import json
from datetime import UTC, datetime
from urllib.parse import quote

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from notifications.channel import get_email_channel
from notifications.channel.email_port import EmailPort
from notifications.dispatch import dispatch_review_notice
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from reviews.api.schemas import (
    CompanyField,
    ConsentField,
    EmailField,
    ErrorResponse,
    FullNameField,
    ImagesField,
    MessageField,
    PositionField,
    ProductField,
    RatingField,
    ReviewResponse,
    SubmitReviewResponse,
    TitleField,
    consent_given,
)
from reviews.review.review import MAX_IMAGES, Review
from reviews.review.submission import SubmitReview
from reviews.settings import Settings, get_settings
from reviews.uploads.store import UploadStore, get_upload_store

logger = structlog.get_logger(__name__)

review_router = APIRouter(prefix="/api/reviews", tags=["reviews"])

SERVER_ERROR = {"error": "Server error"}


@review_router.post(
    "",
    status_code=201,
    response_model=SubmitReviewResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def submit_review(
    request: Request,
    full_name: FullNameField,
    email: EmailField,
    product: ProductField,
    rating: RatingField,
    review_title: TitleField,
    review_message: MessageField,
    company_name: CompanyField = None,
    position: PositionField = None,
    consent: ConsentField = None,
    images: ImagesField = None,
    settings: Settings = Depends(get_settings),
    store: UploadStore = Depends(get_upload_store),
    channel: EmailPort = Depends(get_email_channel),
):
    """Submit a new review from the website form."""
    uploads = [upload for upload in images or [] if upload.filename]
    if len(uploads) > MAX_IMAGES:
        raise ValidationError({"images": [f"Cannot attach more than {MAX_IMAGES} images to a review"]})

    stored_images: list[str] = []
    try:
        stored_images = await store.save_all(uploads, submitted_at=datetime.now(UTC))
        command = SubmitReview(
            full_name=full_name,
            company_name=company_name,
            email=email,
            position=position,
            product=product,
            rating=rating,
            review_title=review_title,
            review_message=review_message,
            images=json.dumps(stored_images),
            consent=consent_given(consent),
        )
        review_id = current_domain.process(command, asynchronous=False)
    except ValidationError:
        store.discard(stored_images)
        raise
    except Exception as exc:
        logger.error("Error submitting review", error=str(exc), exc_info=True)
        store.discard(stored_images)
        return JSONResponse(status_code=500, content=SERVER_ERROR)

    try:
        review = current_domain.repository_for(Review).get(review_id)
        image_links = [(name, str(request.url_for("uploads", path=quote(name)))) for name in stored_images]
        result = await run_in_threadpool(dispatch_review_notice, channel, settings.email_to, review, image_links)
    except Exception as exc:
        result = {"status": "failed", "error": str(exc)}

    if result.get("status") == "sent":
        return SubmitReviewResponse(message="Review submitted and email sent successfully", id=review_id)

    if settings.strict_notifications:
        # The review is already stored at this point.
        logger.error(
            "Error submitting review: notification failed",
            review_id=review_id,
            error=result.get("error"),
        )
        return JSONResponse(status_code=500, content=SERVER_ERROR)

    logger.warning("Review stored without notification", review_id=review_id, error=result.get("error"))
    return SubmitReviewResponse(message="Review submitted; notification could not be sent", id=review_id)


@review_router.get("", response_model=list[ReviewResponse], responses={500: {"model": ErrorResponse}})
async def list_reviews():
    """List all reviews, most recent first."""
    try:
        stored = current_domain.repository_for(Review).newest_first()
    except Exception as exc:
        logger.error("Error fetching reviews", error=str(exc), exc_info=True)
        return JSONResponse(status_code=500, content=SERVER_ERROR)
    return [ReviewResponse.from_review(review) for review in stored]
