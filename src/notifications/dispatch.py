"""Review notice dispatch: renders the mailbox notice and hands it to a channel."""

import structlog
from notifications.channel.email_port import EmailPort
from notifications.templates.review_submitted import ReviewSubmittedTemplate

logger = structlog.get_logger(__name__)


def review_notice_context(review, image_links: list[tuple[str, str]]) -> dict:
    """Template context for a stored review."""
    return {
        "full_name": review.full_name,
        "company_name": review.company_name,
        "email": review.email,
        "position": review.position,
        "product": review.product,
        "rating": review.rating.score if review.rating else None,
        "review_title": review.review_title,
        "review_message": review.review_message,
        "consent": review.consent,
        "image_links": image_links,
    }


def dispatch_review_notice(
    channel: EmailPort,
    recipient: str | None,
    review,
    image_links: list[tuple[str, str]],
) -> dict:
    """Send the notice for ``review`` and return the channel's result."""
    if not recipient:
        logger.error("No notification recipient configured", review_id=str(review.id))
        return {"message_id": None, "status": "failed", "error": "No notification recipient configured"}

    content = ReviewSubmittedTemplate.render(review_notice_context(review, image_links))
    result = channel.send(
        to=recipient,
        subject=content["subject"],
        body=content["body"],
        html_body=content["html_body"],
    )

    if result.get("status") == "sent":
        logger.info("Review notice sent", review_id=str(review.id), message_id=result.get("message_id"))
    else:
        logger.error("Review notice failed", review_id=str(review.id), error=result.get("error"))
    return result
