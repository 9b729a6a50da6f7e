"""Repository for the Review aggregate."""

from reviews.domain import reviews
from reviews.review.review import Review


@reviews.repository(part_of=Review)
class ReviewRepository:
    """Review persistence with a newest-first listing query."""

    def newest_first(self, page_size: int = 100) -> list[Review]:
        """Return every stored review, most recently created first.

        Pages through the store so that the provider's default query limit
        never truncates the listing.
        """
        query = self._dao.query.order_by("-created_at")

        results: list[Review] = []
        offset = 0
        while True:
            page = query.offset(offset).limit(page_size).all()
            results.extend(page.items)
            offset += page_size
            if not page.items or offset >= page.total:
                return results
