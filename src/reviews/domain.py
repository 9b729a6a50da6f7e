"""Reviews bounded context: customer product reviews submitted from the website.

Accepts review submissions with up to three images, persists them, notifies
the internal reviews mailbox and lists stored reviews newest first.
"""

import structlog
from protean.domain import Domain

from reviews.utils.logging import configure_logging

# Configure logging for the application
configure_logging(log_file_prefix="reviews")

logger = structlog.get_logger(__name__)

# Domain Composition Root
reviews = Domain(name="reviews")
