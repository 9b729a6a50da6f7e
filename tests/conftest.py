import os
import tempfile
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Sets the environment the application reads at import time: the Protean
    config overlay, the fake mail backend and a throwaway uploads directory.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ["MAIL_BACKEND"] = "fake"
    os.environ["EMAIL_USER"] = "reviews-bot@example.com"
    os.environ["EMAIL_TO"] = "reviews@example.com"
    os.environ.setdefault("UPLOADS_DIR", tempfile.mkdtemp(prefix="review-uploads-"))
    os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="review-logs-"))


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
