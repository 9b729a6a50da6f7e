import pytest
from fastapi.testclient import TestClient
from notifications.channel import get_email_channel
from notifications.channel.fake_email import FakeEmailAdapter
from reviews.settings import Settings


@pytest.fixture()
def settings(tmp_path):
    return Settings(
        uploads_dir=str(tmp_path / "uploads"),
        mail_backend="fake",
        email_user="reviews-bot@example.com",
        email_to="reviews@example.com",
    )


@pytest.fixture()
def email_channel(settings):
    return FakeEmailAdapter(sender=settings.email_user)


@pytest.fixture()
def app(settings, email_channel):
    from app import create_app

    application = create_app(settings)
    application.dependency_overrides[get_email_channel] = lambda: email_channel
    return application


@pytest.fixture()
def client(app):
    return TestClient(app)
