"""Email channel registry.

Provides one shared email adapter per settings value. ``MAIL_BACKEND``
selects the SMTP relay (default) or the in-memory fake.
"""

from fastapi import Depends
from notifications.channel.email_port import EmailPort
from reviews.settings import MailBackend, Settings, get_settings

_channel_instances: dict[Settings, EmailPort] = {}


def build_email_channel(settings: Settings) -> EmailPort:
    """Construct a new email adapter for the given settings."""
    if settings.mail_backend == MailBackend.FAKE.value:
        from notifications.channel.fake_email import FakeEmailAdapter

        return FakeEmailAdapter(sender=settings.email_user)

    from notifications.channel.smtp_email import SMTPEmailAdapter

    return SMTPEmailAdapter(
        host=settings.mail_host,
        port=settings.mail_port,
        username=settings.email_user,
        password=settings.email_pass,
        timeout=settings.mail_timeout,
    )


def email_channel_for(settings: Settings) -> EmailPort:
    """Return the adapter for ``settings``, created on first use."""
    if settings not in _channel_instances:
        _channel_instances[settings] = build_email_channel(settings)
    return _channel_instances[settings]


def get_email_channel(settings: Settings = Depends(get_settings)) -> EmailPort:
    """FastAPI dependency returning the adapter for the app's settings."""
    return email_channel_for(settings)


def reset_channels():
    """Drop cached adapters (useful for testing)."""
    _channel_instances.clear()
