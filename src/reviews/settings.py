"""Runtime settings for the review intake service.

Values come from the process environment, optionally seeded from a ``.env``
file in the working directory.
"""

import os
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from dotenv import load_dotenv


class NotifyMode(Enum):
    STRICT = "strict"
    BEST_EFFORT = "best-effort"


class MailBackend(Enum):
    SMTP = "smtp"
    FAKE = "fake"


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 5000
    uploads_dir: str = "uploads"

    mail_backend: str = MailBackend.SMTP.value
    mail_host: str = "smtp.gmail.com"
    mail_port: int = 587
    mail_timeout: float = 30.0
    email_user: str | None = None
    email_pass: str | None = None
    email_to: str | None = None

    notify_mode: str = NotifyMode.STRICT.value

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()

        notify_mode = os.getenv("NOTIFY_MODE", NotifyMode.STRICT.value).lower()
        mail_backend = os.getenv("MAIL_BACKEND", MailBackend.SMTP.value).lower()

        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "5000")),
            uploads_dir=os.getenv("UPLOADS_DIR", "uploads"),
            mail_backend=MailBackend(mail_backend).value,
            mail_host=os.getenv("MAIL_HOST", "smtp.gmail.com"),
            mail_port=int(os.getenv("MAIL_PORT", "587")),
            mail_timeout=float(os.getenv("MAIL_TIMEOUT", "30")),
            email_user=os.getenv("EMAIL_USER"),
            email_pass=os.getenv("EMAIL_PASS"),
            email_to=os.getenv("EMAIL_TO"),
            notify_mode=NotifyMode(notify_mode).value,
        )

    @property
    def strict_notifications(self) -> bool:
        return self.notify_mode == NotifyMode.STRICT.value


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, read once from the environment."""
    return Settings.from_env()
