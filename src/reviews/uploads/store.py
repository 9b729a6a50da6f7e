"""Local-disk store for images attached to review submissions.

Each file is written unmodified under ``<timestamp-ms>-<client filename>``.
Names are claimed with exclusive-create, so concurrent submissions never
overwrite each other's files.
"""

from datetime import UTC, datetime
from pathlib import Path

import structlog
from fastapi import Depends, UploadFile

from reviews.settings import Settings, get_settings

logger = structlog.get_logger(__name__)

_FALLBACK_NAME = "upload"


class UploadStore:
    """Writes uploaded files into a single local directory."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def ensure_directory(self) -> Path:
        """Create the upload directory if it does not exist yet."""
        self.directory.mkdir(parents=True, exist_ok=True)
        return self.directory

    @staticmethod
    def client_name(filename: str | None) -> str:
        """Final path component of the client-supplied filename."""
        name = Path((filename or "").replace("\\", "/")).name
        return name or _FALLBACK_NAME

    def save_bytes(self, filename: str | None, content: bytes, submitted_at: datetime | None = None) -> str:
        """Write ``content`` under a fresh generated name and return that name."""
        submitted_at = submitted_at or datetime.now(UTC)
        stamp = int(submitted_at.timestamp() * 1000)
        original = self.client_name(filename)

        while True:
            stored_name = f"{stamp}-{original}"
            try:
                with open(self.directory / stored_name, "xb") as fh:
                    fh.write(content)
            except FileExistsError:
                stamp += 1
                continue
            logger.debug("Stored upload", stored_name=stored_name, size=len(content))
            return stored_name

    async def save_all(self, uploads: list[UploadFile], submitted_at: datetime | None = None) -> list[str]:
        """Store every upload that carries a filename, preserving order."""
        submitted_at = submitted_at or datetime.now(UTC)
        stored = []
        try:
            for upload in uploads:
                if not upload.filename:
                    continue
                content = await upload.read()
                stored.append(self.save_bytes(upload.filename, content, submitted_at))
        except Exception:
            self.discard(stored)
            raise
        return stored

    def discard(self, names: list[str]) -> None:
        """Remove previously stored files, e.g. when their submission is rejected."""
        for name in names:
            (self.directory / name).unlink(missing_ok=True)
        if names:
            logger.debug("Discarded uploads", count=len(names))


def get_upload_store(settings: Settings = Depends(get_settings)) -> UploadStore:
    """FastAPI dependency returning the store for the configured directory."""
    return UploadStore(settings.uploads_dir)
