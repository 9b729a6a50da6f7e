"""Email channel port: the contract every mail adapter fulfils."""

from abc import ABC, abstractmethod


class EmailPort(ABC):
    """Sends a single message to one recipient.

    Adapters report delivery problems in the returned dict instead of raising,
    so callers decide whether a failed notification fails the request.
    """

    @abstractmethod
    def send(
        self,
        to: str,
        subject: str,
        body: str,
        html_body: str | None = None,
    ) -> dict:
        """Send an email message.

        Returns:
            dict with keys: message_id, status ("sent" or "failed"), error (optional)
        """
        ...
