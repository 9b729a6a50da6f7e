"""Review submitted template: internal mailbox notice for each new review."""

from html import escape


class ReviewSubmittedTemplate:
    """Renders the notice sent to the reviews mailbox.

    ``context`` carries the submitted review fields plus ``image_links``, a
    list of ``(filename, absolute_url)`` pairs.
    """

    _FIELDS = [
        ("Name", "full_name"),
        ("Company", "company_name"),
        ("Email", "email"),
        ("Position", "position"),
        ("Product", "product"),
        ("Rating", "rating"),
        ("Title", "review_title"),
    ]

    @staticmethod
    def _value(context: dict, key: str) -> str:
        value = context.get(key)
        return "" if value is None else str(value)

    @classmethod
    def render(cls, context: dict) -> dict:
        full_name = cls._value(context, "full_name")
        consent = "Yes" if context.get("consent") else "No"
        image_links = context.get("image_links") or []

        text_lines = [f"{label}: {cls._value(context, key)}" for label, key in cls._FIELDS]
        text_lines.append(f"Message:\n{cls._value(context, 'review_message')}")
        text_lines.append(f"Consent: {consent}")
        if image_links:
            text_lines.append("Uploaded Images:")
            text_lines.extend(url for _, url in image_links)

        html_parts = ["<h2>New Review Submitted</h2>"]
        html_parts.extend(
            f"<p><strong>{label}:</strong> {escape(cls._value(context, key))}</p>" for label, key in cls._FIELDS
        )
        message = escape(cls._value(context, "review_message")).replace("\n", "<br>")
        html_parts.append(f"<p><strong>Message:</strong><br>{message}</p>")
        html_parts.append(f"<p><strong>Consent:</strong> {consent}</p>")
        if image_links:
            anchors = "<br>".join(
                f'<a href="{escape(url)}" target="_blank">{escape(name)}</a>' for name, url in image_links
            )
            html_parts.append(f"<p><strong>Uploaded Images:</strong><br>{anchors}</p>")

        return {
            "subject": f"New Review Submitted by {full_name}",
            "body": "\n".join(text_lines),
            "html_body": "\n".join(html_parts),
        }
