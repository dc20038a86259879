from typing import NamedTuple, Optional

# Media types whose bodies are counted; anything else is fetched but not analyzed.
_TEXTUAL_MARKERS = ("text/", "html", "xml")


class HttpResponse(NamedTuple):
    """Status, decoded body and media type of one GET."""
    status_code: int
    text: str
    content_type: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_textual(self) -> bool:
        """True when the body is markup or plain text.

        A missing Content-Type header is treated as text.
        """
        if not self.content_type:
            return True
        media_type = self.content_type.split(";", 1)[0].strip().lower()
        return any(marker in media_type for marker in _TEXTUAL_MARKERS)
