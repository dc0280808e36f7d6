"""Input sanitization utilities for user-supplied text."""

import re
from typing import ClassVar

import nh3


class InputSanitizer:
    """
    Sanitize user inputs before they are stored or echoed back.

    Use parameterized queries as the primary defense; these helpers
    add a second layer for display and header values.
    """

    ALLOWED_TAGS: ClassVar[set[str]] = set()
    WHITESPACE_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"\s+")
    HEADER_UNSAFE_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"[^\w\s.-]")

    @classmethod
    def sanitize_html(cls, value: str) -> str:
        """Remove all HTML tags with nh3 (strict by default).

        Args:
            value: Raw string that may contain HTML.

        Returns:
            Sanitized string safe for HTML display.
        """
        if not value:
            return value
        return nh3.clean(value, tags=cls.ALLOWED_TAGS, attributes={})

    @classmethod
    def sanitize_title(cls, value: str, max_length: int = 255) -> str:
        """Strip markup, collapse whitespace and cap length of a display title."""
        cleaned = cls.sanitize_html(value or "")
        cleaned = cls.WHITESPACE_PATTERN.sub(" ", cleaned).strip()
        return cleaned[:max_length]

    @classmethod
    def header_filename(cls, value: str) -> str:
        """Return a filename safe to embed in a Content-Disposition header.

        Characters outside word chars, whitespace, '.' and '-' become '_',
        then whitespace runs become '_'.
        """
        safe = cls.HEADER_UNSAFE_PATTERN.sub("_", value or "")
        safe = cls.WHITESPACE_PATTERN.sub("_", safe)
        return safe or "document.pdf"


def sanitize_title(value: str, max_length: int = 255) -> str:
    """Sanitize a document title (see InputSanitizer.sanitize_title)."""
    return InputSanitizer.sanitize_title(value, max_length=max_length)
