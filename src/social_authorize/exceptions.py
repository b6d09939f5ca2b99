from __future__ import annotations

from typing import Any, Mapping


class AuthorizeError(Exception):
    def __init__(
        self,
        message: str,
        *,
        error: str | None = None,
        description: str | None = None,
        status_code: int | None = None,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.error = error
        self.description = description
        self.status_code = status_code
        self.details = dict(details or {})


class ConfigurationError(AuthorizeError):
    """Raised when strategy settings are incomplete."""


class AuthenticationError(AuthorizeError):
    """Raised when no usable credential or verified identity can be resolved."""


class PaginationLimitExceeded(AuthorizeError):
    """Raised when a feed keeps returning next links past the page ceiling."""

    def __init__(self, max_pages: int, next_page_url: str) -> None:
        super().__init__(
            f"Feed pagination exceeded {max_pages} pages",
            error="pagination_limit_exceeded",
            details={"max_pages": max_pages, "next_page_url": next_page_url},
        )
        self.max_pages = max_pages
        self.next_page_url = next_page_url
