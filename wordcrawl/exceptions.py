"""Custom exceptions for wordcrawl."""


class InvalidSeedUrlError(Exception):
    """Raised when the seed URL cannot be used to start a crawl."""

    def __init__(self, url: str, reason: str = "could not be parsed"):
        self.url = url
        self.reason = reason
        super().__init__(f"Seed URL '{url}' {reason}")


class HttpFetchError(Exception):
    """Raised when an HTTP fetch fails due to network/transport errors."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"HTTP fetch failed for {url}: {original}")


class CrawlCancelledError(Exception):
    """Raised when a fetch is refused because the crawl was cancelled."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Crawl cancelled before fetching {url}")


class InvalidOptionsError(ValueError):
    """Raised when command line flags cannot be parsed."""
