from __future__ import annotations

from typing import Optional, Protocol

from wordcrawl.domain.http_response import HttpResponse
from wordcrawl.exceptions import CrawlCancelledError


class Fetcher(Protocol):
    """Fetch a URL and return a normalized HTTP-like response.

    The crawl engine depends only on this; any client that can perform a
    GET with a bounded timeout satisfies it.
    """

    def fetch(self, url: str, stop_event=None) -> HttpResponse: ...


class HttpServiceFetcher:
    def __init__(self, http_service):
        self._http_service = http_service

    def fetch(self, url: str, stop_event=None) -> HttpResponse:
        if _is_stopped(stop_event):
            raise CrawlCancelledError(url)
        return self._http_service.fetch(url)


def _is_stopped(stop_event: Optional[object]) -> bool:
    return stop_event is not None and getattr(stop_event, "is_set", lambda: False)()
