import threading
from typing import Dict

from wordcrawl.domain.page_result import PageResult


class VisitedStore:
    """
    Thread-safe mapping from canonical URL to its page result.

    Inserting the placeholder in `try_claim` is the only deduplication gate:
    of any number of workers racing on the same URL exactly one gets True
    and goes on to fetch it. Keys are never removed during a run.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._pages: Dict[str, PageResult] = {}

    def try_claim(self, url: str) -> bool:
        """Claim `url` for fetching. Returns True iff this call inserted it."""
        with self._lock:
            if url in self._pages:
                return False
            self._pages[url] = PageResult.placeholder(url)
            return True

    def record(self, url: str, result: PageResult) -> None:
        """Overwrite the result of an already claimed URL."""
        with self._lock:
            if url not in self._pages:
                raise KeyError(f"URL was never claimed: {url}")
            self._pages[url] = result

    def is_visited(self, url: str) -> bool:
        with self._lock:
            return url in self._pages

    def snapshot(self) -> Dict[str, PageResult]:
        with self._lock:
            return dict(self._pages)

    def __len__(self) -> int:
        with self._lock:
            return len(self._pages)
