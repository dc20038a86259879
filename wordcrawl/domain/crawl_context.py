import threading
from typing import Optional

from wordcrawl.domain.crawl_options import CrawlOptions
from wordcrawl.domain.visited_store import VisitedStore


class CrawlContext:
    """Per-run state shared by the workers of one crawl."""

    def __init__(self, host: str, options: CrawlOptions, visited: Optional[VisitedStore] = None, stop_event: Optional[threading.Event] = None):
        self.host = host
        self.options = options
        self.visited = visited if visited is not None else VisitedStore()
        self.stop_event = stop_event if stop_event is not None else threading.Event()

    def is_stopped(self) -> bool:
        return self.stop_event.is_set()
