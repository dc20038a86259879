"""Crawl result data model."""
from typing import Dict, NamedTuple

from wordcrawl.domain.page_result import PageResult


class CrawlResult(NamedTuple):
    """Result of a crawl run handed to the report printer."""

    pages: Dict[str, PageResult]
    """Visited URL -> final page result (zero-valued for unfetched pages)"""

    items_processed: int
    """Work items the completion detector saw finish, duplicates included"""

    stopped: bool
    """True if the crawl was cancelled or hit its deadline before completing"""

    elapsed: float
    """Wall-clock seconds spent crawling"""

    @property
    def visited(self) -> int:
        return len(self.pages)

    @property
    def total_words(self) -> int:
        return sum(p.words for p in self.pages.values())

    @property
    def total_numbers(self) -> int:
        return sum(p.numbers for p in self.pages.values())
