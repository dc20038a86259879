"""Domain objects for wordcrawl - explicit re-exports to satisfy linters."""
from .work_item import WorkItem as WorkItem
from .page_result import PageResult as PageResult
from .crawl_options import CrawlOptions as CrawlOptions
from .crawl_result import CrawlResult as CrawlResult
from .http_response import HttpResponse as HttpResponse
from .visited_store import VisitedStore as VisitedStore
from .crawl_context import CrawlContext as CrawlContext

__all__ = ["WorkItem", "PageResult", "CrawlOptions", "CrawlResult", "HttpResponse", "VisitedStore", "CrawlContext"]
