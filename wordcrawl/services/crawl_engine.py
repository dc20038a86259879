import logging
import queue
import threading
import time
from typing import Callable, List, Optional

from wordcrawl.domain.crawl_context import CrawlContext
from wordcrawl.domain.crawl_options import CrawlOptions
from wordcrawl.domain.crawl_result import CrawlResult
from wordcrawl.domain.http_response import HttpResponse
from wordcrawl.domain.visited_store import VisitedStore
from wordcrawl.domain.work_item import WorkItem
from wordcrawl.exceptions import CrawlCancelledError, HttpFetchError, InvalidSeedUrlError
from wordcrawl.services.completion_detector import CompletionDetector
from wordcrawl.services.fetcher import Fetcher
from wordcrawl.services.link_extractor import Extractor, LinkExtractor
from wordcrawl.services.page_text_analyzer import PageTextAnalyzer, TextAnalyzer
from wordcrawl.services.url_normalizer import host_of, normalize

logger = logging.getLogger(__name__)

# Put on the work queue once per worker to let it exit.
_SHUTDOWN = None


class CrawlEngine:
    """Runs one depth-limited, single-host crawl on a fixed pool of worker threads.

    Workers drain a shared unbounded queue of `WorkItem`s. For each item a
    worker claims the URL in the visited store, fetches and analyzes it,
    records the result and puts the discovered links back on the queue at
    `depth + 1`. It then reports the item's fan-out to the completion
    detector, which the calling thread runs until every produced item is
    accounted for.

    This class does NOT construct its HTTP dependencies; the container does.
    """

    def __init__(
        self,
        *,
        fetcher: Fetcher,
        options: CrawlOptions,
        link_extractor: Optional[Extractor] = None,
        text_analyzer: Optional[TextAnalyzer] = None,
        visited_store_factory: Callable[[], VisitedStore] = VisitedStore,
    ):
        self.fetcher = fetcher
        self.options = options
        self.link_extractor = link_extractor or LinkExtractor()
        self.text_analyzer = text_analyzer or PageTextAnalyzer()
        self.visited_store_factory = visited_store_factory

    def crawl(self, seed_url: str, stop_event: Optional[threading.Event] = None) -> CrawlResult:
        """Crawl from `seed_url` until no work is left, `stop_event` is set or the deadline passes.

        Setting `stop_event` makes workers stop pulling items; whatever is
        still queued is dropped and in-flight pages finish without expanding.
        """
        started = time.monotonic()
        host = host_of(seed_url)
        if not host:
            raise InvalidSeedUrlError(seed_url, "has no host")
        start_url = normalize(seed_url, host)
        if start_url is None:
            raise InvalidSeedUrlError(seed_url)

        context = CrawlContext(host, self.options, self.visited_store_factory(), stop_event)
        work_queue: "queue.Queue[Optional[WorkItem]]" = queue.Queue()
        detector = CompletionDetector()

        workers = [
            threading.Thread(
                target=self._work,
                args=(context, work_queue, detector),
                name=f"wordcrawl-worker-{i}",
                daemon=True,
            )
            for i in range(self.options.parallel)
        ]
        for worker in workers:
            worker.start()

        work_queue.put(WorkItem(start_url, 0))

        deadline = started + self.options.deadline if self.options.deadline else None
        completed = detector.wait(stop_event=context.stop_event, deadline=deadline)
        if not completed:
            logger.warning(
                "Crawl of %s stopped before completion (%s of %s items done)",
                start_url,
                detector.completed,
                detector.produced,
            )
            context.stop_event.set()

        for _ in workers:
            work_queue.put(_SHUTDOWN)
        for worker in workers:
            worker.join()

        return CrawlResult(
            pages=context.visited.snapshot(),
            items_processed=detector.completed,
            stopped=not completed,
            elapsed=time.monotonic() - started,
        )

    def _work(self, context: CrawlContext, work_queue: queue.Queue, detector: CompletionDetector) -> None:
        while True:
            item = work_queue.get()
            if item is _SHUTDOWN:
                return
            if context.is_stopped():
                logger.debug("Dropping %s after cancellation", item.url)
                continue
            # Rate limit applies per worker; the wait returns early on cancellation.
            if self.options.limit and context.stop_event.wait(self.options.limit):
                continue

            next_urls: List[str] = []
            try:
                next_urls = self.process(item, context)
            except Exception:
                logger.exception("Unexpected error processing %s", item.url)

            for url in next_urls:
                work_queue.put(WorkItem(url, item.depth + 1))
            detector.report(len(next_urls))

    def process(self, item: WorkItem, context: CrawlContext) -> List[str]:
        """Handle one work item and return the URLs to enqueue at `item.depth + 1`."""
        if not context.visited.try_claim(item.url):
            logger.debug("Skipping (visited) %s", item.url)
            return []

        if self.options.exceeds_max_depth(item.depth):
            logger.debug("Skipping (max depth reached) %s at depth %s", item.url, item.depth)
            return []

        logger.info("Visiting: %s on depth: %d", item.url, item.depth)
        body = self.fetch(item.url, context)
        if body is None:
            return []

        fragment = self.text_analyzer.visible_fragment(body)
        context.visited.record(item.url, self.text_analyzer.count(fragment, item.url))

        if self.options.exceeds_max_depth(item.depth + 1) or context.is_stopped():
            return []
        return sorted(self.link_extractor.extract(fragment, context.host))

    def fetch(self, url: str, context: CrawlContext) -> Optional[str]:
        """Fetch a URL and return the body, or None on failure or a non-text body.

        A failed page is never retried within the run; it stays claimed
        with a zero result.
        """
        try:
            response: HttpResponse = self.fetcher.fetch(url, stop_event=context.stop_event)
        except CrawlCancelledError:
            logger.info("Fetch cancelled for %s", url)
            return None
        except HttpFetchError as e:
            logger.warning("Fetch failed for %s: %s", url, e)
            return None
        except Exception as e:
            logger.error("Fetch error for %s: %s", url, e, exc_info=True)
            return None

        if not response.is_success:
            logger.debug("Non-success status for %s: %s", url, response.status_code)
        if not response.is_textual:
            logger.debug("Content type not supported %s. Skipping %s", response.content_type, url)
            return None
        return response.text
