import sys
from typing import Optional, TextIO
from urllib.parse import urlsplit

from wordcrawl.domain.crawl_options import CrawlOptions
from wordcrawl.domain.crawl_result import CrawlResult
from wordcrawl.domain.page_result import PageResult


def format_line(url: str, page: PageResult) -> str:
    parts = urlsplit(url)
    return f"{parts.netloc}\t\t{page.words}\t{page.numbers}\t\t{parts.path}"


def print_report(result: CrawlResult, seed_url: str, options: CrawlOptions, out: Optional[TextIO] = None) -> None:
    """Write one tab-separated line per visited URL, plus totals in verbose mode."""
    out = out or sys.stdout
    if options.verbose:
        print(f"Visited: {result.visited} URLS", file=out)
    for url in sorted(result.pages):
        print(format_line(url, result.pages[url]), file=out)
    if options.verbose:
        print(
            f"Found {result.total_words} words and {result.total_numbers} numbers "
            f"for base URL {seed_url} with depth {options.max_depth}",
            file=out,
        )
        print(f"Execution duration: {result.elapsed:.3f}s", file=out)
