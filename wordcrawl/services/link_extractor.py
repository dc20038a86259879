import re
from typing import Protocol, Set

from wordcrawl.services.url_normalizer import normalize

# Literal match up to the next quote; tolerant of broken markup.
_HREF_RE = re.compile(r'href="(.*?)"')


def extract_links(html_fragment: str, host: str) -> Set[str]:
    """Return the canonical same-host URLs referenced by `href="..."` attributes.

    Already visited URLs are still returned; deduplication against the
    visited store happens when a worker claims the URL.
    """
    links = set()
    for href in _HREF_RE.findall(html_fragment):
        url = normalize(href, host)
        if url is not None:
            links.add(url)
    return links


class Extractor(Protocol):
    def extract(self, html_fragment: str, host: str) -> Set[str]: ...


class LinkExtractor:
    """Pattern-matching link extractor; swap for a DOM-based one behind the same method."""

    def extract(self, html_fragment: str, host: str) -> Set[str]:
        return extract_links(html_fragment, host)
