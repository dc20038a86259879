"""Word and number counting over the visible body of an HTML page.

This is deliberately pattern matching over raw text rather than a DOM
parse. Each step is a pure function so they can be tested on their own;
`PageTextAnalyzer` chains them.
"""
import re
from typing import List, Protocol

from wordcrawl.domain.page_result import PageResult

_BODY_RE = re.compile(r"<body(?:\s[^>]*)?>(.*?)</body>", re.DOTALL)
_SCRIPT_RE = re.compile(r"<script(?:\s[^>]*)?>.*?</script>", re.DOTALL)
_STYLE_RE = re.compile(r"<style(?:\s[^>]*)?>.*?</style>", re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")
_NUMBER_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_XML_DECLARATION = "<?xml"


def isolate_body(html: str) -> str:
    """Return the content of the first <body> element.

    Feed documents without a body are used whole when they start with an
    XML declaration, ignoring a leading byte order mark or whitespace;
    anything else has an empty body.
    """
    match = _BODY_RE.search(html)
    if match:
        return match.group(1)
    if html.lstrip("\ufeff \t\r\n").startswith(_XML_DECLARATION):
        return html
    return ""


def strip_scripts_and_styles(body: str) -> str:
    body = _SCRIPT_RE.sub("", body)
    return _STYLE_RE.sub("", body)


def flatten_text(body: str) -> str:
    text = _TAG_RE.sub("", body)
    text = text.replace("\r", "").replace("\n", "")
    return text.strip()


def tokenize(text: str) -> List[str]:
    # Consecutive spaces yield empty tokens which are counted as words.
    if not text:
        return []
    return text.split(" ")


def is_number(token: str) -> bool:
    return _NUMBER_RE.fullmatch(token) is not None


def count_tokens(text: str, url: str = "") -> PageResult:
    tokens = tokenize(text)
    numbers = sum(1 for token in tokens if is_number(token))
    return PageResult(url=url, words=len(tokens) - numbers, numbers=numbers)


def analyze(raw_html: str, url: str = "") -> PageResult:
    return count_tokens(flatten_text(strip_scripts_and_styles(isolate_body(raw_html))), url)


class TextAnalyzer(Protocol):
    def visible_fragment(self, raw_html: str) -> str: ...

    def count(self, fragment: str, url: str) -> PageResult: ...


class PageTextAnalyzer:
    def visible_fragment(self, raw_html: str) -> str:
        """Body markup with script and style blocks removed; links are read from this too."""
        return strip_scripts_and_styles(isolate_body(raw_html))

    def count(self, fragment: str, url: str) -> PageResult:
        return count_tokens(flatten_text(fragment), url)

    def analyze(self, raw_html: str, url: str = "") -> PageResult:
        return self.count(self.visible_fragment(raw_html), url)
