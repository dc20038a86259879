from typing import NamedTuple


class PageResult(NamedTuple):
    """Word and number count for a single visited URL."""
    url: str
    words: int = 0
    numbers: int = 0

    @classmethod
    def placeholder(cls, url: str) -> "PageResult":
        """Zero-valued result stored when a URL is claimed, before analysis."""
        return cls(url, 0, 0)
