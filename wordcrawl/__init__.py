"""wordcrawl - depth-limited single-host crawler counting words and numbers per page."""

__version__ = "0.1.0"
