"""Dependency injection container for the application."""
from dependency_injector import containers, providers
import requests

from wordcrawl import config as env
from wordcrawl.services.crawl_engine import CrawlEngine
from wordcrawl.services.fetcher import HttpServiceFetcher
from wordcrawl.services.http_service import HttpService
from wordcrawl.services.link_extractor import LinkExtractor
from wordcrawl.services.page_text_analyzer import PageTextAnalyzer


# Environment variables used by the container (read via `wordcrawl.config` helpers).
#
# USER_AGENT (str, default: "wordcrawl/0.1")
#   User-Agent header for outbound HTTP requests.
#
# HTTP_TIMEOUT (float seconds, default: 5.0)
#   Bound on every page request, connect and read.
ENV = {
    "USER_AGENT": env.get_str_env("USER_AGENT", "wordcrawl/0.1"),
    "HTTP_TIMEOUT": env.get_float_env("HTTP_TIMEOUT", 5.0),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for wordcrawl."""

    config = providers.Configuration(default=ENV)

    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=providers.Object(requests.get),
        timeout=config.HTTP_TIMEOUT.as_(float),
    )

    page_fetcher = providers.Singleton(
        HttpServiceFetcher,
        http_service=http_service,
    )

    link_extractor = providers.Singleton(LinkExtractor)

    text_analyzer = providers.Singleton(PageTextAnalyzer)

    # `options` is supplied per run: container.crawl_engine(options=...)
    crawl_engine = providers.Factory(
        CrawlEngine,
        fetcher=page_fetcher,
        link_extractor=link_extractor,
        text_analyzer=text_analyzer,
    )
