"""Dependency injection container for the application."""
from dependency_injector import containers, providers
import requests

from linkcollector import config as env
from linkcollector.services.crawl_executor import CrawlExecutor
from linkcollector.services.crawl_policy import CrawlPolicy
from linkcollector.services.fetcher import PageFetcher
from linkcollector.services.http_service import HttpService
from linkcollector.services.link_extractor import LinkExtractor


# Environment variables used by the container (read via `linkcollector.config` helpers).
#
# USER_AGENT (str, default: "LinkCollector/1.0")
#   User-Agent header for outbound HTTP requests.
#
# HTTP_TIMEOUT (int seconds, default: 10)
#   Per-request timeout. A timeout is reported as a FetchError like any other transport failure.
ENV = {
    "USER_AGENT": env.get_str_env("USER_AGENT", "LinkCollector/1.0"),
    "HTTP_TIMEOUT": env.get_int_env("HTTP_TIMEOUT", 10),
}


class Container(containers.DeclarativeContainer):
    """Dependency injection container for linkcollector."""

    config = providers.Configuration(default=ENV)

    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=providers.Object(requests.get),
        timeout=config.HTTP_TIMEOUT.as_(int),
    )

    page_fetcher = providers.Singleton(
        PageFetcher,
        http_service=http_service,
    )

    link_extractor = providers.Singleton(
        LinkExtractor
    )

    crawl_policy = providers.Singleton(
        CrawlPolicy
    )

    crawl_executor = providers.Factory(
        CrawlExecutor,
        fetcher=page_fetcher,
        link_extractor=link_extractor,
        crawl_policy=crawl_policy,
    )
