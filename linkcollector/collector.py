import threading
from typing import Optional

from linkcollector.domain.crawl_request import CrawlRequest
from linkcollector.domain.crawl_result import CrawlResult
from linkcollector.services.crawl_executor import CrawlExecutor

_container = None


def get_container():
    """Return the process-wide DI container, creating it on first use."""
    global _container
    if _container is None:
        from linkcollector.container import Container
        _container = Container()
    return _container


def collect(
    request: CrawlRequest,
    stop_event: Optional[threading.Event] = None,
    executor: Optional[CrawlExecutor] = None,
) -> CrawlResult:
    """Crawl from `request.initial_url` and return the collected links report.

    Invalid input raises before any request is made (see `CrawlRequest`);
    fetch and parse failures are reported in `CrawlResult.errors` instead.
    Setting `stop_event` stops the crawl after the current request.
    """
    if not isinstance(request, CrawlRequest):
        raise TypeError(f"collect() expects a CrawlRequest, got {type(request).__name__}")
    if executor is None:
        executor = get_container().crawl_executor()
    return executor.crawl(request, stop_event=stop_event)
