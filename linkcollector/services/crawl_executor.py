import logging
import threading
import time
from typing import Optional

from linkcollector.domain.crawl_context import CrawlContext
from linkcollector.domain.crawl_request import CrawlRequest
from linkcollector.domain.crawl_result import COLLECTION_ERROR, FETCH_ERROR, PARSE_ERROR, CrawlResult
from linkcollector.services.crawl_policy import CrawlPolicy
from linkcollector.services.fetcher import Fetcher
from linkcollector.services.link_extractor import LinkExtractor
from linkcollector.utils.datetime_utils import utc_now

_default_logger = logging.getLogger(__name__)


class CrawlExecutor:
    """Executes a crawl given configured collaborators.

    This class owns the crawl control-flow: the depth-first walk, visited
    bookkeeping, cancellation checks, fetching and delegating link
    extraction. Children are crawled one at a time in extraction order so the
    fetcher's pacing delay separates every pair of requests. It does NOT
    construct dependencies (that stays in the DI layer).
    """

    def __init__(
        self,
        *,
        fetcher: Fetcher,
        link_extractor: LinkExtractor,
        crawl_policy: Optional[CrawlPolicy] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.fetcher = fetcher
        self.link_extractor = link_extractor
        self.crawl_policy = crawl_policy or CrawlPolicy()
        self.logger = logger if logger is not None else _default_logger

    def crawl(self, request: CrawlRequest, stop_event: Optional[threading.Event] = None) -> CrawlResult:
        if request is None:
            raise ValueError("request is required for crawl")

        context = CrawlContext(request, stop_event=stop_event)
        self.logger.info(
            "Starting web link collection from %s with depth %s", request.initial_url, request.max_depth
        )

        context.stats.start_time = utc_now()
        started = time.monotonic()
        try:
            self.crawl_from(request.initial_url, 0, None, context)
        except Exception as e:
            self.logger.error("Unexpected error during collection from %s: %s", request.initial_url, e, exc_info=True)
            context.record_error(request.initial_url, COLLECTION_ERROR, f"Unexpected error: {e}")
        context.stats.end_time = utc_now()
        context.stats.duration_ms = int(round((time.monotonic() - started) * 1000))

        if context.stopped:
            self.logger.info("Collection from %s cancelled", request.initial_url)
        self.logger.info(
            "Collection completed. Collected %s URLs, encountered %s errors. Duration: %sms",
            context.stats.total_urls_collected,
            len(context.errors),
            context.stats.duration_ms,
        )
        return context.to_result()

    def crawl_from(self, url: str, depth: int, source_url: Optional[str], context: CrawlContext) -> None:
        if context.is_stopped():
            self.logger.debug("Crawl cancelled before %s", url)
            return
        if not context.mark_visited(url):
            self.logger.debug("Skipping already visited URL: %s", url)
            return

        if not self.crawl_policy.should_admit(url, depth, context):
            return
        context.record_collected(url, depth, source_url)

        if self.crawl_policy.should_skip_due_to_depth(depth, context):
            return

        self.logger.debug("Fetching URL: %s", url)
        result = self.fetcher.fetch(url, context.request.delay_ms, stop_event=context.stop_event)
        if not result.ok:
            if context.is_stopped():
                return
            self.logger.error("Failed to fetch URL %s: %s", url, result.error)
            context.record_error(url, FETCH_ERROR, result.error or "Failed to fetch URL content")
            return

        final_url = result.final_url
        # scope rules only apply to the initial page
        scope_selector = context.request.scope_selector if depth == 0 else None
        scope_element = context.request.scope_element if depth == 0 else None
        try:
            links = self.link_extractor.extract_links(
                result.html,
                final_url,
                scope_selector=scope_selector,
                scope_element=scope_element,
                exclude_url=final_url,
            )
        except Exception as e:
            self.logger.error("Error parsing HTML from %s: %s", final_url, e, exc_info=True)
            context.record_error(final_url, PARSE_ERROR, f"Error parsing HTML: {e}")
            return
        self.logger.debug("Extracted %s links from %s", len(links), final_url)

        for link in links:
            if context.is_stopped():
                self.logger.info("Crawl cancelled during traversal of %s", final_url)
                return
            self.crawl_from(link, depth + 1, final_url, context)
