import logging

from linkcollector.domain.crawl_context import CrawlContext
from linkcollector.services.url_filter import is_admitted, is_default_excluded

logger = logging.getLogger(__name__)


class CrawlPolicy:
    """Encapsulates crawl decision rules: URL admission and the depth cap.

    Separates policy decisions from crawl orchestration logic.
    """

    def __init__(self, admit_fn=is_admitted):
        self.admit_fn = admit_fn

    def should_admit(self, url: str, depth: int, context: CrawlContext) -> bool:
        """Check whether `url` enters the collected set.

        The seed URL (depth 0) skips the user filter conditions but still
        honors the default path exclusions. Every other URL goes through the
        full filter with the crawl's initial URL as share-link base.
        """
        if depth == 0:
            if is_default_excluded(url):
                logger.info("Skipping (default exclusion) seed URL %s", url)
                return False
            return True
        if not self.admit_fn(url, context.request.filters, context.initial_url):
            logger.debug("URL filtered out: %s", url)
            return False
        return True

    def should_skip_due_to_depth(self, depth: int, context: CrawlContext) -> bool:
        """Check if URL is a leaf because the max depth is reached."""
        if depth >= context.max_depth:
            logger.debug("Max depth reached at depth %s", depth)
            return True
        return False
