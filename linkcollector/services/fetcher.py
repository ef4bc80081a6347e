from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional, Protocol
from urllib.parse import urlsplit

from linkcollector.domain.fetch_result import FetchResult
from linkcollector.exceptions import HttpFetchError
from linkcollector.services.http_service import HttpService

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Fetch a page after the pacing delay and report content or a failure reason.

    Implementations never raise for fetch failures; they return
    `FetchResult.failure(reason)` instead.
    """

    def fetch(self, url: str, delay_ms: int, stop_event: Optional[threading.Event] = None) -> FetchResult: ...


def _is_fetchable(url: str) -> bool:
    if not url or not url.strip():
        return False
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return parts.scheme.lower() in ("http", "https") and bool(parts.netloc)


class PageFetcher:
    """Paced HTML fetcher on top of `HttpService`.

    The delay runs before every request. With a stop event the wait is
    interruptible and a set event cancels the fetch.
    """

    def __init__(self, http_service: HttpService, sleep_fn: Callable[[float], None] = time.sleep):
        self._http_service = http_service
        self._sleep = sleep_fn

    def _wait(self, url: str, delay_ms: int, stop_event: Optional[threading.Event]) -> bool:
        """Apply the pacing delay. Returns False if the crawl was stopped meanwhile."""
        if stop_event is not None and stop_event.is_set():
            return False
        if delay_ms <= 0:
            return True
        logger.debug("Applying delay of %sms before request to %s", delay_ms, url)
        seconds = delay_ms / 1000.0
        if stop_event is not None:
            return not stop_event.wait(seconds)
        self._sleep(seconds)
        return True

    def fetch(self, url: str, delay_ms: int, stop_event: Optional[threading.Event] = None) -> FetchResult:
        if not _is_fetchable(url):
            return FetchResult.failure(f"Unsupported or empty URL: {url!r}")

        if not self._wait(url, delay_ms, stop_event):
            logger.info("Fetch cancelled for %s", url)
            return FetchResult.failure("Fetch cancelled")

        try:
            response = self._http_service.fetch(url)
        except HttpFetchError as e:
            logger.warning("Fetch failed for %s: %s", url, e)
            return FetchResult.failure(str(e))
        except Exception as e:
            logger.error("Fetch error for %s: %s", url, e, exc_info=True)
            return FetchResult.failure(f"Unexpected fetch error: {e}")

        logger.info("Fetched %s -> status %s", url, response.status_code)

        if response.status_code < 200 or response.status_code >= 300:
            logger.warning("Non-success status for %s: %s", url, response.status_code)
            return FetchResult.failure(f"HTTP error: status {response.status_code}")

        content_type = response.content_type
        if not content_type or "text/html" not in content_type.lower():
            logger.warning("Skipping non-HTML content: %s for URL: %s", content_type, url)
            return FetchResult.failure(f"Non-HTML content type: {content_type}")

        html = response.text or ""
        if not html.strip():
            logger.warning("Empty body for %s", url)
            return FetchResult.failure("Empty response body")

        return FetchResult.success(html, response.url or url)
