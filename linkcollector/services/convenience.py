"""Helpers that wrap `collect()`: retries, multiple start URLs, filter and preset shortcuts."""
import dataclasses
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence
from urllib.parse import urlsplit

from linkcollector import config as env
from linkcollector.collector import collect
from linkcollector.domain.crawl_request import CrawlRequest
from linkcollector.domain.crawl_result import CrawlResult
from linkcollector.domain.filter_condition import FilterCondition
from linkcollector.services.presets import get_preset_filters

logger = logging.getLogger(__name__)

CollectFn = Callable[[CrawlRequest], CrawlResult]


def collect_with_retry(
    request: CrawlRequest,
    retries: int = 2,
    retry_delay_ms: int = 1000,
    collect_fn: CollectFn = collect,
    sleep_fn: Callable[[float], None] = time.sleep,
) -> CrawlResult:
    """Call `collect_fn` until it returns, at most `retries + 1` times.

    Only exceptions raised by the collection are retried; per-page fetch
    errors are part of a normal result. The last exception is re-raised.
    """
    last_error: Optional[Exception] = None
    for attempt in range(max(0, retries) + 1):
        try:
            return collect_fn(request)
        except Exception as e:
            last_error = e
            logger.warning("Collection attempt %s for %s failed: %s", attempt + 1, request.initial_url, e)
            if attempt < retries and retry_delay_ms > 0:
                sleep_fn(retry_delay_ms / 1000.0)
    raise last_error


def collect_multiple(
    requests: Sequence[CrawlRequest],
    concurrency: Optional[int] = None,
    collect_fn: Optional[Callable[..., CrawlResult]] = None,
    stop_event: Optional[threading.Event] = None,
) -> List[CrawlResult]:
    """Run independent crawls with at most `concurrency` in flight; results keep input order.

    Each crawl owns its own visited set and accumulators; within one crawl
    fetching stays sequential.
    """
    if not requests:
        return []
    workers = max(1, concurrency if concurrency is not None else env.multi_crawl_concurrency())
    fn = collect_fn or collect
    with ThreadPoolExecutor(max_workers=min(workers, len(requests))) as pool:
        futures = [pool.submit(fn, request, stop_event=stop_event) for request in requests]
        return [f.result() for f in futures]


def _with_condition(request: CrawlRequest, condition: FilterCondition) -> CrawlRequest:
    return dataclasses.replace(request, filters=tuple(request.filters) + (condition,))


def collect_internal(request: CrawlRequest, collect_fn: CollectFn = collect) -> CrawlResult:
    """Collect links on the start URL's host.

    Appends a domain condition for that host. Conditions are ORed, so any
    filters already on the request keep admitting their own matches.
    """
    host = urlsplit(request.initial_url).hostname
    return collect_fn(_with_condition(request, FilterCondition(domain=(host,))))


def collect_by_keywords(request: CrawlRequest, keywords: Sequence[str], collect_fn: CollectFn = collect) -> CrawlResult:
    """Collect links whose URL contains any of `keywords`."""
    return collect_fn(_with_condition(request, FilterCondition(keywords=tuple(keywords))))


def collect_from_domains(request: CrawlRequest, domains: Sequence[str], collect_fn: CollectFn = collect) -> CrawlResult:
    """Collect links whose hostname contains any of `domains`."""
    return collect_fn(_with_condition(request, FilterCondition(domain=tuple(domains))))


def _collect_preset(preset: str, url: str, depth: int, delay_ms: int, collect_fn: CollectFn) -> CrawlResult:
    request = CrawlRequest(
        initial_url=url,
        max_depth=depth,
        filters=get_preset_filters(preset),
        delay_ms=delay_ms,
    )
    return collect_fn(request)


def collect_docs(url: str, depth: int = 2, collect_fn: CollectFn = collect) -> CrawlResult:
    return _collect_preset("documentation", url, depth, 500, collect_fn)


def collect_github(url: str, depth: int = 2, collect_fn: CollectFn = collect) -> CrawlResult:
    return _collect_preset("github", url, depth, 1000, collect_fn)


def collect_blog(url: str, depth: int = 1, collect_fn: CollectFn = collect) -> CrawlResult:
    return _collect_preset("blog", url, depth, 800, collect_fn)


def collect_ecommerce(url: str, depth: int = 2, collect_fn: CollectFn = collect) -> CrawlResult:
    return _collect_preset("ecommerce", url, depth, 1200, collect_fn)
