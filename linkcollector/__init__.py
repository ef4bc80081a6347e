"""Depth-bounded hyperlink collection."""
import logging

from linkcollector.collector import collect
from linkcollector.domain import CrawlRequest, CrawlResult, FilterCondition
from linkcollector.services.convenience import (
    collect_blog,
    collect_by_keywords,
    collect_docs,
    collect_ecommerce,
    collect_from_domains,
    collect_github,
    collect_internal,
    collect_multiple,
    collect_with_retry,
)
from linkcollector.services.statistics import (
    analyze_crawl_efficiency,
    calculate_statistics,
    filter_results_by_domain,
    get_top_domains,
    merge_results,
)

# Library logging is silent unless the application configures handlers.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "collect",
    "CrawlRequest",
    "CrawlResult",
    "FilterCondition",
    "collect_blog",
    "collect_by_keywords",
    "collect_docs",
    "collect_ecommerce",
    "collect_from_domains",
    "collect_github",
    "collect_internal",
    "collect_multiple",
    "collect_with_retry",
    "analyze_crawl_efficiency",
    "calculate_statistics",
    "filter_results_by_domain",
    "get_top_domains",
    "merge_results",
]
