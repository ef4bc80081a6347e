"""Domain objects for linkcollector - explicit re-exports to satisfy linters."""
from .filter_condition import FilterCondition as FilterCondition
from .crawl_request import CrawlRequest as CrawlRequest
from .crawl_result import CrawlResult as CrawlResult
from .crawl_result import CrawlStats as CrawlStats
from .crawl_result import ErrorEntry as ErrorEntry
from .crawl_result import LinkRelationship as LinkRelationship
from .crawl_context import CrawlContext as CrawlContext
from .fetch_result import FetchResult as FetchResult
from .visited_tracker import VisitedTracker as VisitedTracker

__all__ = [
    "FilterCondition",
    "CrawlRequest",
    "CrawlResult",
    "CrawlStats",
    "ErrorEntry",
    "LinkRelationship",
    "CrawlContext",
    "FetchResult",
    "VisitedTracker",
]
