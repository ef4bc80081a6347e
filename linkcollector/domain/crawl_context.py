import threading
from typing import Dict, List, Optional

from linkcollector.domain.crawl_request import CrawlRequest
from linkcollector.domain.crawl_result import CrawlResult, CrawlStats, ErrorEntry, LinkRelationship
from linkcollector.domain.visited_tracker import VisitedTracker


class CrawlContext:
    """
    Mutable state for a single crawl.

    Owns the visited tracker and every accumulator that ends up in the
    `CrawlResult`. Only the thread running the crawl touches it.
    """

    def __init__(
        self,
        request: CrawlRequest,
        visited_tracker: Optional[VisitedTracker] = None,
        stop_event: Optional[threading.Event] = None,
    ):
        self.request = request
        self.visited_tracker = visited_tracker if visited_tracker is not None else VisitedTracker()
        self.stop_event = stop_event
        # dict keeps insertion order and rejects duplicates
        self.collected: Dict[str, None] = {}
        self.relationships: List[LinkRelationship] = []
        self.errors: List[ErrorEntry] = []
        self.stats = CrawlStats()
        self.stopped = False

    @property
    def max_depth(self) -> int:
        return self.request.max_depth

    @property
    def initial_url(self) -> str:
        return self.request.initial_url

    def mark_visited(self, url: str) -> bool:
        """Test-and-set on the visited tracker; counts the URL as scanned when new."""
        if not self.visited_tracker.add_if_new(url):
            return False
        self.stats.record_scanned()
        return True

    def record_collected(self, url: str, depth: int, source_url: Optional[str]) -> None:
        if url not in self.collected:
            self.collected[url] = None
            self.stats.record_collected(depth)
        if source_url:
            self.relationships.append(LinkRelationship(source=source_url, found=url))

    def record_error(self, url: str, error_type: str, message: str) -> None:
        self.errors.append(ErrorEntry(url=url, error_type=error_type, message=message))

    def is_stopped(self) -> bool:
        """Check if the caller asked the crawl to stop."""
        if self.stop_event is not None and self.stop_event.is_set():
            self.stopped = True
        return self.stopped

    def to_result(self) -> CrawlResult:
        return CrawlResult(
            initial_url=self.request.initial_url,
            depth=self.request.max_depth,
            all_collected_urls=list(self.collected),
            link_relationships=list(self.relationships),
            errors=list(self.errors),
            stats=self.stats,
            stopped=self.stopped,
        )
