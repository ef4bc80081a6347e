"""Crawl result data model."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import NamedTuple, Optional

from linkcollector.utils.datetime_utils import to_iso_z

FETCH_ERROR = "FetchError"
PARSE_ERROR = "ParseError"
COLLECTION_ERROR = "CollectionError"


class LinkRelationship(NamedTuple):
    """`found` was discovered while scanning `source`."""
    source: str
    found: str

    def to_dict(self) -> dict:
        return {"source": self.source, "found": self.found}


class ErrorEntry(NamedTuple):
    url: str
    error_type: str
    message: str

    def to_dict(self) -> dict:
        return {"url": self.url, "errorType": self.error_type, "message": self.message}


@dataclass
class CrawlStats:
    """Run statistics; mutated by the executor during a crawl and frozen into the result."""

    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration_ms: int = 0
    total_urls_scanned: int = 0
    total_urls_collected: int = 0
    max_depth_reached: int = 0

    def record_scanned(self) -> None:
        self.total_urls_scanned += 1

    def record_collected(self, depth: int) -> None:
        self.total_urls_collected += 1
        if depth > self.max_depth_reached:
            self.max_depth_reached = depth

    def to_dict(self) -> dict:
        return {
            "startTime": to_iso_z(self.start_time),
            "endTime": to_iso_z(self.end_time),
            "durationMs": int(self.duration_ms),
            "totalUrlsScanned": self.total_urls_scanned,
            "totalUrlsCollected": self.total_urls_collected,
            "maxDepthReached": self.max_depth_reached,
        }


@dataclass(frozen=True)
class CrawlResult:
    """The single output value of a crawl.

    `to_dict()` returns the JSON wire shape consumed by the CLI and formatters.
    `stopped` is True when the crawl was cancelled through its stop event; it
    is not part of the wire shape.
    """

    initial_url: str
    depth: int
    all_collected_urls: list[str] = field(default_factory=list)
    link_relationships: list[LinkRelationship] = field(default_factory=list)
    errors: list[ErrorEntry] = field(default_factory=list)
    stats: CrawlStats = field(default_factory=CrawlStats)
    stopped: bool = False

    def to_dict(self) -> dict:
        return {
            "initialUrl": self.initial_url,
            "depth": self.depth,
            "allCollectedUrls": list(self.all_collected_urls),
            "linkRelationships": [r.to_dict() for r in self.link_relationships],
            "errors": [e.to_dict() for e in self.errors],
            "stats": self.stats.to_dict(),
        }
