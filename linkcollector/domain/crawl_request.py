from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import urlsplit

import soupsieve

from linkcollector.domain.filter_condition import FilterCondition, parse_filter_conditions
from linkcollector.exceptions import InvalidCrawlRequestError

MAX_DEPTH_LIMIT = 5


def validate_initial_url(url: Optional[str]) -> str:
    if url is None or not isinstance(url, str) or url.strip() == "":
        raise InvalidCrawlRequestError("initial_url", "a URL is required")
    url = url.strip()
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise InvalidCrawlRequestError("initial_url", f"{url!r} is not a valid URL ({e})") from e
    if parts.scheme.lower() not in ("http", "https") or not parts.hostname:
        raise InvalidCrawlRequestError("initial_url", f"{url!r} must be an absolute http(s) URL")
    return url


@dataclass(frozen=True)
class CrawlRequest:
    """Fully resolved, validated input for one crawl.

    `max_depth` is clamped to `MAX_DEPTH_LIMIT`; negative depths, negative
    delays and non-http(s) start URLs are rejected here so the traversal never
    has to re-check them.
    """

    initial_url: str
    max_depth: int = 1
    filters: tuple[FilterCondition, ...] = ()
    scope_selector: Optional[str] = None
    scope_element: Optional[str] = None
    delay_ms: int = 1000

    def __post_init__(self):
        object.__setattr__(self, "initial_url", validate_initial_url(self.initial_url))

        if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
            raise InvalidCrawlRequestError("max_depth", f"expected an integer, got {self.max_depth!r}")
        if self.max_depth < 0:
            raise InvalidCrawlRequestError("max_depth", f"must be >= 0, got {self.max_depth}")
        object.__setattr__(self, "max_depth", min(self.max_depth, MAX_DEPTH_LIMIT))

        if isinstance(self.delay_ms, bool) or not isinstance(self.delay_ms, (int, float)):
            raise InvalidCrawlRequestError("delay_ms", f"expected a number, got {self.delay_ms!r}")
        if self.delay_ms < 0:
            raise InvalidCrawlRequestError("delay_ms", f"must be >= 0, got {self.delay_ms}")
        object.__setattr__(self, "delay_ms", int(self.delay_ms))

        object.__setattr__(self, "filters", parse_filter_conditions(self.filters))

        selector = (self.scope_selector or "").strip() or None
        if selector is not None:
            try:
                soupsieve.compile(selector)
            except soupsieve.SelectorSyntaxError as e:
                raise InvalidCrawlRequestError("scope_selector", f"{selector!r} is not a valid CSS selector") from e
        object.__setattr__(self, "scope_selector", selector)
        object.__setattr__(self, "scope_element", (self.scope_element or "").strip().lower() or None)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CrawlRequest":
        """Build a request from config-file style keys (`initialUrl`, `depth`, `delayMs`, ...)."""
        kwargs: dict[str, Any] = {"initial_url": data.get("initialUrl", data.get("initial_url"))}
        depth = data.get("depth", data.get("max_depth"))
        if depth is not None:
            kwargs["max_depth"] = depth
        delay = data.get("delayMs", data.get("delay_ms"))
        if delay is not None:
            kwargs["delay_ms"] = delay
        if data.get("filters") is not None:
            kwargs["filters"] = data["filters"]
        kwargs["scope_selector"] = data.get("selector", data.get("scope_selector"))
        kwargs["scope_element"] = data.get("element", data.get("scope_element"))
        return cls(**kwargs)
