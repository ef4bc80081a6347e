from typing import NamedTuple, Optional


class FetchResult(NamedTuple):
    """Outcome of a paced page fetch.

    Either `html` and `final_url` are set, or `error` holds a human-readable
    reason and both are None.
    """
    html: Optional[str]
    final_url: Optional[str]
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.html is not None

    @classmethod
    def success(cls, html: str, final_url: str) -> "FetchResult":
        return cls(html=html, final_url=final_url, error=None)

    @classmethod
    def failure(cls, reason: str) -> "FetchResult":
        return cls(html=None, final_url=None, error=reason)
