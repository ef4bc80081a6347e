from typing import Set


class VisitedTracker:
    """
    Tracks which URLs have been scheduled for scanning during one crawl.

    Membership is write-once: a URL is never forgotten before the crawl ends,
    so each URL is scanned at most once.
    """

    def __init__(self):
        self._visited: Set[str] = set()

    def add_if_new(self, url: str) -> bool:
        """Mark `url` and return True if it was not visited before."""
        if url in self._visited:
            return False
        self._visited.add(url)
        return True
