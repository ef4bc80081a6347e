import logging
from typing import Callable, Dict, List, Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup

from linkcollector.services.url_filter import contains_self_reference

logger = logging.getLogger(__name__)

# hrefs with these schemes are never links to pages
IGNORED_SCHEMES = ("javascript:", "mailto:", "tel:", "sms:", "file:", "data:")

DEFAULT_PORTS = {"http": 80, "https": 443}

LINK_SELECTOR = "a[href], link[href]"


def is_ignored_href(href: str) -> bool:
    candidate = href.strip().lower()
    return not candidate or candidate.startswith(IGNORED_SCHEMES)


def normalize_url(url: str) -> str:
    """Canonical form of an absolute URL.

    Lowercases scheme and host, drops the default port, and gives http(s)
    URLs with an empty path a `/` path. Query and fragment are kept as-is.
    Raises ValueError for URLs whose authority cannot be parsed.
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    hostname = parts.hostname
    port = parts.port
    if hostname is None:
        netloc = parts.netloc
    else:
        host = f"[{hostname}]" if ":" in hostname else hostname
        userinfo = parts.netloc.rpartition("@")[0] if "@" in parts.netloc else ""
        netloc = f"{userinfo}@{host}" if userinfo else host
        if port is not None and DEFAULT_PORTS.get(scheme) != port:
            netloc = f"{netloc}:{port}"
    path = parts.path
    if not path and scheme in DEFAULT_PORTS:
        path = "/"
    return urlunsplit((scheme, netloc, path, parts.query, parts.fragment))


def resolve_url(href: str, base_url: str) -> Optional[str]:
    """Resolve `href` against `base_url`; None when the result is not a usable absolute URL."""
    try:
        absolute = urljoin(base_url, href.strip())
        if not urlsplit(absolute).scheme:
            return None
        return normalize_url(absolute)
    except ValueError:
        logger.debug("Could not resolve %r against %s", href, base_url)
        return None


def _default_parser(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


class LinkExtractor:
    """Extract absolute candidate URLs from an HTML document."""

    def __init__(self, parser_fn: Optional[Callable[[str], BeautifulSoup]] = None):
        self.parser_fn = parser_fn or _default_parser

    def _scoped_elements(self, soup: BeautifulSoup, scope_selector: Optional[str], scope_element: Optional[str]) -> List:
        if scope_selector:
            matches = soup.select(scope_selector)
            if matches:
                elements = []
                for node in matches:
                    if node.name in ("a", "link"):
                        if node.has_attr("href"):
                            elements.append(node)
                        continue
                    elements.extend(node.select(LINK_SELECTOR))
                return elements
            logger.debug("Selector %r matched nothing, falling back", scope_selector)

        if scope_element:
            matches = soup.find_all(scope_element)
            if matches:
                return [a for node in matches for a in node.find_all("a", href=True)]
            logger.debug("Element %r matched nothing, falling back", scope_element)

        return soup.select(LINK_SELECTOR)

    def extract_links(
        self,
        html: str,
        base_url: str,
        scope_selector: Optional[str] = None,
        scope_element: Optional[str] = None,
        exclude_url: Optional[str] = None,
    ) -> Dict[str, None]:
        """Return the ordered, de-duplicated set of absolute URLs linked from `html`.

        Scope narrows the scanned markup: `scope_selector` first, then
        `scope_element`, then the whole document; a scope that matches no node
        falls back to the next one. Links that merely embed `exclude_url` as a
        share parameter are dropped.
        """
        soup = self.parser_fn(html)
        links: Dict[str, None] = {}
        for element in self._scoped_elements(soup, scope_selector, scope_element):
            href = element.get("href")
            if not isinstance(href, str) or is_ignored_href(href):
                continue
            absolute = resolve_url(href, base_url)
            if absolute is None:
                continue
            if contains_self_reference(absolute, exclude_url):
                logger.debug("Skipping (share link to %s) %s", exclude_url, absolute)
                continue
            links[absolute] = None
        return links
