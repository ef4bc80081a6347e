from typing import Optional, Sequence
from urllib.parse import parse_qsl, unquote, urlsplit

from linkcollector.domain.filter_condition import FilterCondition


# Administrative, auth and commerce paths that are never collected; not configurable.
DEFAULT_EXCLUDED_PATHS = (
    "/admin",
    "/login",
    "/logout",
    "/signin",
    "/signout",
    "/register",
    "/account",
    "/wp-admin",
    "/wp-login",
    "/cart",
    "/checkout",
)


def _split(url: str):
    try:
        parts = urlsplit(url)
        # .hostname and .port parse the netloc lazily; force it here
        _ = parts.hostname
        _ = parts.port
    except ValueError:
        return None
    if not parts.scheme:
        return None
    return parts


def _path_of(parts) -> str:
    return parts.path or "/"


def is_default_excluded(url: str) -> bool:
    """True if the URL's path contains one of `DEFAULT_EXCLUDED_PATHS`. Unparsable URLs count as excluded."""
    parts = _split(url)
    if parts is None:
        return True
    path = _path_of(parts)
    return any(excluded in path for excluded in DEFAULT_EXCLUDED_PATHS)


def contains_self_reference(url: str, base_url: Optional[str]) -> bool:
    """True if `base_url` is embedded in a query-parameter value or the fragment of `url`.

    Catches share links such as `https://twitter.com/share?url=<base_url>`.
    A URL equal to `base_url` never references itself.
    """
    if not base_url or url == base_url:
        return False
    parts = _split(url)
    if parts is None:
        return False
    for _, value in parse_qsl(parts.query, keep_blank_values=True):
        if base_url in value:
            return True
    if parts.fragment and (base_url in parts.fragment or base_url in unquote(parts.fragment)):
        return True
    return False


def _condition_matches(condition: FilterCondition, url: str, hostname: str, path: str) -> bool:
    if condition.domain and not any(d.lower() in hostname for d in condition.domain):
        return False
    if condition.path_prefix and not any(path.startswith(p) for p in condition.path_prefix):
        return False
    if condition.patterns and not any(p.search(url) for p in condition.patterns):
        return False
    if condition.keywords and not any(k in url for k in condition.keywords):
        return False
    return True


def matches_filters(url: str, filters: Optional[Sequence[FilterCondition]]) -> bool:
    """Evaluate only the user filter conditions (OR across conditions, AND across fields)."""
    if not filters:
        return True
    parts = _split(url)
    if parts is None:
        return False
    hostname = parts.hostname or ""
    path = _path_of(parts)
    for condition in filters:
        if _condition_matches(condition, url, hostname, path):
            return True
    return False


def is_admitted(url: str, filters: Optional[Sequence[FilterCondition]] = None, base_url: Optional[str] = None) -> bool:
    """Decide whether a discovered URL enters the collected set.

    Rejects unparsable URLs, default-excluded paths and share links back to
    `base_url`, then applies the filter conditions. Pure: no hidden state.
    """
    if _split(url) is None:
        return False
    if is_default_excluded(url):
        return False
    if contains_self_reference(url, base_url):
        return False
    return matches_filters(url, filters)

