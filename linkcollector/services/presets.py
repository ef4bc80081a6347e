"""Predefined filter conditions for common crawling targets."""
from typing import Dict, List

from linkcollector.domain.filter_condition import FilterCondition

FILTER_PRESETS: Dict[str, tuple] = {
    # documentation sites, API references, guides
    "documentation": (
        FilterCondition(
            domain=("docs.github.com", "developer.mozilla.org", "docs.microsoft.com"),
            path_prefix=("/docs/", "/documentation/", "/api/", "/guide/", "/reference/"),
            keywords=("doc", "guide", "tutorial", "api", "reference", "manual", "help"),
        ),
    ),
    "github": (
        FilterCondition(
            domain=("github.com",),
            path_prefix=("/repos/", "/orgs/", "/users/", "/issues/", "/pulls/", "/discussions/"),
        ),
    ),
    "blog": (
        FilterCondition(
            path_prefix=("/blog/", "/post/", "/article/", "/news/", "/story/"),
            keywords=("blog", "post", "article", "news", "story", "update"),
        ),
    ),
    "ecommerce": (
        FilterCondition(
            path_prefix=("/product/", "/shop/", "/store/", "/catalog/", "/category/"),
            keywords=("product", "buy", "shop", "store", "cart", "price", "order"),
        ),
    ),
    "social": (
        FilterCondition(
            domain=("twitter.com", "x.com", "linkedin.com", "facebook.com", "instagram.com"),
        ),
    ),
    "media": (
        FilterCondition(
            keywords=("video", "audio", "image", "media", "gallery", "photo"),
            regex=(r"(?i)\.(jpg|jpeg|png|gif|svg|mp4|mp3|pdf|doc|docx)$",),
        ),
    ),
}


def available_presets() -> List[str]:
    return list(FILTER_PRESETS)


def get_preset_filters(name: str) -> tuple:
    """Return the conditions for preset `name`; raises KeyError for unknown names."""
    try:
        return FILTER_PRESETS[name]
    except KeyError:
        raise KeyError(f"Unknown preset {name!r}; available: {', '.join(FILTER_PRESETS)}") from None
