import json
from typing import Callable, Dict, Iterable, List
from urllib.parse import urlsplit

from linkcollector.domain.crawl_result import CrawlResult
from linkcollector.exceptions import UnknownFormatError


def format_json(result: CrawlResult, indent: int = 2) -> str:
    return json.dumps(result.to_dict(), indent=indent, ensure_ascii=False)


def format_text(result: CrawlResult) -> str:
    lines = [
        "LinkCollector Results",
        f"Initial URL: {result.initial_url}",
        f"Depth: {result.depth}",
        f"Total URLs Collected: {result.stats.total_urls_collected}",
        f"Duration: {result.stats.duration_ms}ms",
        "",
        "Collected URLs:",
    ]
    lines.extend(result.all_collected_urls)
    return "\n".join(lines) + "\n"


def _http_urls(urls: Iterable[str]) -> List[str]:
    valid = []
    for url in urls:
        if not isinstance(url, str) or not url.strip():
            continue
        url = url.strip()
        try:
            scheme = urlsplit(url).scheme.lower()
        except ValueError:
            continue
        if scheme in ("http", "https"):
            valid.append(url)
    return valid


def format_notebooklm(result: CrawlResult, separator: str = "newline") -> str:
    """URLs only, unquoted, one per line (or space separated), as NotebookLM imports them."""
    sep = " " if separator == "space" else "\n"
    return sep.join(_http_urls(result.all_collected_urls))


FORMATTERS: Dict[str, Callable[[CrawlResult], str]] = {
    "json": format_json,
    "txt": format_text,
    "notebooklm": format_notebooklm,
}


def available_formats() -> List[str]:
    return list(FORMATTERS)


def format_result(result: CrawlResult, name: str = "json") -> str:
    formatter = FORMATTERS.get((name or "").strip().lower())
    if formatter is None:
        raise UnknownFormatError(name, FORMATTERS)
    return formatter(result)
