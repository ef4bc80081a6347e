"""Read-only analytics over finished crawl results."""
import math
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Sequence
from urllib.parse import urlsplit

from linkcollector.domain.crawl_result import CrawlResult, CrawlStats


@dataclass(frozen=True)
class CollectionStatistics:
    total_links: int
    unique_links: int
    internal_links: int
    external_links: int
    links_by_domain: Dict[str, int] = field(default_factory=dict)
    links_by_depth: Dict[int, int] = field(default_factory=dict)
    average_links_per_page: int = 0
    crawl_efficiency: float = 0.0

    def to_dict(self) -> dict:
        return {
            "totalLinks": self.total_links,
            "uniqueLinks": self.unique_links,
            "internalLinks": self.internal_links,
            "externalLinks": self.external_links,
            "linksByDomain": dict(self.links_by_domain),
            "linksByDepth": {str(k): v for k, v in self.links_by_depth.items()},
            "averageLinksPerPage": self.average_links_per_page,
            "crawlEfficiency": self.crawl_efficiency,
        }


def _hostname(url: str) -> str:
    try:
        return urlsplit(url).hostname or "invalid"
    except ValueError:
        return "invalid"


def _round_half_up(value: float) -> int:
    # halves round up, not to even
    return int(math.floor(value + 0.5))


def _estimate_depths(result: CrawlResult) -> Dict[str, int]:
    # relationships are in discovery order, so a source's depth is known before its children
    depths = {result.initial_url: 0}
    for rel in result.link_relationships:
        target = depths.get(rel.source, 0) + 1
        if rel.found not in depths or depths[rel.found] > target:
            depths[rel.found] = target
    return depths


def calculate_statistics(result: CrawlResult) -> CollectionStatistics:
    unique = list(dict.fromkeys(result.all_collected_urls))
    source_host = _hostname(result.initial_url)

    internal = 0
    by_domain: Dict[str, int] = {}
    for url in unique:
        host = _hostname(url)
        if host == source_host:
            internal += 1
        by_domain[host] = by_domain.get(host, 0) + 1

    by_depth: Dict[int, int] = {}
    for depth in _estimate_depths(result).values():
        by_depth[depth] = by_depth.get(depth, 0) + 1

    scanned = result.stats.total_urls_scanned
    return CollectionStatistics(
        total_links=len(result.all_collected_urls),
        unique_links=len(unique),
        internal_links=internal,
        external_links=len(unique) - internal,
        links_by_domain=by_domain,
        links_by_depth=dict(sorted(by_depth.items())),
        average_links_per_page=_round_half_up(len(result.all_collected_urls) / scanned) if scanned else 0,
        crawl_efficiency=_round_half_up(result.stats.total_urls_collected / scanned * 100) / 100 if scanned else 0.0,
    )


def merge_results(results: Sequence[CrawlResult]) -> CrawlResult:
    """Combine several crawl results into one (URLs de-duplicated, counters summed)."""
    if not results:
        raise ValueError("Cannot merge an empty list of results")
    if len(results) == 1:
        return results[0]

    urls: Dict[str, None] = {}
    relationships: List = []
    errors: List = []
    for r in results:
        urls.update(dict.fromkeys(r.all_collected_urls))
        relationships.extend(r.link_relationships)
        errors.extend(r.errors)

    stats = CrawlStats(
        start_time=results[0].stats.start_time,
        end_time=results[-1].stats.end_time,
        duration_ms=sum(r.stats.duration_ms for r in results),
        total_urls_scanned=sum(r.stats.total_urls_scanned for r in results),
        total_urls_collected=sum(r.stats.total_urls_collected for r in results),
        max_depth_reached=max(r.stats.max_depth_reached for r in results),
    )
    return CrawlResult(
        initial_url=f"Multiple URLs ({len(results)} crawls)",
        depth=max(r.depth for r in results),
        all_collected_urls=list(urls),
        link_relationships=relationships,
        errors=errors,
        stats=stats,
        stopped=any(r.stopped for r in results),
    )


def filter_results_by_domain(result: CrawlResult, domains: Sequence[str]) -> List[str]:
    """Collected URLs whose hostname contains any of `domains`."""
    matched = []
    for url in result.all_collected_urls:
        host = _hostname(url)
        if host != "invalid" and any(domain in host for domain in domains):
            matched.append(url)
    return matched


class DomainCount(NamedTuple):
    domain: str
    count: int
    percentage: int


def get_top_domains(result: CrawlResult, limit: int = 10) -> List[DomainCount]:
    """The most linked hostnames, by unique collected URL count."""
    stats = calculate_statistics(result)
    if not stats.unique_links:
        return []
    ranked = sorted(stats.links_by_domain.items(), key=lambda item: item[1], reverse=True)
    return [
        DomainCount(domain, count, _round_half_up(count / stats.unique_links * 100))
        for domain, count in ranked[:limit]
    ]


@dataclass(frozen=True)
class EfficiencyAnalysis:
    efficiency: float
    success_rate: int
    error_rate: int
    insights: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


def analyze_crawl_efficiency(result: CrawlResult) -> EfficiencyAnalysis:
    """Summarize how well a crawl's filters and fetches worked, with hints for the next run."""
    stats = calculate_statistics(result)
    scanned = result.stats.total_urls_scanned
    error_rate = _round_half_up(len(result.errors) / scanned * 100) if scanned else 0
    efficiency = stats.crawl_efficiency

    insights: List[str] = []
    recommendations: List[str] = []
    if efficiency < 0.3:
        insights.append("Low crawl efficiency - many filtered URLs")
        recommendations.append("Consider adjusting filters to be more permissive")
    elif efficiency > 0.8:
        insights.append("High crawl efficiency - filters are well-tuned")

    if error_rate > 20:
        insights.append("High error rate detected")
        recommendations.append("Check network connectivity and target site availability")

    if stats.external_links > stats.internal_links * 2:
        insights.append("Many external links found")
        recommendations.append("Consider adding domain filters to focus on internal content")

    if result.stats.max_depth_reached < result.depth:
        insights.append("Maximum depth not reached - possible early termination")
        recommendations.append("Check for filtering or connectivity issues")

    return EfficiencyAnalysis(
        efficiency=efficiency,
        success_rate=100 - error_rate,
        error_rate=error_rate,
        insights=insights,
        recommendations=recommendations,
    )
