import json
from datetime import datetime, timezone

import pytest

from linkcollector.domain.crawl_result import CrawlResult, CrawlStats, LinkRelationship
from linkcollector.exceptions import UnknownFormatError
from linkcollector.services.result_formatter import available_formats, format_notebooklm, format_result, format_text


@pytest.fixture
def result():
    return CrawlResult(
        initial_url="https://example.com/",
        depth=1,
        all_collected_urls=["https://example.com/", "https://example.com/über", "https://other.com/"],
        link_relationships=[LinkRelationship("https://example.com/", "https://other.com/")],
        stats=CrawlStats(
            start_time=datetime(2024, 5, 1, tzinfo=timezone.utc),
            end_time=datetime(2024, 5, 1, 0, 0, 1, tzinfo=timezone.utc),
            duration_ms=1000,
            total_urls_scanned=3,
            total_urls_collected=3,
        ),
    )


def test_json_is_the_wire_shape(result):
    text = format_result(result, "json")
    assert json.loads(text) == result.to_dict()
    assert "über" in text


def test_text_lists_urls_after_header(result):
    text = format_text(result)
    lines = text.splitlines()
    assert lines[0] == "LinkCollector Results"
    assert "Total URLs Collected: 3" in lines
    assert "Duration: 1000ms" in lines
    assert lines[lines.index("Collected URLs:") + 1:] == result.all_collected_urls
    assert text.endswith("\n")


def test_notebooklm_keeps_only_http_urls(result):
    polluted = CrawlResult(
        initial_url=result.initial_url,
        depth=1,
        all_collected_urls=result.all_collected_urls + ["ftp://files.example.com/", "  "],
    )
    assert format_notebooklm(polluted).splitlines() == result.all_collected_urls
    assert format_notebooklm(result, separator="space").count(" ") == 2


def test_format_name_is_case_insensitive(result):
    assert format_result(result, "TXT") == format_text(result)


def test_unknown_format_raises(result):
    with pytest.raises(UnknownFormatError) as exc:
        format_result(result, "xml")
    assert isinstance(exc.value, ValueError)


def test_available_formats():
    assert available_formats() == ["json", "txt", "notebooklm"]
