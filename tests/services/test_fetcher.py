import threading
from unittest.mock import MagicMock

from linkcollector.domain.http_response import HttpResponse
from linkcollector.exceptions import HttpFetchError
from linkcollector.services.fetcher import PageFetcher


def _fetcher(response=None, side_effect=None):
    http_service = MagicMock()
    if side_effect is not None:
        http_service.fetch.side_effect = side_effect
    else:
        http_service.fetch.return_value = response
    sleep = MagicMock()
    return PageFetcher(http_service, sleep_fn=sleep), http_service, sleep


def _html(text="<html><a href='/x'>x</a></html>", status=200, content_type="text/html; charset=utf-8", url=None):
    return HttpResponse(status, text, content_type, url)


def test_success_returns_html_and_final_url():
    fetcher, http_service, _ = _fetcher(_html(url="https://example.com/final"))
    result = fetcher.fetch("https://example.com/start", 0)
    assert result.ok
    assert result.final_url == "https://example.com/final"
    assert "href" in result.html
    http_service.fetch.assert_called_once_with("https://example.com/start")


def test_final_url_defaults_to_requested_url():
    fetcher, _, _ = _fetcher(_html())
    assert fetcher.fetch("https://example.com/", 0).final_url == "https://example.com/"


def test_delay_is_applied_before_request():
    fetcher, _, sleep = _fetcher(_html())
    fetcher.fetch("https://example.com/", 1500)
    sleep.assert_called_once_with(1.5)


def test_zero_delay_does_not_sleep():
    fetcher, _, sleep = _fetcher(_html())
    fetcher.fetch("https://example.com/", 0)
    sleep.assert_not_called()


def test_unsupported_url_is_not_requested():
    fetcher, http_service, _ = _fetcher(_html())
    for url in ("", "   ", "ftp://example.com/file", "not-a-url"):
        result = fetcher.fetch(url, 0)
        assert not result.ok
    http_service.fetch.assert_not_called()


def test_non_success_status_is_failure():
    fetcher, _, _ = _fetcher(_html(status=404))
    result = fetcher.fetch("https://example.com/missing", 0)
    assert not result.ok
    assert result.error == "HTTP error: status 404"


def test_non_html_content_is_failure():
    fetcher, _, _ = _fetcher(_html(text="{}", content_type="application/json"))
    result = fetcher.fetch("https://example.com/api", 0)
    assert not result.ok
    assert "application/json" in result.error


def test_missing_content_type_is_failure():
    fetcher, _, _ = _fetcher(_html(content_type=None))
    assert not fetcher.fetch("https://example.com/", 0).ok


def test_empty_body_is_failure():
    fetcher, _, _ = _fetcher(_html(text="   \n"))
    result = fetcher.fetch("https://example.com/", 0)
    assert result.error == "Empty response body"


def test_http_errors_become_failures():
    err = HttpFetchError("https://example.com/", ConnectionError("refused"))
    fetcher, _, _ = _fetcher(side_effect=err)
    result = fetcher.fetch("https://example.com/", 0)
    assert not result.ok
    assert "refused" in result.error


def test_unexpected_errors_become_failures():
    fetcher, _, _ = _fetcher(side_effect=RuntimeError("boom"))
    result = fetcher.fetch("https://example.com/", 0)
    assert "boom" in result.error


def test_set_stop_event_cancels_without_request():
    fetcher, http_service, _ = _fetcher(_html())
    stop = threading.Event()
    stop.set()
    result = fetcher.fetch("https://example.com/", 1000, stop_event=stop)
    assert result.error == "Fetch cancelled"
    http_service.fetch.assert_not_called()


def test_stop_event_wait_replaces_sleep():
    fetcher, _, sleep = _fetcher(_html())
    stop = MagicMock()
    stop.is_set.return_value = False
    stop.wait.return_value = False
    assert fetcher.fetch("https://example.com/", 250, stop_event=stop).ok
    stop.wait.assert_called_once_with(0.25)
    sleep.assert_not_called()


def test_stop_during_delay_cancels():
    fetcher, http_service, _ = _fetcher(_html())
    stop = MagicMock()
    stop.is_set.return_value = False
    stop.wait.return_value = True
    assert fetcher.fetch("https://example.com/", 250, stop_event=stop).error == "Fetch cancelled"
    http_service.fetch.assert_not_called()
