import json
from typing import Any, Mapping, Optional

from linkcollector import config as env
from linkcollector.domain.crawl_request import CrawlRequest
from linkcollector.domain.filter_condition import parse_filter_conditions
from linkcollector.exceptions import InvalidCrawlRequestError
from linkcollector.services.config_file_store import ConfigFileStore
from linkcollector.services.presets import get_preset_filters


class CrawlRequestParser:
    """Merge config-file values and explicitly supplied CLI values into a `CrawlRequest`.

    CLI values override file values only when they are not None, so an
    option left at its (None) default never masks the file's setting.
    """

    def __init__(self, file_store: Optional[ConfigFileStore] = None):
        self.file_store = file_store or ConfigFileStore()

    def merge(self, cli_values: Mapping[str, Any], file_values: Optional[Mapping[str, Any]] = None) -> dict:
        merged = dict(file_values or {})
        for key, value in cli_values.items():
            if value is not None:
                merged[key] = value
        return merged

    def _parse_filters(self, raw: Any) -> list:
        if raw is None:
            return []
        if isinstance(raw, str):
            try:
                raw = json.loads(raw)
            except json.JSONDecodeError as e:
                raise InvalidCrawlRequestError("filters", f"not valid JSON: {e}") from e
        return list(parse_filter_conditions(raw))

    def parse(self, cli_values: Mapping[str, Any], file_values: Optional[Mapping[str, Any]] = None) -> CrawlRequest:
        values = self.merge(cli_values, file_values)

        filters = []
        if values.get("preset"):
            try:
                filters.extend(get_preset_filters(values["preset"]))
            except KeyError as e:
                raise InvalidCrawlRequestError("preset", str(e.args[0])) from e
        if values.get("filtersFile"):
            # a filters file replaces inline filters
            filters.extend(self._parse_filters(self.file_store.load_filters(values["filtersFile"])))
        else:
            filters.extend(self._parse_filters(values.get("filters")))

        depth = values.get("depth")
        delay = values.get("delayMs")
        return CrawlRequest(
            initial_url=values.get("initialUrl"),
            max_depth=env.DEFAULT_DEPTH if depth is None else depth,
            filters=tuple(filters),
            scope_selector=values.get("selector"),
            scope_element=values.get("element"),
            delay_ms=env.CRAWL_DELAY_MS if delay is None else delay,
        )
