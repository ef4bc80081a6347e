import json
import os
from typing import Any, Optional

import yaml

from linkcollector.exceptions import ConfigFileError

SUPPORTED_EXTENSIONS = (".json", ".yml", ".yaml")


class ConfigFileStore:
    """Filesystem IO for JSON/YAML config and filters files.

    Responsibility: locate, read, and parse files on disk. It does NOT
    validate crawl settings (see `CrawlRequestParser`).
    """

    def __init__(self, *, base_dir: Optional[str] = None):
        self.base_dir = base_dir

    def _resolve_path(self, config_path: str) -> str:
        if self.base_dir is None or os.path.isabs(config_path):
            return config_path
        return os.path.join(self.base_dir, config_path)

    def _parse(self, config_path: str, content: str, ext: str) -> Any:
        if ext == ".json":
            try:
                return json.loads(content)
            except json.JSONDecodeError as e:
                raise ConfigFileError(config_path, f"is not valid JSON: {e}") from e
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigFileError(config_path, f"is not valid YAML: {e}") from e

    def load(self, config_path: str) -> Any:
        """Return the parsed document at `config_path`."""
        if not config_path or not config_path.strip():
            raise ConfigFileError(str(config_path), "path is empty")
        ext = os.path.splitext(config_path)[1].lower()
        if ext not in SUPPORTED_EXTENSIONS:
            raise ConfigFileError(config_path, f"has unsupported extension {ext or '(none)'!r}; use .json, .yml or .yaml")
        full_path = self._resolve_path(config_path)
        if not os.path.isfile(full_path):
            raise ConfigFileError(config_path, "not found")
        try:
            with open(full_path, "r", encoding="utf-8") as f:
                content = f.read()
        except OSError as e:
            raise ConfigFileError(config_path, f"could not be read: {e}") from e
        return self._parse(config_path, content, ext)

    def load_dict(self, config_path: str) -> dict:
        """Return the parsed mapping at `config_path`; an empty file yields {}."""
        data = self.load(config_path)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigFileError(config_path, "must contain a mapping at the top level")
        return data

    def load_filters(self, filters_path: str) -> list:
        """Return the filter conditions stored at `filters_path`.

        The file holds either a list of conditions or a mapping with a
        `filters` key (a bare mapping is a single condition).
        """
        data = self.load(filters_path)
        if data is None:
            return []
        if isinstance(data, dict):
            data = data.get("filters", data)
        if isinstance(data, dict):
            return [data]
        if not isinstance(data, list):
            raise ConfigFileError(filters_path, "must contain a list of filter conditions")
        return data
