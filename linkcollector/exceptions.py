"""Custom exceptions for linkcollector."""


class LinkCollectorError(Exception):
    """Base class for errors raised by linkcollector."""


class InvalidCrawlRequestError(LinkCollectorError, ValueError):
    """Raised when a crawl request is rejected before traversal starts."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


class FilterConfigError(LinkCollectorError, ValueError):
    """Raised when a filter condition cannot be built (bad regex, unknown key)."""


class ConfigFileError(LinkCollectorError):
    """Raised when a config or filters file is missing, malformed or unsupported."""

    def __init__(self, config_path: str, reason: str = "could not be loaded"):
        self.config_path = config_path
        self.reason = reason
        super().__init__(f"Config file '{config_path}' {reason}")


class HttpFetchError(LinkCollectorError):
    """Raised when an HTTP fetch fails due to network/transport errors."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"HTTP fetch failed for {url}: {original}")


class UnknownFormatError(LinkCollectorError, ValueError):
    """Raised when an output format name is not registered."""

    def __init__(self, name: str, available):
        self.name = name
        self.available = list(available)
        super().__init__(f"Unknown output format {name!r}; expected one of {', '.join(self.available)}")
