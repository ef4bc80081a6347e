from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Pattern, Sequence, Union

from linkcollector.exceptions import FilterConfigError

StrOrMany = Union[str, Sequence[str], None]

# Wire (config file / JSON) key -> attribute name
_FIELD_KEYS = {
    "domain": "domain",
    "pathPrefix": "path_prefix",
    "path_prefix": "path_prefix",
    "regex": "regex",
    "keywords": "keywords",
}


def _as_tuple(name: str, value: StrOrMany) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,) if value else ()
    if not isinstance(value, (list, tuple)):
        raise FilterConfigError(f"{name} must be a string or a list of strings, got {type(value).__name__}")
    items = []
    for item in value:
        if not isinstance(item, str):
            raise FilterConfigError(f"{name} entries must be strings, got {item!r}")
        if item:
            items.append(item)
    return tuple(items)


@dataclass(frozen=True)
class FilterCondition:
    """One admission rule. Present fields are ANDed; values inside a field are ORed.

    A field left empty does not constrain the URL, so a condition without any
    field admits everything.
    """

    domain: tuple[str, ...] = ()
    path_prefix: tuple[str, ...] = ()
    regex: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()
    _patterns: tuple[Pattern[str], ...] = field(default=(), init=False, repr=False, compare=False)

    def __post_init__(self):
        for name in ("domain", "path_prefix", "regex", "keywords"):
            object.__setattr__(self, name, _as_tuple(name, getattr(self, name)))
        patterns = []
        for pattern in self.regex:
            try:
                patterns.append(re.compile(pattern))
            except re.error as e:
                raise FilterConfigError(f"Invalid regex {pattern!r}: {e}") from e
        object.__setattr__(self, "_patterns", tuple(patterns))

    @property
    def patterns(self) -> tuple[Pattern[str], ...]:
        return self._patterns

    def is_empty(self) -> bool:
        return not (self.domain or self.path_prefix or self.regex or self.keywords)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FilterCondition":
        if not isinstance(data, Mapping):
            raise FilterConfigError(f"Filter condition must be a mapping, got {type(data).__name__}")
        kwargs = {}
        for key, value in data.items():
            attr = _FIELD_KEYS.get(key)
            if attr is None:
                raise FilterConfigError(f"Unknown filter field {key!r}")
            kwargs[attr] = value
        return cls(**kwargs)

    def to_dict(self) -> dict:
        out = {}
        if self.domain:
            out["domain"] = list(self.domain)
        if self.path_prefix:
            out["pathPrefix"] = list(self.path_prefix)
        if self.regex:
            out["regex"] = list(self.regex)
        if self.keywords:
            out["keywords"] = list(self.keywords)
        return out


def parse_filter_conditions(raw: Optional[Iterable[Any]]) -> tuple[FilterCondition, ...]:
    """Build an ordered tuple of conditions from dicts or ready-made conditions.

    A single mapping is accepted as a one-element list.
    """
    if raw is None:
        return ()
    if isinstance(raw, (FilterCondition, Mapping)):
        raw = [raw]
    if isinstance(raw, str):
        raise FilterConfigError("Filter conditions must be a list of mappings, not a string")
    conditions = []
    for item in raw:
        if isinstance(item, FilterCondition):
            conditions.append(item)
        else:
            conditions.append(FilterCondition.from_dict(item))
    return tuple(conditions)
