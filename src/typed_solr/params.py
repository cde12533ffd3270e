"""
Query parameter plumbing shared by every builder.

Builders emit flat ``(key, value)`` pairs. :func:`compose` merges the output of
any number of builders into one :class:`QueryParameterSet`:

- single-valued keys: the last builder to emit a key wins
- multi-valued keys (``fq``, ``bq``, ...): values are concatenated in
  builder order, keeping each builder's own emission order
- ``sort``: clauses from every builder are joined into one comma-separated value
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

import pysolr

from .dates import format_datetime

logger = logging.getLogger(__name__)

Param = Tuple[str, str]

SORT_KEY = "sort"

MULTI_VALUED_KEYS = frozenset(
    {
        "fq",
        "bq",
        "bf",
        "boost",
        "facet.field",
        "facet.range",
        "facet.query",
        "facet.pivot",
        "facet.interval",
        "facet.heatmap",
        "stats.field",
    }
)


def is_multi_valued(key: str) -> bool:
    """Return True if SOLR accepts ``key`` repeated in one request."""
    return key in MULTI_VALUED_KEYS


def to_param_value(value: Any) -> str:
    """Render a Python value the way SOLR expects it on the query string."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        return format_datetime(value)
    return str(value)


class ParamBuilder(ABC):
    """Anything that contributes parameters to a SOLR request."""

    @abstractmethod
    def build(self) -> List[Param]:
        """Emit this builder's parameters without modifying its state."""


class ParamsBuilder(ParamBuilder):
    """
    Base for builders that accumulate parameters through chained calls.

    Single-valued parameters are overwritten by later calls on the same
    builder; multi-valued parameters accumulate in call order.
    """

    def __init__(self) -> None:
        self._params: Dict[str, str] = {}
        self._multi_params: Dict[str, List[str]] = {}

    def _set(self, key: str, value: Any) -> None:
        self._params[key] = to_param_value(value)

    def _add(self, key: str, value: Any) -> None:
        self._multi_params.setdefault(key, []).append(to_param_value(value))

    def _put(self, key: str, value: Any) -> None:
        if is_multi_valued(key):
            self._add(key, value)
        else:
            self._set(key, value)

    def build(self) -> List[Param]:
        params = list(self._params.items())
        for key, values in self._multi_params.items():
            params.extend((key, value) for value in values)
        return params

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.build()!r})"


class QueryParameterSet(ParamBuilder):
    """
    Flattened, ordered SOLR parameters ready for URL encoding.

    A parameter set is itself a builder, so it can be composed again with
    further builders.
    """

    def __init__(self, pairs: Iterable[Param] = ()):
        self._pairs: List[Param] = [(str(key), str(value)) for key, value in pairs]

    def build(self) -> List[Param]:
        return list(self._pairs)

    def to_pairs(self) -> List[Param]:
        """Return the parameters as a list of ``(key, value)`` pairs."""
        return list(self._pairs)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the first value for ``key``."""
        for name, value in self._pairs:
            if name == key:
                return value
        return default

    def get_all(self, key: str) -> List[str]:
        """Return every value for ``key`` in order."""
        return [value for name, value in self._pairs if name == key]

    def keys(self) -> List[str]:
        """Return the distinct keys in first-appearance order."""
        return list(dict.fromkeys(name for name, _ in self._pairs))

    def to_dict(self) -> Dict[str, Union[str, List[str]]]:
        """
        Return a mapping with lists for multi-valued keys.

        This is the shape ``pysolr.Solr.search`` accepts as keyword arguments.
        """
        result: Dict[str, Union[str, List[str]]] = {}
        for key in self.keys():
            values = self.get_all(key)
            result[key] = values if is_multi_valued(key) else values[-1]
        return result

    def to_query_string(self) -> str:
        """URL-encode the parameters, repeating multi-valued keys."""
        return pysolr.safe_urlencode(self._pairs, True)

    def __iter__(self) -> Iterator[Param]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __contains__(self, key: object) -> bool:
        return any(name == key for name, _ in self._pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QueryParameterSet):
            return NotImplemented
        return self._pairs == other._pairs

    def __repr__(self) -> str:
        return f"QueryParameterSet({self._pairs!r})"


def compose(*builders: ParamBuilder) -> QueryParameterSet:
    """
    Merge the output of ``builders`` into a single parameter set.

    Builders are applied in the order given. A single-valued key keeps the
    position where it first appeared but takes the value of the last builder
    that emitted it. Parameter names are not checked against the schema;
    unknown keys pass through unchanged.
    """
    order: Dict[str, None] = {}
    single: Dict[str, str] = {}
    multi: Dict[str, List[str]] = {}

    for builder in builders:
        for key, value in builder.build():
            order.setdefault(key, None)
            if key == SORT_KEY or is_multi_valued(key):
                multi.setdefault(key, []).append(value)
            else:
                single[key] = value

    pairs: List[Param] = []
    for key in order:
        if key in single:
            pairs.append((key, single[key]))
        elif key == SORT_KEY:
            clauses = [clause for clause in multi[key] if clause]
            if clauses:
                pairs.append((key, ",".join(clauses)))
        else:
            pairs.extend((key, value) for value in multi[key])

    params = QueryParameterSet(pairs)
    logger.debug(f"Composed {len(builders)} builders into {len(params)} parameters")
    return params
