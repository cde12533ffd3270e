"""
Faceting parameters.

:class:`FieldFacet` and :class:`RangeFacet` describe one facet each and emit
per-field ``f.<field>.facet.*`` overrides. :class:`FacetBuilder` collects any
number of them, plus facet queries and global defaults, and switches
``facet=true`` on.

See https://solr.apache.org/guide/solr/latest/query-guide/faceting.html
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Union

from .operands import SolrQueryExpression
from .params import Param, ParamsBuilder, to_param_value


class FieldFacetSort(str, Enum):
    INDEX = "index"
    COUNT = "count"


class FieldFacetMethod(str, Enum):
    ENUM = "enum"
    FC = "fc"
    FCS = "fcs"


class RangeFacetOther(str, Enum):
    BEFORE = "before"
    AFTER = "after"
    BETWEEN = "between"
    ALL = "all"
    NONE = "none"


class RangeFacetInclude(str, Enum):
    LOWER = "lower"
    UPPER = "upper"
    EDGE = "edge"
    OUTER = "outer"
    ALL = "all"


class FacetSpec(ABC):
    """A single facet request."""

    @abstractmethod
    def build(self) -> List[Param]:
        """Emit the parameters describing this facet."""


class FieldFacet(FacetSpec):
    """Field value faceting on one field."""

    _OPTION_ORDER = (
        "prefix",
        "contains",
        "contains.ignoreCase",
        "sort",
        "limit",
        "offset",
        "mincount",
        "missing",
        "method",
        "exists",
    )

    def __init__(self, field: str):
        self.field = field
        self._options: Dict[str, Any] = {}

    def prefix(self, prefix: str) -> "FieldFacet":
        self._options["prefix"] = prefix
        return self

    def contains(self, contains: str) -> "FieldFacet":
        self._options["contains"] = contains
        return self

    def ignore_case(self, ignore_case: bool) -> "FieldFacet":
        self._options["contains.ignoreCase"] = ignore_case
        return self

    def sort(self, sort: FieldFacetSort) -> "FieldFacet":
        self._options["sort"] = sort
        return self

    def limit(self, limit: int) -> "FieldFacet":
        self._options["limit"] = limit
        return self

    def offset(self, offset: int) -> "FieldFacet":
        self._options["offset"] = offset
        return self

    def min_count(self, min_count: int) -> "FieldFacet":
        self._options["mincount"] = min_count
        return self

    def missing(self, missing: bool) -> "FieldFacet":
        self._options["missing"] = missing
        return self

    def method(self, method: FieldFacetMethod) -> "FieldFacet":
        self._options["method"] = method
        return self

    def exists(self, exists: bool) -> "FieldFacet":
        self._options["exists"] = exists
        return self

    def build(self) -> List[Param]:
        params = [("facet.field", self.field)]
        params.extend(
            (f"f.{self.field}.facet.{name}", to_param_value(self._options[name]))
            for name in self._OPTION_ORDER
            if name in self._options
        )
        return params


class RangeFacet(FacetSpec):
    """
    Range faceting on one numeric or date field.

    ``start`` and ``end`` may be numbers, strings (including date math such
    as ``NOW-1YEAR``) or datetimes; ``gap`` is a number or a date math string
    such as ``+1MONTH``.
    """

    def __init__(self, field: str, start: Any, end: Any, gap: Any):
        self.field = field
        self.start = start
        self.end = end
        self.gap = gap
        self._options: Dict[str, Any] = {}

    def hardend(self, hardend: bool) -> "RangeFacet":
        self._options["hardend"] = hardend
        return self

    def other(self, other: RangeFacetOther) -> "RangeFacet":
        self._options["other"] = other
        return self

    def include(self, include: RangeFacetInclude) -> "RangeFacet":
        self._options["include"] = include
        return self

    def build(self) -> List[Param]:
        prefix = f"f.{self.field}.facet.range"
        params = [
            ("facet.range", self.field),
            (f"{prefix}.start", to_param_value(self.start)),
            (f"{prefix}.end", to_param_value(self.end)),
            (f"{prefix}.gap", to_param_value(self.gap)),
        ]
        params.extend(
            (f"{prefix}.{name}", to_param_value(self._options[name]))
            for name in ("hardend", "other", "include")
            if name in self._options
        )
        return params


class FacetBuilder(ParamsBuilder):
    """
    Collects facet requests for one query.

    Example:
        >>> facets = (
        ...     FacetBuilder()
        ...     .field(FieldFacet("category").min_count(1))
        ...     .range(RangeFacet("price", 0, 100, 20))
        ...     .mincount(1)
        ... )
    """

    def field(self, facet: Union[FieldFacet, str]) -> "FacetBuilder":
        if isinstance(facet, str):
            facet = FieldFacet(facet)
        return self._attach(facet)

    def range(self, facet: RangeFacet) -> "FacetBuilder":
        return self._attach(facet)

    def query(self, query: Union[SolrQueryExpression, str]) -> "FacetBuilder":
        self._set("facet", True)
        self._add("facet.query", query)
        return self

    def limit(self, limit: int) -> "FacetBuilder":
        """Default ``facet.limit`` for every field facet."""
        self._set("facet.limit", limit)
        return self

    def mincount(self, mincount: int) -> "FacetBuilder":
        """Default ``facet.mincount`` for every field facet."""
        self._set("facet.mincount", mincount)
        return self

    def sort(self, sort: FieldFacetSort) -> "FacetBuilder":
        """Default ``facet.sort`` for every field facet."""
        self._set("facet.sort", sort)
        return self

    def missing(self, missing: bool) -> "FacetBuilder":
        """Default ``facet.missing`` for every field facet."""
        self._set("facet.missing", missing)
        return self

    def _attach(self, facet: FacetSpec) -> "FacetBuilder":
        self._set("facet", True)
        for key, value in facet.build():
            self._put(key, value)
        return self
