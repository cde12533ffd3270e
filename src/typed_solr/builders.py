"""
Builders for SOLR's common and query-parser parameters.

Each builder covers one family of parameters and is composed with the others
(sort, facets, highlighting) through :func:`typed_solr.params.compose`::

    params = compose(
        StandardQueryBuilder().q(StandardQueryOperand("title", "solr")),
        CommonQueryBuilder().fq("lang:en").rows(20),
        SortOrderBuilder().desc("score"),
    )

Builder methods record values without checking query syntax; SOLR reports
malformed queries when the request runs.
"""

from typing import Any, List, Union

from .operands import Operator, SolrQueryExpression, sanitize
from .params import ParamsBuilder

Expression = Union[SolrQueryExpression, str]


class CommonQueryBuilder(ParamsBuilder):
    """
    Parameters understood by every SOLR query parser.

    See https://solr.apache.org/guide/solr/latest/query-guide/common-query-parameters.html
    """

    def start(self, start: int) -> "CommonQueryBuilder":
        self._set("start", start)
        return self

    def rows(self, rows: int) -> "CommonQueryBuilder":
        self._set("rows", rows)
        return self

    def fq(self, fq: Expression) -> "CommonQueryBuilder":
        """Add a filter query; repeated calls add repeated ``fq`` parameters."""
        self._add("fq", fq)
        return self

    def fl(self, fl: Union[str, List[str]]) -> "CommonQueryBuilder":
        if not isinstance(fl, str):
            fl = ",".join(fl)
        self._set("fl", fl)
        return self

    def debug(self) -> "CommonQueryBuilder":
        """Request full, structured debug output."""
        self._set("debug", "all")
        self._set("debug.explain.structured", True)
        return self

    def wt(self, wt: str) -> "CommonQueryBuilder":
        self._set("wt", wt)
        return self

    def op(self, op: Operator) -> "CommonQueryBuilder":
        self._set("q.op", op)
        return self

    def timeallowed(self, milliseconds: int) -> "CommonQueryBuilder":
        self._set("timeAllowed", milliseconds)
        return self

    def param(self, key: str, value: Any) -> "CommonQueryBuilder":
        """Pass any other parameter through unchanged."""
        self._put(key, value)
        return self


class StandardQueryBuilder(ParamsBuilder):
    """
    Parameters for the standard (lucene) query parser.

    See https://solr.apache.org/guide/solr/latest/query-guide/standard-query-parser.html
    """

    def q(self, q: Expression) -> "StandardQueryBuilder":
        self._set("q", q)
        return self

    def df(self, df: str) -> "StandardQueryBuilder":
        self._set("df", df)
        return self

    def sow(self, sow: bool) -> "StandardQueryBuilder":
        self._set("sow", sow)
        return self

    def op(self, op: Operator) -> "StandardQueryBuilder":
        self._set("q.op", op)
        return self


class DisMaxQueryBuilder(ParamsBuilder):
    """
    Parameters for the DisMax query parser.

    ``q`` is plain user input here, so SOLR special characters in it are
    escaped.

    See https://solr.apache.org/guide/solr/latest/query-guide/dismax-query-parser.html
    """

    DEF_TYPE = "dismax"

    def __init__(self) -> None:
        super().__init__()
        self._set("defType", self.DEF_TYPE)

    def q(self, q: str) -> "DisMaxQueryBuilder":
        self._set("q", sanitize(q))
        return self

    def qf(self, qf: str) -> "DisMaxQueryBuilder":
        self._set("qf", qf)
        return self

    def qs(self, qs: int) -> "DisMaxQueryBuilder":
        self._set("qs", qs)
        return self

    def pf(self, pf: str) -> "DisMaxQueryBuilder":
        self._set("pf", pf)
        return self

    def ps(self, ps: int) -> "DisMaxQueryBuilder":
        self._set("ps", ps)
        return self

    def mm(self, mm: str) -> "DisMaxQueryBuilder":
        self._set("mm", mm)
        return self

    def q_alt(self, q: Expression) -> "DisMaxQueryBuilder":
        self._set("q.alt", q)
        return self

    def tie(self, tie: float) -> "DisMaxQueryBuilder":
        self._set("tie", tie)
        return self

    def bq(self, bq: Expression) -> "DisMaxQueryBuilder":
        """Add a boost query; repeated calls add repeated ``bq`` parameters."""
        self._add("bq", bq)
        return self

    def bf(self, bf: str) -> "DisMaxQueryBuilder":
        """Add a boost function; repeated calls add repeated ``bf`` parameters."""
        self._add("bf", bf)
        return self

    def op(self, op: Operator) -> "DisMaxQueryBuilder":
        self._set("q.op", op)
        return self


class EDisMaxQueryBuilder(DisMaxQueryBuilder):
    """
    Parameters for the Extended DisMax query parser.

    See https://solr.apache.org/guide/solr/latest/query-guide/edismax-query-parser.html
    """

    DEF_TYPE = "edismax"

    def sow(self, sow: bool) -> "EDisMaxQueryBuilder":
        self._set("sow", sow)
        return self

    def boost(self, boost: str) -> "EDisMaxQueryBuilder":
        self._add("boost", boost)
        return self

    def lowercase_operators(self, flag: bool) -> "EDisMaxQueryBuilder":
        self._set("lowercaseOperators", flag)
        return self

    def pf2(self, pf: str) -> "EDisMaxQueryBuilder":
        self._set("pf2", pf)
        return self

    def ps2(self, ps: int) -> "EDisMaxQueryBuilder":
        self._set("ps2", ps)
        return self

    def pf3(self, pf: str) -> "EDisMaxQueryBuilder":
        self._set("pf3", pf)
        return self

    def ps3(self, ps: int) -> "EDisMaxQueryBuilder":
        self._set("ps3", ps)
        return self

    def stopwords(self, flag: bool) -> "EDisMaxQueryBuilder":
        self._set("stopwords", flag)
        return self

    def uf(self, uf: str) -> "EDisMaxQueryBuilder":
        self._set("uf", uf)
        return self
