"""
Query operands and boolean expressions for the SOLR standard query parser.

A :class:`QueryOperand` wraps a query fragment as is; the client never parses
it, so query syntax errors only surface as SOLR errors at request time. The
operand models (:class:`StandardQueryOperand`, :class:`RangeQueryOperand`, ...)
escape SOLR special characters in the values they are given.

Operands combine with ``+`` (OR) and ``*`` (AND)::

    q = StandardQueryOperand("title", "solr") + StandardQueryOperand("title", "lucene")
    str(q * QueryOperand("lang:en"))  # '(title:solr OR title:lucene) AND lang:en'
"""

import re
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, List, Optional, Union

from .dates import format_datetime

SOLR_SPECIAL_CHARACTERS = re.compile(
    r'(\+|-|&&|\|\||!|\(|\)|\{|\}|\[|\]|\^|"|~|\*|\?|:|/|AND|OR)'
)


def sanitize(text: str) -> str:
    """Escape SOLR special characters in ``text`` with a backslash."""
    return SOLR_SPECIAL_CHARACTERS.sub(r"\\\1", text)


class Operator(str, Enum):
    """Boolean operator joining query clauses; also the value of ``q.op``."""

    AND = "AND"
    OR = "OR"


class SolrQueryExpression:
    """Base class for anything that renders to a SOLR query string."""

    def __add__(self, other: Union["SolrQueryExpression", str]) -> "QueryExpression":
        return _combine(Operator.OR, self, _as_expression(other))

    def __mul__(self, other: Union["SolrQueryExpression", str]) -> "QueryExpression":
        return _combine(Operator.AND, self, _as_expression(other))

    def __str__(self) -> str:
        raise NotImplementedError


class QueryOperand(SolrQueryExpression):
    """An opaque query fragment, used verbatim."""

    def __init__(self, expr: Union[str, SolrQueryExpression]):
        self.expr = str(expr)

    def __str__(self) -> str:
        return self.expr

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SolrQueryExpression):
            return NotImplemented
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


class QueryExpression(SolrQueryExpression):
    """Several operands or sub-expressions joined by one operator."""

    def __init__(self, operator: Operator, operands: Iterable[SolrQueryExpression]):
        self.operator = operator
        self.operands: List[SolrQueryExpression] = list(operands)

    @classmethod
    def sum(cls, operands: Iterable[SolrQueryExpression]) -> "QueryExpression":
        """OR every operand together."""
        return cls(Operator.OR, operands)

    @classmethod
    def prod(cls, operands: Iterable[SolrQueryExpression]) -> "QueryExpression":
        """AND every operand together."""
        return cls(Operator.AND, operands)

    def __str__(self) -> str:
        parts = []
        for operand in self.operands:
            if isinstance(operand, QueryExpression):
                parts.append(f"({operand})")
            else:
                parts.append(str(operand))
        return f" {self.operator.value} ".join(parts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SolrQueryExpression):
            return NotImplemented
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))

    def __repr__(self) -> str:
        return f"QueryExpression({self.operator.value}, {self.operands!r})"


def _as_expression(value: Union[SolrQueryExpression, str]) -> SolrQueryExpression:
    if isinstance(value, SolrQueryExpression):
        return value
    return QueryOperand(value)


def _combine(
    operator: Operator, left: SolrQueryExpression, right: SolrQueryExpression
) -> QueryExpression:
    # Same-operator expressions are flattened; anything else nests.
    operands: List[SolrQueryExpression] = []
    for side in (left, right):
        if isinstance(side, QueryExpression) and side.operator == operator:
            operands.extend(side.operands)
        else:
            operands.append(side)
    return QueryExpression(operator, operands)


class StandardQueryOperand(QueryOperand):
    """``field:word`` with both sides escaped."""

    def __init__(self, field: str, word: str):
        super().__init__(f"{sanitize(field)}:{sanitize(word)}")


class PhraseQueryOperand(QueryOperand):
    """``field:"some phrase"`` with both sides escaped."""

    def __init__(self, field: str, word: str):
        super().__init__(f'{sanitize(field)}:"{sanitize(word)}"')


class BoostQueryOperand(QueryOperand):
    """``field:word^boost`` with field and word escaped."""

    def __init__(self, field: str, word: str, boost: float):
        super().__init__(f"{sanitize(field)}:{sanitize(word)}^{boost}")


class FuzzyQueryOperand(QueryOperand):
    """``field:word~distance``, matching terms within an edit distance."""

    def __init__(self, field: str, word: str, distance: int):
        super().__init__(f"{sanitize(field)}:{sanitize(word)}~{distance}")


class ProximityQueryOperand(QueryOperand):
    """``field:"some words"~slop``, words within ``slop`` positions of each other."""

    def __init__(self, field: str, words: str, slop: int):
        super().__init__(f'{sanitize(field)}:"{sanitize(words)}"~{slop}')


class ConstantQueryOperand(QueryOperand):
    """``field:word^=score``; matches get the constant score instead of a computed one."""

    def __init__(self, field: str, word: str, score: float):
        super().__init__(f"{sanitize(field)}:{sanitize(word)}^={score}")


class RangeQueryOperand(QueryOperand):
    """
    Range query on one field, ``field:[start TO end}``.

    Unset bounds render as ``*``. ``gt``/``lt`` make a side exclusive,
    ``ge``/``le`` inclusive. By default the lower side is inclusive and the
    upper side exclusive, as SOLR does for ``[* TO *}``.
    """

    def __init__(self, field: str):
        super().__init__(sanitize(field))
        self.field = sanitize(field)
        self.start: Optional[str] = None
        self.end: Optional[str] = None
        self.left_open = False
        self.right_open = True

    def gt(self, start: Any) -> "RangeQueryOperand":
        self.start = _format_bound(start)
        self.left_open = True
        return self

    def ge(self, start: Any) -> "RangeQueryOperand":
        self.start = _format_bound(start)
        self.left_open = False
        return self

    def lt(self, end: Any) -> "RangeQueryOperand":
        self.end = _format_bound(end)
        self.right_open = True
        return self

    def le(self, end: Any) -> "RangeQueryOperand":
        self.end = _format_bound(end)
        self.right_open = False
        return self

    def __str__(self) -> str:
        left = "{" if self.left_open else "["
        right = "}" if self.right_open else "]"
        start = self.start if self.start is not None else "*"
        end = self.end if self.end is not None else "*"
        return f"{self.field}:{left}{start} TO {end}{right}"


def _format_bound(value: Any) -> str:
    if isinstance(value, datetime):
        return format_datetime(value)
    return sanitize(str(value))
