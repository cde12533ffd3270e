"""
Sort ordering for SOLR queries.

Clauses are kept in the order they were attached; the first clause is the
primary sort key and later ones break ties.
"""

from enum import Enum
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict

from .params import SORT_KEY, Param, ParamBuilder


class SortDirection(str, Enum):
    """Sort direction for a single clause."""

    ASC = "asc"
    DESC = "desc"


class SortClause(BaseModel):
    """One ``<field> <direction>`` entry of the ``sort`` parameter."""

    model_config = ConfigDict(frozen=True)

    field: str
    direction: SortDirection = SortDirection.ASC

    def __str__(self) -> str:
        return f"{self.field} {self.direction.value}"


class SortOrderBuilder(ParamBuilder):
    """
    Builds the ``sort`` parameter.

    Example:
        >>> SortOrderBuilder().desc("score").asc("id").to_string()
        'score desc,id asc'
    """

    def __init__(self) -> None:
        self._clauses: List[SortClause] = []

    def asc(self, field: str) -> "SortOrderBuilder":
        self._clauses.append(SortClause(field=field, direction=SortDirection.ASC))
        return self

    def desc(self, field: str) -> "SortOrderBuilder":
        self._clauses.append(SortClause(field=field, direction=SortDirection.DESC))
        return self

    def add(self, clause: SortClause) -> "SortOrderBuilder":
        self._clauses.append(clause)
        return self

    @property
    def clauses(self) -> Tuple[SortClause, ...]:
        return tuple(self._clauses)

    def to_string(self) -> str:
        return ",".join(str(clause) for clause in self._clauses)

    def build(self) -> List[Param]:
        if not self._clauses:
            return []
        return [(SORT_KEY, self.to_string())]

    def __repr__(self) -> str:
        return f"SortOrderBuilder({self.to_string()!r})"
