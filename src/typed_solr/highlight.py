"""
Highlighting parameters.

Snippets come back in the ``highlighting`` section of the response, keyed by
document id.
"""

from enum import Enum
from typing import Union

from .operands import SolrQueryExpression
from .params import ParamsBuilder


class HighlightMethod(str, Enum):
    UNIFIED = "unified"
    ORIGINAL = "original"
    FAST_VECTOR = "fastVector"


class HighlightBuilder(ParamsBuilder):
    """
    Builds ``hl.*`` parameters; attaching one turns highlighting on.

    Example:
        >>> HighlightBuilder().fields("title", "content").pre("<mark>").post("</mark>")
    """

    def __init__(self) -> None:
        super().__init__()
        self._set("hl", True)

    def fields(self, *fields: str) -> "HighlightBuilder":
        self._set("hl.fl", ",".join(fields))
        return self

    def pre(self, tag: str) -> "HighlightBuilder":
        self._set("hl.simple.pre", tag)
        return self

    def post(self, tag: str) -> "HighlightBuilder":
        self._set("hl.simple.post", tag)
        return self

    def snippets(self, count: int) -> "HighlightBuilder":
        self._set("hl.snippets", count)
        return self

    def fragsize(self, size: int) -> "HighlightBuilder":
        self._set("hl.fragsize", size)
        return self

    def method(self, method: HighlightMethod) -> "HighlightBuilder":
        self._set("hl.method", method)
        return self

    def require_field_match(self, flag: bool) -> "HighlightBuilder":
        self._set("hl.requireFieldMatch", flag)
        return self

    def highlight_query(
        self, query: Union[SolrQueryExpression, str]
    ) -> "HighlightBuilder":
        """Highlight terms from ``query`` instead of the main query (``hl.q``)."""
        self._set("hl.q", query)
        return self
