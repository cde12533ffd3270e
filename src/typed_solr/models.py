"""
Pydantic models for SOLR JSON responses.

Every model keeps fields it does not declare (``extra="allow"``) so that
sections added by newer SOLR versions or request handlers are not lost.
Optional response sections are ``None`` when SOLR did not send them, which is
distinct from a section that was sent but is empty.
"""

from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

D = TypeVar("D")


class SolrModel(BaseModel):
    """Base for all response models."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)


class ResponseHeader(SolrModel):
    """The ``responseHeader`` block."""

    status: int
    qtime: Optional[int] = Field(default=None, alias="QTime")
    params: Optional[Dict[str, Any]] = None


class ErrorInfo(SolrModel):
    """The ``error`` block SOLR returns alongside a failing status code."""

    code: int
    msg: str = ""
    metadata: List[str] = []


class FacetValue(BaseModel):
    """
    Represents a facet value and its count.

    ``value`` is None for the bucket of documents without a value
    (``facet.missing``).
    """

    value: Optional[str]
    count: int


def _facet_value(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def pair_counts(values: Any) -> Any:
    """
    Turn SOLR's flat ``[value, count, value, count, ...]`` list into pairs.

    Mappings (``json.nl=map``) and lists of pairs (``json.nl=arrarr``) are
    accepted as well. Anything else is passed through for pydantic to reject.
    """
    if isinstance(values, dict):
        return [
            {"value": _facet_value(key), "count": count} for key, count in values.items()
        ]
    if not isinstance(values, list) or all(isinstance(v, dict) for v in values):
        return values
    if all(isinstance(v, list) for v in values):
        if not all(len(v) == 2 for v in values):
            return values
        return [{"value": _facet_value(value), "count": count} for value, count in values]
    return [
        {"value": _facet_value(value), "count": count}
        for value, count in zip(values[::2], values[1::2])
    ]


class RangeFacetCounts(SolrModel):
    """Counts for one range facet. Bounds are left as SOLR sent them."""

    counts: List[FacetValue] = []
    start: Any = None
    end: Any = None
    gap: Any = None
    before: Optional[int] = None
    after: Optional[int] = None
    between: Optional[int] = None

    @field_validator("counts", mode="before")
    @classmethod
    def _pair_counts(cls, v: Any) -> Any:
        return pair_counts(v)


class FacetCounts(SolrModel):
    """The ``facet_counts`` block."""

    facet_queries: Dict[str, int] = {}
    facet_fields: Dict[str, List[FacetValue]] = {}
    facet_ranges: Dict[str, RangeFacetCounts] = {}
    facet_intervals: Dict[str, Any] = {}
    facet_heatmaps: Dict[str, Any] = {}

    @field_validator("facet_fields", mode="before")
    @classmethod
    def _pair_field_counts(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return {field: pair_counts(values) for field, values in v.items()}
        return v


class ResultBlock(SolrModel, Generic[D]):
    """The ``response`` block: hit count, offset and the documents themselves."""

    num_found: int = Field(alias="numFound")
    start: int = 0
    num_found_exact: Optional[bool] = Field(default=None, alias="numFoundExact")
    max_score: Optional[float] = Field(default=None, alias="maxScore")
    docs: List[D]


class SelectResponse(SolrModel, Generic[D]):
    """
    Decoded response of a ``/select`` request, generic over the document type.

    Use :func:`typed_solr.decoder.decode_select_response` to build one.
    """

    header: ResponseHeader = Field(alias="responseHeader")
    response: ResultBlock[D]
    facet_counts: Optional[FacetCounts] = None
    highlighting: Optional[Dict[str, Dict[str, List[str]]]] = None
    stats: Optional[Dict[str, Any]] = None
    debug: Optional[Dict[str, Any]] = None
    spellcheck: Optional[Dict[str, Any]] = None
    error: Optional[ErrorInfo] = None

    @property
    def docs(self) -> List[D]:
        return self.response.docs

    @property
    def num_found(self) -> int:
        return self.response.num_found

    def highlights_for(self, doc_id: Union[str, int]) -> Dict[str, List[str]]:
        """Return the highlighting snippets for one document, or an empty dict."""
        if self.highlighting is None:
            return {}
        return self.highlighting.get(str(doc_id), {})

    def facet_field(self, name: str) -> List[FacetValue]:
        """Return the counts of one field facet, or an empty list."""
        if self.facet_counts is None:
            return []
        return self.facet_counts.facet_fields.get(name, [])


class SimpleResponse(SolrModel):
    """Response of requests that only report a status, such as updates."""

    header: ResponseHeader = Field(alias="responseHeader")
    error: Optional[ErrorInfo] = None


class LuceneInfo(SolrModel):
    solr_spec_version: Optional[str] = Field(default=None, alias="solr-spec-version")
    solr_impl_version: Optional[str] = Field(default=None, alias="solr-impl-version")
    lucene_spec_version: Optional[str] = Field(
        default=None, alias="lucene-spec-version"
    )
    lucene_impl_version: Optional[str] = Field(
        default=None, alias="lucene-impl-version"
    )


class SystemInfo(SolrModel):
    """Response of ``/solr/admin/info/system``."""

    header: ResponseHeader = Field(alias="responseHeader")
    mode: Optional[str] = None
    solr_home: Optional[str] = None
    core_root: Optional[str] = None
    lucene: Optional[LuceneInfo] = None
    jvm: Optional[Dict[str, Any]] = None
    security: Optional[Dict[str, Any]] = None
    system: Optional[Dict[str, Any]] = None
    error: Optional[ErrorInfo] = None


class IndexInfo(SolrModel):
    num_docs: Optional[int] = Field(default=None, alias="numDocs")
    max_doc: Optional[int] = Field(default=None, alias="maxDoc")
    deleted_docs: Optional[int] = Field(default=None, alias="deletedDocs")
    version: Optional[int] = None
    segment_count: Optional[int] = Field(default=None, alias="segmentCount")
    current: Optional[bool] = None
    has_deletions: Optional[bool] = Field(default=None, alias="hasDeletions")
    directory: Optional[str] = None
    segments_file: Optional[str] = Field(default=None, alias="segmentsFile")
    segments_file_size_in_bytes: Optional[int] = Field(
        default=None, alias="segmentsFileSizeInBytes"
    )
    user_data: Optional[Dict[str, Any]] = Field(default=None, alias="userData")
    size_in_bytes: Optional[int] = Field(default=None, alias="sizeInBytes")
    size: Optional[str] = None


class CoreStatus(SolrModel):
    """Status of one core as reported by ``/solr/admin/cores``."""

    name: Optional[str] = None
    instance_dir: Optional[str] = Field(default=None, alias="instanceDir")
    data_dir: Optional[str] = Field(default=None, alias="dataDir")
    config_name: Optional[str] = Field(default=None, alias="config")
    schema_name: Optional[str] = Field(default=None, alias="schema")
    start_time: Optional[str] = Field(default=None, alias="startTime")
    uptime: Optional[int] = None
    index: Optional[IndexInfo] = None


class CoreList(SolrModel):
    """Response of ``/solr/admin/cores?action=STATUS``."""

    header: ResponseHeader = Field(alias="responseHeader")
    init_failures: Dict[str, Any] = Field(default={}, alias="initFailures")
    status: Optional[Dict[str, CoreStatus]] = None
    error: Optional[ErrorInfo] = None

    def names(self) -> List[str]:
        """Names of the cores SOLR reported, loaded or not."""
        return list(self.status or {})
