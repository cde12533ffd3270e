"""
typed-solr - a typed client for Apache SOLR's HTTP search API.

Queries are assembled from independent builders (query parser, common
parameters, sort, facets, highlighting) merged by :func:`compose`, sent
asynchronously through a pluggable transport, and decoded into the caller's
own document types.
"""

__version__ = "0.1.0"

from .builders import (
    CommonQueryBuilder,
    DisMaxQueryBuilder,
    EDisMaxQueryBuilder,
    StandardQueryBuilder,
)
from .config import Config, SOLRConfig, get_config
from .dates import SolrDateTime, format_datetime, parse_datetime
from .decoder import decode_response, decode_select_response
from .exceptions import (
    SOLRClientError,
    SOLRConfigurationError,
    SOLRDecodeError,
    SOLRTransportError,
)
from .facets import FacetBuilder, FieldFacet, RangeFacet
from .highlight import HighlightBuilder
from .models import (
    CoreList,
    CoreStatus,
    FacetValue,
    SelectResponse,
    SimpleResponse,
    SystemInfo,
)
from .operands import (
    BoostQueryOperand,
    ConstantQueryOperand,
    FuzzyQueryOperand,
    Operator,
    PhraseQueryOperand,
    ProximityQueryOperand,
    QueryExpression,
    QueryOperand,
    RangeQueryOperand,
    StandardQueryOperand,
    sanitize,
)
from .params import ParamBuilder, QueryParameterSet, compose
from .solr_client import SOLRClient, SOLRCore
from .sort import SortDirection, SortOrderBuilder
from .transport import HttpxTransport, Transport

__all__ = [
    "BoostQueryOperand",
    "CommonQueryBuilder",
    "Config",
    "ConstantQueryOperand",
    "CoreList",
    "CoreStatus",
    "DisMaxQueryBuilder",
    "EDisMaxQueryBuilder",
    "FacetBuilder",
    "FacetValue",
    "FieldFacet",
    "FuzzyQueryOperand",
    "HighlightBuilder",
    "HttpxTransport",
    "Operator",
    "ParamBuilder",
    "PhraseQueryOperand",
    "ProximityQueryOperand",
    "QueryExpression",
    "QueryOperand",
    "QueryParameterSet",
    "RangeFacet",
    "RangeQueryOperand",
    "SOLRClient",
    "SOLRClientError",
    "SOLRConfig",
    "SOLRConfigurationError",
    "SOLRCore",
    "SOLRDecodeError",
    "SOLRTransportError",
    "SelectResponse",
    "SimpleResponse",
    "SolrDateTime",
    "SortDirection",
    "SortOrderBuilder",
    "StandardQueryOperand",
    "SystemInfo",
    "Transport",
    "compose",
    "decode_response",
    "decode_select_response",
    "format_datetime",
    "get_config",
    "parse_datetime",
    "sanitize",
]
