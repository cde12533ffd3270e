"""
Decoding of raw SOLR response bodies into typed models.

Decoding is all or nothing: if the envelope or any single document fails to
validate, :class:`SOLRDecodeError` is raised and no partial result is
returned.
"""

import json
import logging
from typing import Any, Dict, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError
from pydantic.errors import PydanticSchemaGenerationError

from .exceptions import SOLRDecodeError
from .models import SelectResponse

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)
D = TypeVar("D")

Raw = Union[bytes, bytearray, str]


def load_json(raw: Raw) -> Any:
    """Parse a response body, raising SOLRDecodeError on malformed JSON."""
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, ValueError) as e:
        raise SOLRDecodeError(f"Invalid JSON in SOLR response: {e}") from e


def decode_response(raw: Raw, model: Type[M]) -> M:
    """
    Decode a response body into ``model``.

    Used for the administrative responses (:class:`~typed_solr.models.CoreList`,
    :class:`~typed_solr.models.SystemInfo`, ...).
    """
    data = load_json(raw)
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise SOLRDecodeError(
            f"Unexpected {model.__name__} response: {e.error_count()} errors"
        ) from e


def decode_select_response(
    raw: Raw, document_type: Type[D] = dict
) -> SelectResponse[D]:
    """
    Decode a ``/select`` response body, building every document as ``document_type``.

    ``document_type`` may be anything pydantic can validate: a model class, a
    dataclass, a TypedDict or plain ``dict``. The envelope is checked first
    so that a malformed response and a document that does not fit
    ``document_type`` are reported separately.

    Args:
        raw: Response body as returned by the transport
        document_type: Type each entry of ``response.docs`` is built as

    Returns:
        SelectResponse[document_type]

    Raises:
        SOLRDecodeError: If the body is not JSON, is missing required
            sections, or any document cannot be built
    """
    data = load_json(raw)

    try:
        SelectResponse[Dict[str, Any]].model_validate(data)
    except ValidationError as e:
        raise SOLRDecodeError(
            f"Malformed SOLR select response: {e.error_count()} errors"
        ) from e

    try:
        response_type = SelectResponse[document_type]  # type: ignore[valid-type]
        result = response_type.model_validate(data)
    except PydanticSchemaGenerationError as e:
        raise SOLRDecodeError(
            f"Cannot decode documents as {document_type!r}: {e}"
        ) from e
    except ValidationError as e:
        raise SOLRDecodeError(
            f"Failed to build {getattr(document_type, '__name__', document_type)} "
            f"documents: {e.error_count()} errors"
        ) from e

    logger.debug(
        f"Decoded {len(result.docs)} of {result.num_found} documents "
        f"as {getattr(document_type, '__name__', document_type)}"
    )
    return result
