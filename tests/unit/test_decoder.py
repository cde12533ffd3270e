"""
Unit tests for response models and decoding.
"""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

import pytest
from pydantic import BaseModel, ValidationError

from typed_solr.dates import SolrDateTime
from typed_solr.decoder import decode_response, decode_select_response
from typed_solr.exceptions import SOLRDecodeError
from typed_solr.models import (
    CoreList,
    FacetValue,
    SelectResponse,
    SimpleResponse,
    SystemInfo,
    pair_counts,
)


class Book(BaseModel):
    id: str
    title: str
    category: List[str]
    published: SolrDateTime
    score: Optional[float] = None


@dataclass
class BookRef:
    id: str
    title: str


class TestPairCounts:
    """Test cases for pairing SOLR's flat facet arrays."""

    def test_flat_list(self):
        assert pair_counts(["a", 2, "b", 1]) == [
            {"value": "a", "count": 2},
            {"value": "b", "count": 1},
        ]

    def test_mapping(self):
        assert pair_counts({"a": 2}) == [{"value": "a", "count": 2}]

    def test_non_string_values_are_stringified(self):
        assert pair_counts([2023, 4]) == [{"value": "2023", "count": 4}]

    def test_missing_bucket_is_none(self):
        """Test that the facet.missing bucket is not confused with a "None" term."""
        assert pair_counts(["a", 3, None, 2, "None", 1]) == [
            {"value": "a", "count": 3},
            {"value": None, "count": 2},
            {"value": "None", "count": 1},
        ]

    def test_list_of_pairs(self):
        assert pair_counts([["a", 3], ["b", 2], [None, 1]]) == [
            {"value": "a", "count": 3},
            {"value": "b", "count": 2},
            {"value": None, "count": 1},
        ]

    def test_empty(self):
        assert pair_counts([]) == []


class TestDecodeSelectResponse:
    """Test cases for decoding select responses."""

    def test_decode_as_model(self, mock_solr_body):
        """Test decoding documents into a pydantic model."""
        result = decode_select_response(mock_solr_body, Book)

        assert isinstance(result, SelectResponse)
        assert result.header.status == 0
        assert result.header.qtime == 15
        assert result.header.params == {"q": "test query", "wt": "json"}
        assert result.num_found == 2
        assert result.response.start == 0
        assert result.response.num_found_exact is True
        assert [doc.id for doc in result.docs] == ["doc1", "doc2"]
        assert all(isinstance(doc, Book) for doc in result.docs)
        assert result.docs[0].published == datetime(
            2023, 1, 31, 9, 30, tzinfo=timezone.utc
        )
        assert result.docs[0].score == 1.5

    def test_decode_as_dict_by_default(self, mock_solr_body, mock_solr_response):
        result = decode_select_response(mock_solr_body)

        assert result.docs == mock_solr_response["response"]["docs"]

    def test_decode_as_dataclass(self, mock_solr_body):
        result = decode_select_response(mock_solr_body, BookRef)

        assert result.docs[1] == BookRef(id="doc2", title="Test Document 2")

    def test_accepts_str_body(self, mock_solr_response):
        result = decode_select_response(json.dumps(mock_solr_response), Book)
        assert result.num_found == 2

    def test_facet_counts_are_paired(self, mock_solr_body):
        """Test that alternating value/count arrays become FacetValue lists."""
        result = decode_select_response(mock_solr_body)

        assert result.facet_field("category") == [
            FacetValue(value="books", count=5),
            FacetValue(value="articles", count=3),
            FacetValue(value="papers", count=1),
        ]
        assert result.facet_field("missing") == []

        price = result.facet_counts.facet_ranges["price"]
        assert price.counts == [
            FacetValue(value="0.0", count=4),
            FacetValue(value="20.0", count=2),
        ]
        assert price.gap == 20.0
        assert price.before is None

    def test_facet_missing_bucket(self, mock_solr_response):
        mock_solr_response["facet_counts"]["facet_fields"]["category"] = [
            "books", 5, None, 2
        ]

        result = decode_select_response(json.dumps(mock_solr_response))

        assert result.facet_field("category") == [
            FacetValue(value="books", count=5),
            FacetValue(value=None, count=2),
        ]

    def test_facet_counts_as_list_of_pairs(self, mock_solr_response):
        """Test facet counts sent with json.nl=arrarr."""
        mock_solr_response["facet_counts"]["facet_fields"]["category"] = [
            ["books", 5],
            ["articles", 3],
        ]

        result = decode_select_response(json.dumps(mock_solr_response))

        assert result.facet_field("category") == [
            FacetValue(value="books", count=5),
            FacetValue(value="articles", count=3),
        ]

    def test_highlighting(self, mock_solr_body):
        result = decode_select_response(mock_solr_body)

        assert result.highlights_for("doc1") == {
            "title": ["<mark>Test</mark> Document 1"]
        }
        assert result.highlights_for("doc2") == {}
        assert result.highlights_for("doc3") == {}

    def test_absent_sections_are_none(self):
        """Test that absent and empty sections are told apart."""
        body = json.dumps(
            {
                "responseHeader": {"status": 0, "QTime": 1},
                "response": {"numFound": 0, "start": 0, "docs": []},
                "facet_counts": {},
            }
        )

        result = decode_select_response(body, Book)

        assert result.docs == []
        assert result.highlighting is None
        assert result.stats is None
        assert result.debug is None
        assert result.spellcheck is None
        assert result.facet_counts is not None
        assert result.facet_counts.facet_fields == {}
        assert result.highlights_for("doc1") == {}
        assert result.facet_field("category") == []

    def test_loose_sections_are_kept(self, mock_solr_response):
        mock_solr_response["stats"] = {"stats_fields": {"price": {"min": 1.0}}}
        mock_solr_response["debug"] = {"rawquerystring": "test query"}
        mock_solr_response["expanded"] = {"group": {}}

        result = decode_select_response(json.dumps(mock_solr_response))

        assert result.stats == {"stats_fields": {"price": {"min": 1.0}}}
        assert result.debug["rawquerystring"] == "test query"
        assert result.model_extra["expanded"] == {"group": {}}

    def test_invalid_json(self):
        with pytest.raises(SOLRDecodeError) as exc_info:
            decode_select_response(b"<html>Bad Gateway</html>")

        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_missing_envelope(self):
        """Test that a body without a response block is rejected."""
        body = json.dumps({"responseHeader": {"status": 0}})

        with pytest.raises(SOLRDecodeError) as exc_info:
            decode_select_response(body)

        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_non_object_body(self):
        with pytest.raises(SOLRDecodeError):
            decode_select_response(b"[1, 2, 3]")

    def test_one_bad_document_fails_the_whole_decode(self, mock_solr_response):
        """Test that no partial document list is returned."""
        del mock_solr_response["response"]["docs"][1]["title"]

        with pytest.raises(SOLRDecodeError) as exc_info:
            decode_select_response(json.dumps(mock_solr_response), Book)

        assert "Book" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_wrong_document_type(self, mock_solr_body):
        with pytest.raises(SOLRDecodeError):
            decode_select_response(mock_solr_body, int)


class TestDecodeResponse:
    """Test cases for decoding administrative responses."""

    def test_core_list(self, mock_core_list):
        core_list = decode_response(json.dumps(mock_core_list), CoreList)

        assert core_list.names() == ["books", "articles"]
        books = core_list.status["books"]
        assert books.instance_dir == "/var/solr/data/books"
        assert books.config_name == "solrconfig.xml"
        assert books.schema_name == "managed-schema.xml"
        assert books.uptime == 120000
        assert books.index.num_docs == 42
        assert books.index.has_deletions is False
        assert books.index.user_data == {"commitTimeMSec": "1690891200000"}
        assert core_list.status["articles"].index is None

    def test_empty_core_list(self):
        core_list = decode_response(
            b'{"responseHeader": {"status": 0, "QTime": 0}}', CoreList
        )

        assert core_list.names() == []
        assert core_list.init_failures == {}

    def test_system_info(self):
        body = json.dumps(
            {
                "responseHeader": {"status": 0, "QTime": 20},
                "mode": "std",
                "solr_home": "/var/solr/data",
                "lucene": {
                    "solr-spec-version": "9.3.0",
                    "solr-impl-version": "9.3.0 abc - builder - 2023-07-20",
                    "lucene-spec-version": "9.7.0",
                    "lucene-impl-version": "9.7.0 def - builder - 2023-06-26",
                },
                "jvm": {"version": "17.0.8"},
            }
        )

        info = decode_response(body, SystemInfo)

        assert info.mode == "std"
        assert info.lucene.solr_spec_version == "9.3.0"
        assert info.lucene.lucene_spec_version == "9.7.0"
        assert info.jvm == {"version": "17.0.8"}
        assert info.error is None

    def test_error_block(self):
        body = json.dumps(
            {
                "responseHeader": {"status": 400, "QTime": 1},
                "error": {
                    "metadata": [
                        "error-class",
                        "org.apache.solr.common.SolrException",
                    ],
                    "msg": "undefined field foo",
                    "code": 400,
                },
            }
        )

        response = decode_response(body, SimpleResponse)

        assert response.header.status == 400
        assert response.error.code == 400
        assert response.error.msg == "undefined field foo"

    def test_invalid_admin_response(self):
        with pytest.raises(SOLRDecodeError) as exc_info:
            decode_response(b'{"status": {}}', CoreList)

        assert "CoreList" in str(exc_info.value)


class TestModels:
    """Test cases for response model behaviour."""

    def test_models_are_frozen(self, mock_solr_body):
        result = decode_select_response(mock_solr_body)

        with pytest.raises(ValidationError):
            result.header.status = 1

    def test_dump_by_alias_round_trips(self, mock_solr_body):
        result = decode_select_response(mock_solr_body, Book)
        dumped = result.model_dump(mode="json", by_alias=True)

        assert dumped["responseHeader"]["QTime"] == 15
        assert dumped["response"]["numFound"] == 2
        assert dumped["response"]["docs"][0]["published"] == "2023-01-31T09:30:00Z"


if __name__ == "__main__":
    pytest.main([__file__])
