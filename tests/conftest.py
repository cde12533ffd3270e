"""
Pytest configuration and fixtures for typed-solr tests.
"""

import json
import os
import tempfile
from pathlib import Path

import pytest

from typed_solr.config import Config, SOLRConfig


@pytest.fixture
def temp_env_file():
    """Create a temporary .env file for testing."""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".env", delete=False) as f:
        env_content = """
SOLR_BASE_URL=https://solr.example.com/
SOLR_PORT=8984
SOLR_CORE=test_core
SOLR_USERNAME=test_user
SOLR_PASSWORD=test_pass
SOLR_TIMEOUT=15
SOLR_VERIFY_SSL=false
SOLR_DEFAULT_ROWS=25
LOG_LEVEL=debug
        """
        f.write(env_content.strip())
        temp_file = f.name

    yield Path(temp_file)

    # Cleanup
    os.unlink(temp_file)


@pytest.fixture
def test_config():
    """Provide a test configuration."""
    solr_config = SOLRConfig(
        base_url="http://localhost",
        port=8983,
        core="test_core",
        username="test_user",
        password="test_pass",
        timeout=30,
        verify_ssl=False,
    )

    return Config(solr=solr_config, log_level="INFO")


@pytest.fixture
def mock_solr_response():
    """Mock SOLR select response data for testing."""
    return {
        "responseHeader": {
            "status": 0,
            "QTime": 15,
            "params": {"q": "test query", "wt": "json"},
        },
        "response": {
            "numFound": 2,
            "start": 0,
            "numFoundExact": True,
            "docs": [
                {
                    "id": "doc1",
                    "score": 1.5,
                    "title": "Test Document 1",
                    "category": ["books"],
                    "published": "2023-01-31T09:30:00Z",
                },
                {
                    "id": "doc2",
                    "score": 1.2,
                    "title": "Test Document 2",
                    "category": ["articles"],
                    "published": "2022-06-01T00:00:00Z",
                },
            ],
        },
        "facet_counts": {
            "facet_queries": {},
            "facet_fields": {
                "category": ["books", 5, "articles", 3, "papers", 1],
            },
            "facet_ranges": {
                "price": {
                    "counts": ["0.0", 4, "20.0", 2],
                    "gap": 20.0,
                    "start": 0.0,
                    "end": 40.0,
                }
            },
            "facet_intervals": {},
            "facet_heatmaps": {},
        },
        "highlighting": {
            "doc1": {"title": ["<mark>Test</mark> Document 1"]},
            "doc2": {},
        },
    }


@pytest.fixture
def mock_solr_body(mock_solr_response):
    """The mock select response as raw bytes, as a transport returns it."""
    return json.dumps(mock_solr_response).encode("utf-8")


@pytest.fixture
def mock_core_list():
    """Mock response of /solr/admin/cores?action=STATUS."""
    return {
        "responseHeader": {"status": 0, "QTime": 3},
        "initFailures": {},
        "status": {
            "books": {
                "name": "books",
                "instanceDir": "/var/solr/data/books",
                "dataDir": "/var/solr/data/books/data/",
                "config": "solrconfig.xml",
                "schema": "managed-schema.xml",
                "startTime": "2023-08-01T12:00:00.000Z",
                "uptime": 120000,
                "index": {
                    "numDocs": 42,
                    "maxDoc": 42,
                    "deletedDocs": 0,
                    "version": 17,
                    "segmentCount": 1,
                    "current": True,
                    "hasDeletions": False,
                    "directory": "org.apache.lucene.store.NRTCachingDirectory",
                    "segmentsFile": "segments_3",
                    "segmentsFileSizeInBytes": 230,
                    "userData": {"commitTimeMSec": "1690891200000"},
                    "sizeInBytes": 10240,
                    "size": "10 KB",
                },
            },
            "articles": {"name": "articles"},
        },
    }


@pytest.fixture(autouse=True)
def clean_env_vars():
    """Clean up environment variables before and after each test."""
    # Store original environment variables
    original_env = {}
    env_vars_to_clean = [
        "SOLR_BASE_URL",
        "SOLR_PORT",
        "SOLR_CORE",
        "SOLR_USERNAME",
        "SOLR_PASSWORD",
        "SOLR_TIMEOUT",
        "SOLR_VERIFY_SSL",
        "SOLR_DEFAULT_ROWS",
        "LOG_LEVEL",
    ]

    for var in env_vars_to_clean:
        if var in os.environ:
            original_env[var] = os.environ[var]
        os.environ.pop(var, None)

    yield

    # Restore original environment variables
    for var in env_vars_to_clean:
        os.environ.pop(var, None)

    for var, value in original_env.items():
        os.environ[var] = value
