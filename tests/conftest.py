"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import Any, Dict, List, Optional
from unittest.mock import patch

from smartsummary.errors import NetworkError
from smartsummary.logger import get_logger, reset_logger


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path):
    """Keep log files out of the working tree and metrics per-test."""
    reset_logger()
    logger = get_logger(log_dir=tmp_path / "logs", enable_console=False)
    yield logger
    reset_logger()


class FakeUpstream:
    """Stand-in for ``fetch_json`` that answers by URL and records calls.

    The most recently added matching route wins.
    """

    def __init__(self):
        self.routes: List[tuple] = []
        self.calls: List[Dict[str, Any]] = []

    def add(self, match: str, payload: Any = None, error: Optional[Exception] = None, action: Optional[str] = None):
        self.routes.append((match, action, payload, error))
        return self

    def __call__(self, url: str, params: Optional[Dict[str, Any]] = None, source: str = "wikidata"):
        params = params or {}
        self.calls.append({"url": url, "params": params, "source": source})
        for match, action, payload, error in reversed(self.routes):
            if match in url and (action is None or params.get("action") == action):
                if error is not None:
                    raise error
                return payload
        raise NetworkError(url, "no fake route")

    def calls_for(self, action: str) -> List[Dict[str, Any]]:
        return [c for c in self.calls if c["params"].get("action") == action]


@pytest.fixture
def upstream():
    """Patch every module-level ``fetch_json`` import with one FakeUpstream."""
    fake = FakeUpstream()
    with patch("smartsummary.resolver.fetch_json", fake), \
            patch("smartsummary.labels.fetch_json", fake), \
            patch("smartsummary.article.fetch_json", fake):
        yield fake


def _claim(value: Any) -> Dict[str, Any]:
    return {"mainsnak": {"datavalue": {"value": value}}}


@pytest.fixture
def search_payload() -> Dict[str, Any]:
    """wbsearchentities response for 'einstein'."""
    return {
        "search": [
            {"id": "Q937", "label": "Albert Einstein", "description": "German-born theoretical physicist"},
            {"id": "Q1309151", "label": "Einstein", "description": "family name"},
        ]
    }


@pytest.fixture
def entity_payload() -> Dict[str, Any]:
    """Special:EntityData response for Q937, trimmed."""
    return {
        "entities": {
            "Q937": {
                "id": "Q937",
                "labels": {
                    "en": {"language": "en", "value": "Albert Einstein"},
                    "fr": {"language": "fr", "value": "Albert Einstein"},
                },
                "descriptions": {
                    "en": {"language": "en", "value": "German-born theoretical physicist (1879–1955)"},
                    "fr": {"language": "fr", "value": "physicien théoricien"},
                },
                "claims": {
                    "P569": [_claim({"time": "+1879-03-14T00:00:00Z", "precision": 11})],
                    "P570": [_claim({"time": "+1955-04-18T00:00:00Z", "precision": 11})],
                    "P106": [
                        _claim({"entity-type": "item", "id": "Q169470"}),
                        _claim({"entity-type": "item", "id": "Q19350898"}),
                    ],
                    "P18": [_claim("Einstein 1921 by F Schmutzer - restoration.jpg")],
                },
                "sitelinks": {
                    "enwiki": {"site": "enwiki", "title": "Albert Einstein"},
                    "frwiki": {"site": "frwiki", "title": "Albert Einstein"},
                },
            }
        }
    }


@pytest.fixture
def labels_payload() -> Dict[str, Any]:
    """wbgetentities response for the occupation ids."""
    return {
        "entities": {
            "Q169470": {"labels": {"en": {"value": "physicist"}, "fr": {"value": "physicien"}}},
            "Q19350898": {"labels": {"en": {"value": "theoretical physicist"}}},
        }
    }


@pytest.fixture
def page_summary_payload() -> Dict[str, Any]:
    """Wikipedia REST page summary response."""
    return {
        "title": "Albert Einstein",
        "extract": "Albert Einstein was a German-born theoretical physicist.\n\nHe developed the theory of relativity.",
        "thumbnail": {"source": "https://upload.wikimedia.org/einstein_thumb.jpg", "width": 320},
    }


@pytest.fixture
def einstein_upstream(upstream, search_payload, entity_payload, labels_payload, page_summary_payload):
    """FakeUpstream wired with a complete, successful Einstein lookup."""
    upstream.add("wikidata.org/w/api.php", search_payload, action="wbsearchentities")
    upstream.add("wikidata.org/w/api.php", labels_payload, action="wbgetentities")
    upstream.add("Special:EntityData/Q937.json", entity_payload)
    upstream.add("/api/rest_v1/page/summary/", page_summary_payload)
    return upstream
