"""
Allie Test Configuration

Shared fixtures and configuration for pytest.
"""

import sys
import itertools
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from google.cloud import firestore

# Add src to path so `import allie` works without an install
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from allie.core.config import OpenAIConfig  # noqa: E402
from allie.services.llm import LLMService  # noqa: E402
from allie.services.schedule import ScheduleService, ScheduleStore  # noqa: E402


# =============================================================================
# Fake Firestore
# =============================================================================

class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    def to_dict(self):
        return dict(self._data)


class FakeDocumentRef:
    def __init__(self, collection, doc_id):
        self._collection = collection
        self.id = doc_id

    def delete(self):
        self._collection.docs.pop(self.id, None)
        self._collection.deleted.append(self.id)


class FakeQuery:
    def __init__(self, collection, field, direction):
        self._collection = collection
        self._field = field
        self._direction = direction

    def stream(self):
        docs = sorted(
            self._collection.stream(),
            key=lambda s: s.to_dict()[self._field],
            reverse=self._direction == firestore.Query.DESCENDING,
        )
        return iter(docs)


class FakeCollection:
    """In-memory stand-in for a Firestore collection."""

    def __init__(self):
        self.docs = {}
        self.deleted = []
        self._ids = itertools.count(1)

    def add(self, data):
        doc_id = f"doc{next(self._ids)}"
        self.docs[doc_id] = dict(data)
        return None, FakeDocumentRef(self, doc_id)

    def document(self, doc_id):
        return FakeDocumentRef(self, doc_id)

    def order_by(self, field, direction=None):
        return FakeQuery(self, field, direction)

    def stream(self):
        return iter([FakeSnapshot(doc_id, data) for doc_id, data in self.docs.items()])


class FakeFirestoreClient:
    def __init__(self):
        self.collections = {}

    def collection(self, name):
        return self.collections.setdefault(name, FakeCollection())


@pytest.fixture
def firestore_client():
    return FakeFirestoreClient()


@pytest.fixture
def schedule_store(firestore_client):
    return ScheduleStore(lambda: firestore_client, collection="schedules")


@pytest.fixture
def schedule_service(schedule_store):
    return ScheduleService(schedule_store)


# =============================================================================
# Mock Fixtures
# =============================================================================

@pytest.fixture
def mock_openai_client():
    """Create a mock OpenAI client returning a fixed completion and transcript."""
    mock = MagicMock()
    mock.chat.completions.create.return_value = MagicMock(
        choices=[MagicMock(message=MagicMock(content="  Test response  "))]
    )
    mock.audio.transcriptions.create.return_value = MagicMock(text="hello world")
    return mock


@pytest.fixture
def llm_service(mock_openai_client):
    return LLMService(OpenAIConfig(api_key="test-key"), client=mock_openai_client)


# =============================================================================
# Sample Data Fixtures
# =============================================================================

def _make_game(status, away="Boston Celtics", away_score="101", home="New York Knicks", home_score="99",
               period=4, clock="2:31"):
    """One scoreboard event in the provider's shape."""
    return {
        "competitions": {
            "competitors": [
                {"homeAway": "home", "team": {"displayName": home}, "score": home_score},
                {"homeAway": "away", "team": {"displayName": away}, "score": away_score},
            ]
        },
        "status": {"type": {"name": status}, "period": period, "displayClock": clock},
    }


@pytest.fixture
def sample_weather_payload():
    return {
        "name": "Chicago",
        "sys": {"country": "US"},
        "weather": [{"main": "Clouds", "description": "broken clouds"}],
        "main": {"temp": 54.34, "humidity": 61},
        "wind": {"speed": 12.06},
    }


@pytest.fixture
def sample_timezone_payload():
    return {
        "date_time_txt": "Saturday, July 05, 2025 10:15:02",
        "timezone": "America/Chicago",
        "geo": {"city": "Chicago", "country_name": "United States"},
    }


@pytest.fixture
def make_game():
    return _make_game
