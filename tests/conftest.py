import pytest
from fastapi.testclient import TestClient

from legal_clarity.core.dependencies import get_ai_service, get_speech_service
from legal_clarity.core.exceptions import ModelError
from legal_clarity.main import app
from legal_clarity.storage.managers import AnalysisHistoryStore, get_history_store

from tests.fakes import FakeAIService, FakeSpeechService, SteppingClock, bearer


@pytest.fixture
def fake_ai():
    return FakeAIService()


@pytest.fixture
def fake_speech():
    return FakeSpeechService()


@pytest.fixture
def memory_store():
    # no NoSQLManager: the store stays on the in-memory backend
    return AnalysisHistoryStore(clock=SteppingClock())


@pytest.fixture
def client(fake_ai, fake_speech, memory_store):
    async def _store():
        return memory_store

    app.dependency_overrides[get_ai_service] = lambda: fake_ai
    app.dependency_overrides[get_speech_service] = lambda: fake_speech
    app.dependency_overrides[get_history_store] = _store
    # not used as a context manager, so the lifespan (MongoDB connect) never runs
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return bearer("user-123")


@pytest.fixture
def model_error():
    return ModelError("upstream returned 500")
