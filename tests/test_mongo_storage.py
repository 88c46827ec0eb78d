import asyncio

import pytest
from beanie import init_beanie
from mongomock_motor import AsyncMongoMockClient

from legal_clarity.core.exceptions import NotAuthorizedError, PersistenceError, RecordNotFoundError
from legal_clarity.models import AnalysisRecord, DetailedRisk, RiskLevel
from legal_clarity.storage.managers import AnalysisHistoryStore
from legal_clarity.storage.nosql_models import AnalysisRecordDocument

from tests.fakes import SteppingClock


class MockNoSQLManager:
    """A connected NoSQLManager backed by mongomock."""

    def __init__(self):
        self.mongodb_client = AsyncMongoMockClient()
        self.mongodb_available = False

    async def initialize(self):
        await init_beanie(database=self.mongodb_client["legal_clarity_test"],
                          document_models=[AnalysisRecordDocument])
        self.mongodb_available = True
        return {'mongodb_available': True, 'fallback_mode': False}

    async def close_connections(self):
        self.mongodb_available = False


async def _mongo_store():
    store = AnalysisHistoryStore(nosql_manager=MockNoSQLManager(), clock=SteppingClock())
    await store.initialize()
    return store


def _record(owner="alice", file_name="lease.pdf", risks=()):
    return AnalysisRecord(
        owner=owner,
        file_name=file_name,
        document_text="This Lease Agreement is made between Landlord and Tenant.",
        summary=f"Summary of {file_name}",
        risk_assessment="R",
        key_clauses="K",
        compliance_analysis="C",
        detailed_risks=list(risks),
    )


def test_mongodb_round_trip_preserves_the_record():
    risk = DetailedRisk(clause="No refunds.", risk_level=RiskLevel.MEDIUM,
                        explanation="One-sided.", compliance_issues="Consumer law")
    record = _record(risks=[risk])

    async def scenario():
        store = await _mongo_store()
        record_id = await store.save(record)
        return store, record_id, await store.get_by_id(record_id, "alice")

    store, record_id, fetched = asyncio.run(scenario())

    assert store.mongodb_available
    assert record_id
    assert fetched.id == record_id
    assert fetched.created_at is not None
    assert fetched.model_dump(exclude={"id", "created_at"}) == record.model_dump(exclude={"id", "created_at"})


def test_mongodb_history_is_newest_first_and_scoped_to_owner():
    async def scenario():
        store = await _mongo_store()
        first = await store.save(_record(file_name="first.pdf"))
        await store.save(_record(owner="bob", file_name="bob.pdf"))
        second = await store.save(_record(file_name="second.pdf", risks=[
            DetailedRisk(clause="c", risk_level=RiskLevel.HIGH, explanation="e")
        ]))
        return first, second, await store.list_by_owner("alice")

    first, second, history = asyncio.run(scenario())

    assert [item.id for item in history] == [second, first]
    assert [item.risk_count for item in history] == [1, 0]
    assert history[0].summary == "Summary of second.pdf"


def test_mongodb_ties_on_created_at_fall_back_to_newest_id():
    async def scenario():
        store = await _mongo_store()
        moment = store._clock()
        store._clock = lambda: moment
        older = await store.save(_record(file_name="older.pdf"))
        newer = await store.save(_record(file_name="newer.pdf"))
        return older, newer, await store.list_by_owner("alice")

    older, newer, history = asyncio.run(scenario())

    assert [item.id for item in history] == [newer, older]


def test_mongodb_get_checks_ownership_and_existence():
    async def scenario():
        store = await _mongo_store()
        record_id = await store.save(_record())
        outcomes = {}
        for label, (lookup_id, owner) in {
            "foreign": (record_id, "mallory"),
            "malformed": ("nope", "alice"),
            "unknown": ("0123456789abcdef01234567", "alice"),
        }.items():
            try:
                await store.get_by_id(lookup_id, owner)
            except Exception as e:
                outcomes[label] = e
        return outcomes

    outcomes = asyncio.run(scenario())

    assert isinstance(outcomes["foreign"], NotAuthorizedError)
    assert isinstance(outcomes["malformed"], RecordNotFoundError)
    assert isinstance(outcomes["unknown"], RecordNotFoundError)


def test_mongodb_read_failure_is_persistence_error(monkeypatch):
    def broken_find(*args, **kwargs):
        raise RuntimeError("connection reset")

    async def scenario():
        store = await _mongo_store()
        monkeypatch.setattr(AnalysisRecordDocument, "find", broken_find)
        await store.list_by_owner("alice")

    with pytest.raises(PersistenceError, match="Failed to fetch analysis history."):
        asyncio.run(scenario())


def test_mongodb_write_failure_returns_none(monkeypatch):
    async def broken_insert(self, *args, **kwargs):
        raise RuntimeError("not primary")

    async def scenario():
        store = await _mongo_store()
        monkeypatch.setattr(AnalysisRecordDocument, "insert", broken_insert)
        return await store.save(_record())

    assert asyncio.run(scenario()) is None
