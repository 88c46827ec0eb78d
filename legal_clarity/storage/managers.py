"""
Analysis history storage with MongoDB support and in-memory fallback.
"""
import uuid
import asyncio
import logging
import itertools
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

import pymongo

from ..core.exceptions import NotAuthorizedError, PersistenceError, RecordNotFoundError
from ..models import AnalysisHistoryItem, AnalysisRecord

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AnalysisHistoryStore:
    """
    Create, list and fetch AnalysisRecords.

    Records are written once and never updated. ``save`` never raises: the
    analysis has already been computed, so a failed write is logged and the
    caller gets ``None`` instead of an id.
    """

    def __init__(self, nosql_manager=None, clock: Callable[[], datetime] = _utcnow):
        self.nosql_manager = nosql_manager
        self._clock = clock
        self._initialized = False

        # in-memory fallback: id -> (insertion sequence, record)
        self._records: Dict[str, Tuple[int, AnalysisRecord]] = {}
        self._sequence = itertools.count()

    @property
    def mongodb_available(self) -> bool:
        return bool(self.nosql_manager and getattr(self.nosql_manager, 'mongodb_available', False))

    async def initialize(self):
        """Initialize NoSQL connections with error handling"""
        if self._initialized:
            return
        if self.nosql_manager is None:
            from .nosql_manager import NoSQLManager
            self.nosql_manager = NoSQLManager()
        try:
            await self.nosql_manager.initialize()
        except Exception as e:
            logger.warning(f"⚠️ NoSQL initialization failed: {e}")
        if not self.mongodb_available:
            logger.info("🔄 Continuing with in-memory analysis history")
        self._initialized = True

    async def close(self):
        if self.nosql_manager:
            await self.nosql_manager.close_connections()

    # === WRITE ===

    async def save(self, record: AnalysisRecord) -> Optional[str]:
        """Persist ``record`` with a server-assigned created_at; returns the new id or None on failure."""
        created_at = self._clock()
        try:
            if self.mongodb_available:
                from .nosql_models import AnalysisRecordDocument

                document = AnalysisRecordDocument.from_record(record, created_at)
                await document.insert()
                record_id = str(document.id)
            else:
                record_id = uuid.uuid4().hex
                stored = record.model_copy(update={"id": record_id, "created_at": created_at}, deep=True)
                self._records[record_id] = (next(self._sequence), stored)
        except Exception as e:
            logger.error(f"Analysis history save failed for owner {record.owner}: {e}")
            return None

        logger.info(f"Saved analysis {record_id} for owner {record.owner}")
        return record_id

    # === READ ===

    async def list_by_owner(self, owner: str) -> List[AnalysisHistoryItem]:
        """All records for ``owner``, newest first."""
        if self.mongodb_available:
            from .nosql_models import AnalysisRecordDocument

            try:
                documents = await AnalysisRecordDocument.find(
                    AnalysisRecordDocument.owner == owner
                ).sort([("created_at", pymongo.DESCENDING), ("_id", pymongo.DESCENDING)]).to_list()
            except Exception as e:
                logger.error(f"MongoDB history lookup failed: {e}")
                raise PersistenceError("Failed to fetch analysis history.") from e
            return [doc.to_history_item() for doc in documents]

        owned = [entry for entry in self._records.values() if entry[1].owner == owner]
        owned.sort(key=lambda entry: (entry[1].created_at, entry[0]), reverse=True)
        return [
            AnalysisHistoryItem(
                id=record.id,
                file_name=record.file_name,
                summary=record.summary,
                created_at=record.created_at,
                risk_count=len(record.detailed_risks),
            )
            for _, record in owned
        ]

    async def get_by_id(self, record_id: str, owner: str) -> AnalysisRecord:
        """
        Fetch one record, checking ownership.

        Raises:
            RecordNotFoundError: no record with this id.
            NotAuthorizedError: the record belongs to someone else.
        """
        if self.mongodb_available:
            record = await self._get_from_mongodb(record_id)
        else:
            entry = self._records.get(record_id)
            record = entry[1].model_copy(deep=True) if entry else None

        if record is None:
            raise RecordNotFoundError("Analysis not found.")
        if record.owner != owner:
            logger.warning(f"Owner mismatch reading analysis {record_id}")
            raise NotAuthorizedError("You are not authorized to view this analysis.")
        return record

    async def _get_from_mongodb(self, record_id: str) -> Optional[AnalysisRecord]:
        from beanie import PydanticObjectId
        from bson.errors import InvalidId
        from .nosql_models import AnalysisRecordDocument

        try:
            object_id = PydanticObjectId(record_id)
        except (InvalidId, TypeError):
            return None

        try:
            document = await AnalysisRecordDocument.get(object_id)
        except Exception as e:
            logger.error(f"MongoDB analysis lookup failed: {e}")
            raise PersistenceError("Failed to fetch analysis details.") from e
        return document.to_record() if document else None

    # === STATISTICS AND MONITORING ===

    async def get_system_stats(self) -> Dict[str, Any]:
        stats = {
            'timestamp': _utcnow().isoformat(),
            'storage_backend': 'mongodb' if self.mongodb_available else 'memory',
        }
        if self.mongodb_available:
            from .nosql_models import AnalysisRecordDocument
            try:
                stats['analysis_records'] = await AnalysisRecordDocument.find_all().count()
            except Exception as e:
                logger.error(f"MongoDB stats failed: {e}")
                stats['mongodb_error'] = str(e)
        else:
            stats['analysis_records'] = len(self._records)
        return stats


# Global storage reference
_history_store: Optional[AnalysisHistoryStore] = None
_history_store_lock = asyncio.Lock()


async def get_history_store() -> AnalysisHistoryStore:
    """Get or create the analysis history store; connects to MongoDB once."""
    global _history_store
    if _history_store is None:
        async with _history_store_lock:
            if _history_store is None:
                store = AnalysisHistoryStore()
                await store.initialize()
                _history_store = store
    return _history_store


async def close_history_store():
    global _history_store
    if _history_store is not None:
        await _history_store.close()
        _history_store = None
