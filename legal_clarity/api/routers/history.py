"""Analysis history endpoints"""
import logging
from typing import List

from fastapi import APIRouter, Depends

from ...core.security import get_current_user
from ...models import AnalysisHistoryItem, AnalysisRecord, User
from ...storage.managers import AnalysisHistoryStore, get_history_store

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/history", response_model=List[AnalysisHistoryItem])
async def list_analysis_history(
    current_user: User = Depends(get_current_user),
    store: AnalysisHistoryStore = Depends(get_history_store),
):
    """All analyses of the current user, newest first"""
    return await store.list_by_owner(current_user.user_id)


@router.get("/history/{record_id}", response_model=AnalysisRecord)
async def get_analysis(
    record_id: str,
    current_user: User = Depends(get_current_user),
    store: AnalysisHistoryStore = Depends(get_history_store),
):
    return await store.get_by_id(record_id, current_user.user_id)
