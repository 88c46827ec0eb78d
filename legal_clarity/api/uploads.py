"""Shared upload guards for routes that accept a file"""
from fastapi import HTTPException, UploadFile

from ..config import MAX_FILE_SIZE


async def read_upload(file: UploadFile) -> bytes:
    """Read an uploaded file, rejecting empty (400) and oversized (413) ones."""
    file_content = await file.read()
    if not file_content:
        raise HTTPException(status_code=400, detail="File cannot be empty.")
    if len(file_content) > MAX_FILE_SIZE:
        raise HTTPException(status_code=413, detail=f"File too large. Maximum size is {MAX_FILE_SIZE // (1024 * 1024)}MB.")
    return file_content
