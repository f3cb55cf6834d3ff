import logging
from typing import List, Sequence

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from domain.schemas import ExtractedDocument, UploadedFile
from infra.extract.text_extractor import extract_text
from infra.storage.uploads import UploadSession

logger = logging.getLogger(__name__)


async def extract_one(session: UploadSession, record: UploadedFile) -> ExtractedDocument:
    try:
        text = await run_in_threadpool(
            extract_text, record.storage_path, record.declared_media_type, record.original_name
        )
    finally:
        session.discard(record)
    logger.info("Extracted %d chars from %s", len(text), record.original_name)
    return ExtractedDocument(source_filename=record.original_name, text=text)


async def ingest(session: UploadSession, uploads: Sequence[UploadFile]) -> List[ExtractedDocument]:
    """Store, extract and release a batch of uploads, preserving submission order."""
    records = await session.accept(uploads)
    return [await extract_one(session, r) for r in records]
