import logging
import os
import shutil
import time
import uuid
from typing import List, Optional, Sequence

from fastapi import UploadFile

from domain.errors import InvalidFileType
from domain.schemas import UploadedFile
from infra.extract.text_extractor import SUPPORTED_MEDIA_TYPES, base_media_type

logger = logging.getLogger(__name__)

ALLOWED_MEDIA_TYPES = SUPPORTED_MEDIA_TYPES


def safe_filename(name: str) -> str:
    name = os.path.basename((name or "").replace("\\", "/")).strip()
    return name.replace(" ", "_") or "upload"


def validate_media_types(uploads: Sequence[UploadFile]) -> None:
    for f in uploads:
        if base_media_type(f.content_type) not in ALLOWED_MEDIA_TYPES:
            raise InvalidFileType(f.filename or "upload", f.content_type)


class UploadSession:
    """Request-scoped transient storage for uploaded files.

    Files land in ``<root>/req_<uuid>/`` and are removed when the session
    exits, whatever the outcome of the request. Removal problems are logged
    and never raised.
    """

    def __init__(self, root: str):
        self.root = root
        self.directory: Optional[str] = None
        self.files: List[UploadedFile] = []

    async def __aenter__(self) -> "UploadSession":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def _ensure_directory(self) -> str:
        if self.directory is None:
            self.directory = os.path.join(self.root, f"req_{uuid.uuid4().hex}")
            os.makedirs(self.directory, exist_ok=True)
        return self.directory

    async def accept(self, uploads: Sequence[UploadFile]) -> List[UploadedFile]:
        # the whole batch is checked before anything touches the disk
        validate_media_types(uploads)
        return [await self._store(f) for f in uploads]

    async def _store(self, f: UploadFile) -> UploadedFile:
        directory = self._ensure_directory()
        name = f.filename or "upload"
        stored_name = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{safe_filename(name)}"
        path = os.path.join(directory, stored_name)
        content = await f.read()
        with open(path, "wb") as out:
            out.write(content)
        record = UploadedFile(
            storage_path=path,
            original_name=name,
            declared_media_type=base_media_type(f.content_type),
            size_bytes=len(content),
        )
        self.files.append(record)
        logger.debug("Stored %s (%d bytes) at %s", name, record.size_bytes, path)
        return record

    def discard(self, record: UploadedFile) -> None:
        try:
            os.remove(record.storage_path)
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Could not delete upload %s: %s", record.storage_path, exc)
        if record in self.files:
            self.files.remove(record)

    def cleanup(self) -> None:
        for record in list(self.files):
            self.discard(record)
        if self.directory is None:
            return
        try:
            shutil.rmtree(self.directory)
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Could not delete upload directory %s: %s", self.directory, exc)
        self.directory = None
