import re

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from api.deps import get_pdf_renderer
from domain.errors import RenderFailed
from domain.schemas import DownloadRequest
from infra.export.pdf import PdfRenderer
from infra.export.word import render_word

router = APIRouter()

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def download_filename(title: str, extension: str) -> str:
    slug = re.sub(r"[^a-z0-9]", "_", title, flags=re.I).lower() or "document"
    return f"{slug}.{extension}"


def _attachment(content: bytes, media_type: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/api/download-word")
async def download_word(body: DownloadRequest) -> Response:
    try:
        document = await run_in_threadpool(render_word, body.content, body.title)
    except Exception as exc:
        raise RenderFailed("Failed to generate Word document") from exc
    return _attachment(document, DOCX_MEDIA_TYPE, download_filename(body.title, "docx"))


@router.post("/api/download-pdf")
async def download_pdf(body: DownloadRequest, renderer: PdfRenderer = Depends(get_pdf_renderer)) -> Response:
    document = await renderer.render(body.content, body.title)
    return _attachment(document, "application/pdf", download_filename(body.title, "pdf"))
