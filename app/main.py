import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.settings import Settings, settings as default_settings
from app.logging import configure_logging
from app.error_handlers import attach_error_handlers
from api.router import api_router
from infra.export.pdf import PdfRenderer
from infra.llm.client import LLMClient

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    llm_client: Optional[LLMClient] = None,
    pdf_renderer: Optional[PdfRenderer] = None,
) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(title=settings.APP_NAME)
    app.state.settings = settings
    app.state.llm_client = llm_client or LLMClient(settings)
    app.state.pdf_renderer = pdf_renderer or PdfRenderer(
        max_concurrency=settings.PDF_MAX_CONCURRENCY, timeout=settings.PDF_TIMEOUT_SECONDS
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    attach_error_handlers(app)
    app.include_router(api_router)

    # the built web client, when present, is served from the root
    if settings.STATIC_DIR and os.path.isdir(settings.STATIC_DIR):
        app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="client")
    return app


configure_logging()
app = create_app()


if __name__ == "__main__":
    import uvicorn

    if not (default_settings.OPENAI_API_KEY or default_settings.OPENROUTER_API_KEY):
        logger.warning("Set OPENAI_API_KEY or OPENROUTER_API_KEY to enable ranking and generation")
    uvicorn.run(app, host="0.0.0.0", port=default_settings.PORT)
