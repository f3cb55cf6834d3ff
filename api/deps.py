from fastapi import Request

from app.settings import Settings
from infra.export.pdf import PdfRenderer
from infra.llm.client import LLMClient


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_llm_client(request: Request) -> LLMClient:
    return request.app.state.llm_client


def get_pdf_renderer(request: Request) -> PdfRenderer:
    return request.app.state.pdf_renderer
