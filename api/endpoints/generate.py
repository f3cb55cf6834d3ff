from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from api.deps import get_app_settings, get_llm_client
from app.settings import Settings
from domain.errors import InvalidFieldValue, MissingRequiredPart
from domain.schemas import GenerateResponse
from domain.services.generation_pipeline import run_generation
from domain.services.ingestion import ingest
from domain.services.request_assembler import resolve_base_data
from infra.llm.client import LLMClient
from infra.storage.uploads import UploadSession

router = APIRouter()


def parse_cv_count(raw: Optional[str], maximum: int) -> int:
    if raw is None or not raw.strip():
        raise MissingRequiredPart("Number of CVs is required")
    try:
        count = int(raw.strip())
    except ValueError:
        raise InvalidFieldValue("Number of CVs must be a positive integer") from None
    if count < 1 or count > maximum:
        raise InvalidFieldValue(f"Number of CVs must be between 1 and {maximum}")
    return count


@router.post("/api/generate-cvs", response_model=GenerateResponse)
async def generate_cvs(
    job_description: Optional[str] = Form(default=None, alias="jobDescription"),
    number_of_cvs: Optional[str] = Form(default=None, alias="numberOfCVs"),
    additional_data: Optional[str] = Form(default=None, alias="additionalData"),
    base_data: Optional[UploadFile] = File(default=None, alias="baseData"),
    settings: Settings = Depends(get_app_settings),
    llm: LLMClient = Depends(get_llm_client),
) -> GenerateResponse:
    if not job_description or not job_description.strip():
        raise MissingRequiredPart("Job description is required")
    count = parse_cv_count(number_of_cvs, settings.MAX_GENERATED_CVS)

    base_document = None
    if base_data is not None and base_data.filename:
        async with UploadSession(settings.UPLOAD_DIR) as session:
            [base_document] = await ingest(session, [base_data])

    base_text = resolve_base_data(additional_data, base_document)
    data = await run_generation(
        llm, job_description, base_text, count, temperature=settings.GENERATE_TEMPERATURE
    )
    return GenerateResponse(success=True, data=data)
