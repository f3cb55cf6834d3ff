from typing import List, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from api.deps import get_app_settings, get_llm_client
from app.settings import Settings
from domain.errors import MissingRequiredPart, TooManyFiles
from domain.schemas import RankResponse
from domain.services.ingestion import ingest
from domain.services.ranking_pipeline import run_ranking
from infra.llm.client import LLMClient
from infra.storage.uploads import UploadSession

router = APIRouter()


def _present(files: Optional[List[UploadFile]]) -> List[UploadFile]:
    return [f for f in (files or []) if f.filename]


@router.post("/api/rank-cvs", response_model=RankResponse)
async def rank_cvs(
    cvs: Optional[List[UploadFile]] = File(default=None),
    job_description: Optional[List[UploadFile]] = File(default=None, alias="jobDescription"),
    settings: Settings = Depends(get_app_settings),
    llm: LLMClient = Depends(get_llm_client),
) -> RankResponse:
    cv_files = _present(cvs)
    jd_files = _present(job_description)
    if not cv_files:
        raise MissingRequiredPart("No CV files uploaded")
    if len(cv_files) > settings.MAX_CV_FILES:
        raise TooManyFiles(f"At most {settings.MAX_CV_FILES} CV files can be ranked at once")
    if not jd_files:
        raise MissingRequiredPart("No job description uploaded")
    if len(jd_files) > 1:
        raise TooManyFiles("Only one job description file is allowed")

    async with UploadSession(settings.UPLOAD_DIR) as session:
        # job description is stored and validated together with the CVs
        documents = await ingest(session, jd_files + cv_files)
    job_doc, cv_docs = documents[0], documents[1:]

    data = await run_ranking(llm, job_doc, cv_docs, temperature=settings.RANK_TEMPERATURE)
    return RankResponse(success=True, data=data)
