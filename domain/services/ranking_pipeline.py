import logging
from typing import Any, Dict, List, Sequence

from domain.schemas import ExtractedDocument
from domain.services.request_assembler import build_ranking_payload
from domain.services.response_normalizer import normalize_rankings
from infra.llm.client import LLMClient
from infra.llm.prompts import RANK_PROMPT

logger = logging.getLogger(__name__)


def _check_filenames(rankings: List[Any], cvs: Sequence[ExtractedDocument]) -> None:
    # detection only: model order and model-supplied filenames are returned as-is
    submitted = [cv.source_filename for cv in cvs]
    returned = [str(r.get("filename")) for r in rankings if isinstance(r, dict)]
    if len(returned) != len(submitted) or set(returned) != set(submitted):
        logger.warning("Ranking filenames %s do not match submitted CVs %s", returned, submitted)


async def run_ranking(
    llm: LLMClient,
    job_description: ExtractedDocument,
    cvs: Sequence[ExtractedDocument],
    temperature: float,
) -> Dict[str, Any]:
    logger.info("Ranking %d CVs against %s", len(cvs), job_description.source_filename)
    payload = build_ranking_payload(job_description, cvs)
    logger.info("Ranking payload length: %d chars", len(payload))

    raw = await llm.complete(RANK_PROMPT.format(payload=payload), temperature=temperature)
    data = normalize_rankings(raw)
    _check_filenames(data["rankings"], cvs)
    return data
