import logging
from typing import Any, Dict

from domain.services.request_assembler import build_generation_payload
from domain.services.response_normalizer import normalize_cvs
from infra.llm.client import LLMClient
from infra.llm.prompts import GENERATE_PROMPT

logger = logging.getLogger(__name__)


async def run_generation(
    llm: LLMClient,
    job_description: str,
    base_data: str,
    count: int,
    temperature: float,
) -> Dict[str, Any]:
    logger.info("Generating %d CVs (base data: %d chars)", count, len(base_data))
    payload = build_generation_payload(job_description, base_data)
    raw = await llm.complete(GENERATE_PROMPT.format(count=count, payload=payload), temperature=temperature)
    data = normalize_cvs(raw)
    if len(data["cvs"]) != count:
        logger.warning("Requested %d CVs, model returned %d", count, len(data["cvs"]))
    return data
