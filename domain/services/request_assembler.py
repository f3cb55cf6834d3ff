from typing import Optional, Sequence

from domain.schemas import ExtractedDocument

CV_DELIMITER = "---"


def build_ranking_payload(job_description: ExtractedDocument, cvs: Sequence[ExtractedDocument]) -> str:
    # no truncation: an oversize batch must fail upstream rather than be analysed partially
    cv_blocks = "\n".join(
        f"CV {i} ({cv.source_filename}):\n{cv.text}\n{CV_DELIMITER}"
        for i, cv in enumerate(cvs, start=1)
    )
    return f"Job Description:\n{job_description.text}\n\nCVs to analyze:\n{cv_blocks}"


def resolve_base_data(additional_data: Optional[str], base_document: Optional[ExtractedDocument]) -> str:
    """An uploaded base-data file wins over free text."""
    if base_document is not None:
        return base_document.text
    if additional_data and additional_data.strip():
        return additional_data
    return ""


def build_generation_payload(job_description: str, base_data: str) -> str:
    return f"Job Description:\n{job_description}\n\nBase Data (use as foundation):\n{base_data}"
