from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Union


class UploadedFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    storage_path: str
    original_name: str
    declared_media_type: str
    size_bytes: int


class ExtractedDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    source_filename: str
    text: str


class RankingRecord(BaseModel):
    filename: str
    candidateName: str
    phone: str
    email: str
    score: Union[int, float] = Field(..., ge=0, le=100)
    explanation: str
    advantages: List[str] = Field(default_factory=list)
    disadvantages: List[str] = Field(default_factory=list)


class GeneratedCV(BaseModel):
    title: str
    content: str


class RankResponse(BaseModel):
    success: bool = True
    # model output is passed through verbatim, so no per-record validation here
    data: Dict[str, Any]


class GenerateResponse(BaseModel):
    success: bool = True
    data: Dict[str, Any]


class DownloadRequest(BaseModel):
    content: str
    title: str


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
