from pydantic import BaseModel
from typing import Any, Optional


class HumanizeRequest(BaseModel):
    text: Optional[str] = None
    tone: Any = None  # standard | simple | professional | academic


class HumanizeResponse(BaseModel):
    result: str


class QuickParaphraseRequest(BaseModel):
    text: Optional[str] = None


class QuickParaphraseResponse(BaseModel):
    paraphrased: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
