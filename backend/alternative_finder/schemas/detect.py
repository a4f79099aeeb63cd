from pydantic import BaseModel, ConfigDict
from typing import Optional, List


class DetectRequest(BaseModel):
    image: str  # data URL / base64 JPEG, or an image URI


class Label(BaseModel):
    # Provider output is passed through verbatim, so unknown keys are kept
    model_config = ConfigDict(extra="allow")

    description: str
    score: Optional[float] = None
    mid: Optional[str] = None
    topicality: Optional[float] = None


class DetectResponse(BaseModel):
    isAmerican: bool
    labels: List[Label]


class ErrorResponse(BaseModel):
    error: str
