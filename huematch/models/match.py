from pydantic import BaseModel, Field
from typing import Optional

from ..services.color_sets import DEFAULT_COLOR_SET

MAX_LIMIT = 100


class MatchRequest(BaseModel):
    hex: str
    color_set: str = DEFAULT_COLOR_SET
    limit: int = Field(default=10, ge=0, le=MAX_LIMIT)


class MatchResultSchema(BaseModel):
    name: str
    hex: str
    lab: list[float]
    delta_e: float = Field(ge=0)


class MatchResponse(BaseModel):
    query: str
    normalized: Optional[str] = None
    color_set: str
    results: list[MatchResultSchema] = []


class ColorSetSchema(BaseModel):
    id: str
    label: str
    count: int


class NormalizeResponse(BaseModel):
    input: str
    normalized: Optional[str] = None
    valid: bool
    lab: Optional[list[float]] = None
