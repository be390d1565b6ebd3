"""
Pydantic request / response schemas for the filtering endpoints.
"""

from pydantic import BaseModel, Field

from app.config import MAX_TEXT_LENGTH


class FilterRequest(BaseModel):
    text: str = Field(
        ...,
        max_length=MAX_TEXT_LENGTH,
        description="Raw text to scan for sensitive words.",
    )


class FilterResponse(BaseModel):
    filtered_text: str
    hits: int
    changed: bool


class KeywordsRequest(BaseModel):
    keywords: list[str] = Field(
        ...,
        description="Replacement keyword set; blank entries are ignored.",
    )


class KeywordsResponse(BaseModel):
    keywords: int


class HealthResponse(BaseModel):
    status: str
    keywords: int
    load_error: str | None = None
