from datetime import datetime, timezone
from pydantic import BaseModel, Field, ConfigDict, field_validator, computed_field
from typing import List

from app.memos.models import CATEGORIES, DEFAULT_CATEGORY

CATEGORY_LABELS = {
    "personal": "개인",
    "work": "업무",
    "study": "학습",
    "idea": "아이디어",
    "other": "기타",
}

# Form contract for both create and full update: all four fields required.
class MemoForm(BaseModel):
    title: str = Field(max_length=200)
    content: str
    category: str
    tags: List[str]

class MemoOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    title: str
    content: str
    category: str
    tags: List[str]
    summary: str | None = None
    created_at: datetime
    updated_at: datetime

    @field_validator("category", mode="before")
    @classmethod
    def _known_category(cls, v):
        return v if v in CATEGORIES else DEFAULT_CATEGORY

    # SQLite hands datetimes back naive; they were written as UTC
    @field_validator("created_at", "updated_at")
    @classmethod
    def _as_utc(cls, v: datetime) -> datetime:
        return v.replace(tzinfo=timezone.utc) if v.tzinfo is None else v

    @computed_field
    @property
    def category_label(self) -> str:
        return CATEGORY_LABELS[self.category]

class MemoList(BaseModel):
    items: List[MemoOut]

# --- summaries ---
class SummarizeIn(BaseModel):
    content: str

class SummaryOut(BaseModel):
    summary: str
    token_count: int = 0
