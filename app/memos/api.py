# app/memos/api.py
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.shared.config import SummarizerConfig
from app.shared.db import get_db
from app.shared.http import ok, err
from app.memos.errors import MemoError
from app.memos.schemas import MemoForm, MemoOut, MemoList, SummarizeIn, SummaryOut
from app.memos.service import (
    list_memos,
    get_memo,
    create_memo,
    update_memo,
    delete_memo,
    search_memos,
)
from app.memos.summarize import SummarizationWorkflow

router = APIRouter(prefix="/memos", tags=["Memos"])
legacy_router = APIRouter(prefix="/api", tags=["Legacy"])

_workflow: SummarizationWorkflow | None = None

def get_summarizer() -> SummarizationWorkflow:
    """Process-wide workflow, built from settings on first use."""
    global _workflow
    if _workflow is None:
        _workflow = SummarizationWorkflow(SummarizerConfig.from_settings())
    return _workflow


def _fail(e: MemoError):
    return err(e.message, code=e.code, status=e.status)


@router.get("", response_model=MemoList)
def api_list_memos(db: Session = Depends(get_db)):
    try:
        return {"items": list_memos(db)}
    except MemoError as e:
        return _fail(e)

@router.get("/search", response_model=MemoList)
def api_search_memos(q: str = Query("", description="Substring of title/content, or an exact tag"),
                     db: Session = Depends(get_db)):
    try:
        return {"items": search_memos(db, q)}
    except MemoError as e:
        return _fail(e)

@router.get("/{memo_id}", response_model=MemoOut)
def api_get_memo(memo_id: str, db: Session = Depends(get_db)):
    memo = get_memo(db, memo_id)
    if not memo:
        return err("메모를 찾을 수 없습니다.", code="memo_not_found", status=404)
    return memo

@router.post("", response_model=MemoOut, status_code=201)
def api_create_memo(payload: MemoForm, db: Session = Depends(get_db)):
    try:
        return create_memo(db, payload)
    except MemoError as e:
        return _fail(e)

@router.put("/{memo_id}", response_model=MemoOut)
def api_update_memo(memo_id: str, payload: MemoForm, db: Session = Depends(get_db)):
    try:
        return update_memo(db, memo_id, payload)
    except MemoError as e:
        return _fail(e)

@router.delete("/{memo_id}", status_code=204)
def api_delete_memo(memo_id: str, db: Session = Depends(get_db)):
    try:
        delete_memo(db, memo_id)
    except MemoError as e:
        return _fail(e)
    return Response(status_code=204)

@router.post("/{memo_id}/summarize")
def api_summarize_memo(memo_id: str, inb: SummarizeIn,
                       db: Session = Depends(get_db),
                       wf: SummarizationWorkflow = Depends(get_summarizer)):
    try:
        out = wf.summarize(db, memo_id, inb.content)
    except MemoError as e:
        return _fail(e)
    return ok(SummaryOut(summary=out.summary, token_count=out.token_count).model_dump())


# Superseded by POST /memos/{id}/summarize; generates without saving.
@legacy_router.post("/summarize", deprecated=True)
def api_legacy_summarize(payload: dict[str, Any] | None = Body(default=None),
                         wf: SummarizationWorkflow = Depends(get_summarizer)):
    content = (payload or {}).get("content")
    try:
        out = wf.generate(content)
    except MemoError as e:
        status = 400 if e.status == 400 else 500
        return JSONResponse(status_code=status, content={"error": e.message})
    return {"summary": out.summary, "tokenCount": out.token_count}
