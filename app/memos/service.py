import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from sqlalchemy import select, desc, delete, or_, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.memos.errors import DataAccessError
from app.memos.models import Memo, encode_tags
from app.memos.schemas import MemoForm
from app.shared.views import ViewInvalidator, MEMOS, views as default_views

logger = logging.getLogger(__name__)


# --- lookup results ---
@dataclass(frozen=True)
class Found:
    memo: Memo

@dataclass(frozen=True)
class NotFound:
    memo_id: str

@dataclass(frozen=True)
class AccessFailed:
    memo_id: str
    reason: str

LookupResult = Found | NotFound | AccessFailed


def _next_stamp(previous: datetime | None) -> datetime:
    """A write timestamp strictly after ``previous``, even within one clock tick."""
    now = datetime.now(timezone.utc)
    if previous is None:
        return now
    if previous.tzinfo is None:
        previous = previous.replace(tzinfo=timezone.utc)
    return max(now, previous + timedelta(microseconds=1))


def _fail(db: Session, message: str, exc: Exception, **kw) -> DataAccessError:
    db.rollback()
    logger.error("%s (%s)", message, exc)
    return DataAccessError(message, **kw)


def _newest_first(stmt):
    return stmt.order_by(desc(Memo.created_at))


def list_memos(db: Session) -> list[Memo]:
    try:
        return list(db.scalars(_newest_first(select(Memo))).all())
    except SQLAlchemyError as e:
        raise _fail(db, "메모를 불러오는데 실패했습니다.", e) from e


def lookup_memo(db: Session, memo_id: str) -> LookupResult:
    try:
        memo = db.get(Memo, memo_id)
    except SQLAlchemyError as e:
        db.rollback()
        return AccessFailed(memo_id, str(e))
    return Found(memo) if memo else NotFound(memo_id)


def get_memo(db: Session, memo_id: str) -> Memo | None:
    """Single memo or None. Store failures are logged and read as 'not found'."""
    res = lookup_memo(db, memo_id)
    if isinstance(res, AccessFailed):
        logger.warning("Failed to fetch memo %s: %s", memo_id, res.reason)
        return None
    if isinstance(res, NotFound):
        return None
    return res.memo


def create_memo(db: Session, form: MemoForm, views: ViewInvalidator = default_views) -> Memo:
    now = datetime.now(timezone.utc)
    memo = Memo(
        title=form.title,
        content=form.content,
        category=form.category,
        tags_json=encode_tags(form.tags),
        created_at=now,
        updated_at=now,
    )
    try:
        db.add(memo)
        db.commit()
        db.refresh(memo)
    except SQLAlchemyError as e:
        raise _fail(db, "메모 생성에 실패했습니다.", e) from e
    views.invalidate(MEMOS)
    return memo


def update_memo(db: Session, memo_id: str, form: MemoForm, views: ViewInvalidator = default_views) -> Memo:
    try:
        memo = db.get(Memo, memo_id)
        if memo is None:
            raise DataAccessError("메모를 찾을 수 없습니다.", code="memo_not_found", status=404)
        memo.title = form.title
        memo.content = form.content
        memo.category = form.category
        memo.tags = form.tags
        memo.updated_at = _next_stamp(memo.updated_at)
        db.commit()
        db.refresh(memo)
    except SQLAlchemyError as e:
        raise _fail(db, "메모 수정에 실패했습니다.", e) from e
    views.invalidate(MEMOS)
    return memo


def delete_memo(db: Session, memo_id: str, views: ViewInvalidator = default_views) -> None:
    # deleting a missing id is not an error
    try:
        db.execute(delete(Memo).where(Memo.id == memo_id))
        db.commit()
    except SQLAlchemyError as e:
        raise _fail(db, "메모 삭제에 실패했습니다.", e) from e
    views.invalidate(MEMOS)


def _has_tag(tag: str):
    # one row per array element, correlated to the outer memos row
    elements = func.json_each(Memo.tags_json).table_valued("value")
    return select(elements.c.value).where(elements.c.value == tag).exists()


def search_memos(db: Session, query: str) -> list[Memo]:
    """Title/content substring (case-insensitive) or exact tag match, newest first."""
    if not query:
        return list_memos(db)
    stmt = select(Memo).where(
        or_(
            Memo.title.icontains(query, autoescape=True),
            Memo.content.icontains(query, autoescape=True),
            _has_tag(query),
        )
    )
    try:
        return list(db.scalars(_newest_first(stmt)).all())
    except SQLAlchemyError as e:
        raise _fail(db, "메모 검색에 실패했습니다.", e) from e


def save_summary(db: Session, memo_id: str, summary: str) -> Memo:
    """Summary-only write. Leaves title/content/category/tags alone."""
    try:
        memo = db.get(Memo, memo_id)
        if memo is None:
            raise DataAccessError("메모를 찾을 수 없습니다.", code="memo_not_found", status=404)
        memo.summary = summary
        memo.updated_at = _next_stamp(memo.updated_at)
        db.commit()
        db.refresh(memo)
    except SQLAlchemyError as e:
        raise _fail(db, "요약 결과를 저장하는데 실패했습니다.", e) from e
    return memo
