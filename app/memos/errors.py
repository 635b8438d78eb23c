"""
Failure taxonomy for memo operations.

Each error carries the Korean message shown next to the control that
triggered it, a machine-readable ``code`` and the HTTP status the API
answers with.
"""


class MemoError(Exception):
    code = "memo_error"
    status = 500
    default_message = "알 수 없는 오류가 발생했습니다."

    def __init__(self, message: str | None = None, *, code: str | None = None, status: int | None = None):
        self.message = message or self.default_message
        if code:
            self.code = code
        if status:
            self.status = status
        super().__init__(self.message)


class ValidationError(MemoError):
    """Caller input fails a precondition (empty content, blank id)."""
    code = "invalid_input"
    status = 400
    default_message = "메모 내용이 필요합니다."


class ConfigurationError(MemoError):
    """A required credential is missing."""
    code = "not_configured"
    status = 500
    default_message = "GEMINI_API_KEY가 설정되지 않았습니다."


class DataAccessError(MemoError):
    """The store call failed, returned an error, or found no row to write."""
    code = "data_access_failed"
    status = 500
    default_message = "데이터베이스 작업에 실패했습니다."


class GenerationError(MemoError):
    """The AI client returned no usable text."""
    code = "generation_failed"
    status = 502
    default_message = "요약 생성에 실패했습니다."


class PersistenceError(MemoError):
    """A summary was generated but could not be saved."""
    code = "persistence_failed"
    status = 500
    default_message = "요약 결과를 저장하는데 실패했습니다."
