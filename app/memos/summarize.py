import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.memos.errors import (
    ConfigurationError,
    DataAccessError,
    GenerationError,
    PersistenceError,
    ValidationError,
)
from app.memos.generation import (
    GeminiGenerationProvider,
    GenerationProvider,
    GenerationRequest,
    GenerationResult,
)
from app.memos.service import save_summary
from app.shared.config import SummarizerConfig
from app.shared.views import ViewInvalidator, MEMOS, views as default_views

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = (
    "다음 메모의 핵심 내용을 3-5개의 간결한 불릿 포인트로 요약해주세요. "
    "요약은 한국어로 작성하고, 주요 포인트만 포함해주세요.\n\n"
    "메모 내용:\n{content}"
)


def build_prompt(content: str) -> str:
    return PROMPT_TEMPLATE.format(content=content)


@dataclass(frozen=True)
class SummaryResult:
    summary: str
    token_count: int = 0


class SummarizationWorkflow:
    """
    Generate a bullet-point summary for a memo and store it on the memo.

    The operation succeeds only if the summary was both generated and
    saved. A summary that could not be saved is never returned. Concurrent
    calls for one memo are not coordinated: the last save wins.
    """

    def __init__(
        self,
        config: SummarizerConfig,
        provider: GenerationProvider | None = None,
        views: ViewInvalidator = default_views,
    ) -> None:
        self.config = config
        self.views = views
        self._provider = provider

    def check_config(self) -> bool:
        """Startup check. CRUD keeps working without a key, so only warn."""
        if not self.config.configured:
            logger.warning("GEMINI_API_KEY is not set; memo summaries are disabled")
            return False
        return True

    def _get_provider(self) -> GenerationProvider:
        if self._provider is None:
            self._provider = GeminiGenerationProvider(self.config.model, api_key=self.config.api_key)
        return self._provider

    def _require_ready(self, content) -> None:
        if not self.config.configured:
            raise ConfigurationError()
        if not content or not isinstance(content, str):
            raise ValidationError()

    def generate(self, content: str) -> SummaryResult:
        """Generate only, nothing is saved. Raises GenerationError on empty output."""
        self._require_ready(content)
        request = GenerationRequest(
            prompt=build_prompt(content),
            max_output_tokens=self.config.max_output_tokens,
            temperature=self.config.temperature,
            top_p=self.config.top_p,
            top_k=self.config.top_k,
        )
        try:
            result: GenerationResult = self._get_provider().generate(request)
        except (RuntimeError, ValueError) as e:
            logger.error("summary generation failed: %s", e)
            raise GenerationError(f"요약 생성 중 오류가 발생했습니다: {e}") from e
        if not result.text:
            raise GenerationError()
        return SummaryResult(summary=result.text, token_count=result.total_tokens or 0)

    def summarize(self, db: Session, memo_id: str, content: str) -> SummaryResult:
        self._require_ready(content)
        if not memo_id or not str(memo_id).strip():
            raise ValidationError("메모 ID가 올바르지 않습니다.")

        out = self.generate(content)
        try:
            save_summary(db, memo_id, out.summary)
        except DataAccessError as e:
            logger.error("Failed to save summary for memo %s: %s", memo_id, e.message)
            raise PersistenceError() from e

        self.views.invalidate(MEMOS)
        logger.info("memo %s summarized (%d tokens)", memo_id, out.token_count)
        return out
