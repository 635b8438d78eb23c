"""Plain test helpers shared by several test modules (fixtures live in conftest)."""
from app.memos.generation import GenerationResult
from app.memos.schemas import MemoForm


class FakeProvider:
    """Records requests and answers with canned text. No network."""

    def __init__(self, text: str = "- 첫 번째 요점\n- 두 번째 요점", tokens: int = 42):
        self.text = text
        self.tokens = tokens
        self.calls = []

    def generate(self, request):
        self.calls.append(request)
        return GenerationResult(text=self.text, total_tokens=self.tokens)


def make_form(**overrides) -> MemoForm:
    data = {"title": "장보기", "content": "우유, 계란", "category": "personal", "tags": ["마트"]}
    data.update(overrides)
    return MemoForm(**data)
