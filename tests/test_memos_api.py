from app.memos.service import create_memo
from app.shared.views import MEMOS, ViewInvalidator
from tests.helpers import make_form


def _create(client, **overrides):
    body = {"title": "장보기", "content": "우유, 계란", "category": "personal", "tags": ["마트"]}
    body.update(overrides)
    r = client.post("/memos", json=body)
    assert r.status_code == 201, r.text
    return r.json()


def test_create_and_get(client):
    created = _create(client, tags=["b", "a"])
    r = client.get(f"/memos/{created['id']}")
    assert r.status_code == 200
    data = r.json()
    assert data["title"] == "장보기"
    assert data["tags"] == ["b", "a"]
    assert data["category"] == "personal"
    assert data["category_label"] == "개인"
    assert data["summary"] is None
    assert data["created_at"] == data["updated_at"]


def test_get_unknown_is_404(client):
    r = client.get("/memos/nope")
    assert r.status_code == 404
    err = r.json()["detail"]["error"]
    assert err["code"] == "memo_not_found"
    assert err["message"] == "메모를 찾을 수 없습니다."


def test_unknown_category_renders_as_other(client):
    created = _create(client, category="travel")
    assert created["category"] == "other"
    assert created["category_label"] == "기타"


def test_create_requires_all_fields(client):
    r = client.post("/memos", json={"title": "t", "content": "c"})
    assert r.status_code == 422


def test_list_reflects_writes_and_signals_them(client, app_invalidations):
    assert client.get("/memos").json() == {"items": []}

    first = _create(client, title="첫 메모")
    assert app_invalidations == [MEMOS]
    items = client.get("/memos").json()["items"]
    assert [m["id"] for m in items] == [first["id"]]

    second = _create(client, title="둘째 메모")
    items = client.get("/memos").json()["items"]
    assert {m["id"] for m in items} == {first["id"], second["id"]}
    stamps = [m["created_at"] for m in items]
    assert stamps == sorted(stamps, reverse=True)

    client.delete(f"/memos/{first['id']}")
    assert [m["id"] for m in client.get("/memos").json()["items"]] == [second["id"]]


def test_update(client):
    created = _create(client)
    body = {"title": "회의록", "content": "결정 사항", "category": "work", "tags": []}
    r = client.put(f"/memos/{created['id']}", json=body)
    assert r.status_code == 200
    data = r.json()
    assert (data["title"], data["content"], data["category"], data["tags"]) == ("회의록", "결정 사항", "work", [])
    assert data["updated_at"] > created["updated_at"]


def test_update_unknown_is_404(client):
    body = {"title": "t", "content": "c", "category": "work", "tags": []}
    r = client.put("/memos/missing", json=body)
    assert r.status_code == 404
    assert r.json()["detail"]["ok"] is False


def test_delete_is_idempotent(client):
    created = _create(client)
    assert client.delete(f"/memos/{created['id']}").status_code == 204
    assert client.get(f"/memos/{created['id']}").status_code == 404
    assert client.delete(f"/memos/{created['id']}").status_code == 204


def test_search(client):
    a = _create(client, title="Trip to Seoul", content="", tags=[])
    b = _create(client, title="packing", content="", tags=["seoul"])
    _create(client, title="misc", content="nothing related", tags=[])
    r = client.get("/memos/search", params={"q": "seoul"})
    assert r.status_code == 200
    assert {m["id"] for m in r.json()["items"]} == {a["id"], b["id"]}


def test_summarize_persists(client, provider):
    created = _create(client, content="다음 주 일정 정리")
    r = client.post(f"/memos/{created['id']}/summarize", json={"content": created["content"]})
    assert r.status_code == 200
    assert r.json() == {"ok": True, "data": {"summary": provider.text, "token_count": 42}}
    assert client.get(f"/memos/{created['id']}").json()["summary"] == provider.text


def test_summarize_empty_content_is_400(client, provider):
    created = _create(client)
    r = client.post(f"/memos/{created['id']}/summarize", json={"content": ""})
    assert r.status_code == 400
    assert r.json()["detail"]["error"]["message"] == "메모 내용이 필요합니다."
    assert provider.calls == []


def test_summarize_unknown_memo_is_not_returned(client):
    r = client.post("/memos/missing/summarize", json={"content": "내용"})
    assert r.status_code == 500
    assert r.json()["detail"]["error"]["code"] == "persistence_failed"


def test_summarize_empty_generation_is_502(client, provider):
    provider.text = ""
    created = _create(client)
    r = client.post(f"/memos/{created['id']}/summarize", json={"content": "내용"})
    assert r.status_code == 502
    assert r.json()["detail"]["error"]["code"] == "generation_failed"


def test_legacy_summarize(client, provider):
    r = client.post("/api/summarize", json={"content": "메모"})
    assert r.status_code == 200
    assert r.json() == {"summary": provider.text, "tokenCount": 42}


def test_legacy_summarize_errors(client, provider):
    r = client.post("/api/summarize", json={})
    assert r.status_code == 400
    assert r.json() == {"error": "메모 내용이 필요합니다."}

    provider.text = ""
    r = client.post("/api/summarize", json={"content": "메모"})
    assert r.status_code == 500
    assert r.json() == {"error": "요약 생성에 실패했습니다."}


def test_list_sees_writes_made_outside_this_process(client, session_factory):
    assert client.get("/memos").json() == {"items": []}

    # another worker: its own session and its own invalidation signal
    other = session_factory()
    try:
        memo_id = create_memo(other, make_form(title="다른 워커"), views=ViewInvalidator()).id
    finally:
        other.close()

    items = client.get("/memos").json()["items"]
    assert [m["id"] for m in items] == [memo_id]
