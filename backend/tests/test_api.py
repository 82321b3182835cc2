from datetime import timedelta

import httpx
import pytest
from fastapi.testclient import TestClient

from onewordaday.api.deps import get_word_enricher, get_word_generator
from onewordaday.core.clock import utc_today
from onewordaday.core.content_enrichment import DictionaryClient, WordBankEnricher
from onewordaday.main import app

from fakes import FakeProvider, ai_generator, word_json

HEADERS = {"X-User-Id": "user-1"}


@pytest.fixture
def client(db):
    app.dependency_overrides[get_word_generator] = lambda: None
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.mark.api
def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


@pytest.mark.api
@pytest.mark.parametrize(
    "method,path",
    [
        ("get", "/word/today"),
        ("get", "/word/history"),
        ("get", "/user/profile"),
        ("post", "/feedback"),
    ],
)
def test_user_endpoints_require_identity(client, method, path):
    r = getattr(client, method)(path)
    assert r.status_code == 401


@pytest.mark.api
def test_todays_word_is_generated_then_retrieved(client, add_bank_word):
    add_bank_word("w1", "astute", 4, examples=["A.", "B.", "C."])

    r1 = client.get("/word/today", headers=HEADERS)
    assert r1.status_code == 200
    body = r1.json()
    assert body["generated"] is True
    assert body["word"]["word"] == "astute"
    assert body["word"]["generation_method"] == "WordBank"
    assert body["word"]["date"] == utc_today().isoformat()

    r2 = client.get("/word/today", headers=HEADERS)
    assert r2.json()["message"] == "Word retrieved successfully"
    assert r2.json()["generated"] is False


@pytest.mark.api
def test_todays_word_from_ai_provider(client):
    provider = FakeProvider("Groq", [word_json("luminous")])
    app.dependency_overrides[get_word_generator] = lambda: ai_generator(provider)

    r = client.get("/word/today", headers=HEADERS)

    assert r.status_code == 200
    word = r.json()["word"]
    assert word["word"] == "luminous"
    assert word["generation_method"] == "AI"
    assert word["provider"] == "Groq"


@pytest.mark.api
def test_past_date_without_word_is_404(client):
    past = (utc_today() - timedelta(days=3)).isoformat()
    r = client.get("/word/today", params={"date": past}, headers=HEADERS)
    assert r.status_code == 404
    assert r.json()["detail"]["date"] == past


@pytest.mark.api
def test_invalid_date_is_rejected(client):
    r = client.get("/word/today", params={"date": "yesterday"}, headers=HEADERS)
    assert r.status_code == 422


@pytest.mark.api
def test_skip_feedback_then_regenerate(client, add_bank_word):
    add_bank_word("w1", "astute", 4)
    add_bank_word("w2", "candor", 5)

    first = client.get("/word/today", headers=HEADERS).json()["word"]
    r = client.post(
        "/feedback",
        json={"word_id": first["word_id"], "date": first["date"], "practiced": False, "rating": 2},
        headers=HEADERS,
    )
    assert r.status_code == 200
    assert r.json()["data"]["rating"] == 2

    second = client.get("/word/today", headers=HEADERS).json()
    assert second["regenerated"] is True
    assert second["word"]["word"] != first["word"]
    assert second["word"]["practice_status"] == "pending"

    history = client.get("/word/history", headers=HEADERS).json()
    assert history["count"] == 1


@pytest.mark.api
def test_feedback_validation(client):
    r = client.post("/feedback", json={"date": "2024-03-20"}, headers=HEADERS)
    assert r.status_code == 422
    r = client.post("/feedback", json={"word_id": "w1", "date": "2024-03-20", "rating": 9}, headers=HEADERS)
    assert r.status_code == 422


@pytest.mark.api
def test_history_endpoint(client, add_daily_word):
    today = utc_today()
    for i in range(3):
        add_daily_word("user-1", (today - timedelta(days=i)).isoformat(), f"word{i}")

    r = client.get("/word/history", params={"limit": 2}, headers=HEADERS)

    body = r.json()
    assert [w["word"] for w in body["words"]] == ["word0", "word1"]
    assert body["has_more"] is True
    assert body["stats"]["pending_words"] == 2


@pytest.mark.api
def test_profile_lifecycle(client):
    assert client.get("/user/profile", headers=HEADERS).status_code == 404

    r = client.put(
        "/user/profile",
        json={"age_group": "teen", "context": "school"},
        headers={**HEADERS, "X-User-Email": "u@example.com"},
    )
    assert r.status_code == 200
    assert r.json()["message"] == "User profile created"
    assert r.json()["profile"]["email"] == "u@example.com"

    r = client.put("/user/profile", json={"exam_prep": "SAT"}, headers=HEADERS)
    assert r.json()["message"] == "User profile updated"

    profile = client.get("/user/profile", headers=HEADERS).json()["profile"]
    assert profile["age_group"] == "teen"
    assert profile["exam_prep"] == "SAT"
    assert profile["learning_patterns"]["difficulty_preference"] == "medium"


@pytest.mark.api
def test_profile_rejects_unknown_age_group(client):
    r = client.put("/user/profile", json={"age_group": "toddler"}, headers=HEADERS)
    assert r.status_code == 422


@pytest.mark.api
def test_word_bank_crud(client):
    payload = {
        "word_id": "w-lucid",
        "word": "lucid",
        "definition": "Expressed clearly; easy to understand.",
        "difficulty": 3,
        "examples": ["Her explanation was lucid."],
        "age_groups": ["teen", "adult"],
    }
    r = client.post("/word-bank", json=payload)
    assert r.status_code == 201
    assert r.json()["age_groups"] == ["teen", "adult"]

    assert client.post("/word-bank", json=payload).status_code == 400
    assert client.post("/word-bank", json={**payload, "word_id": "x", "difficulty": 6}).status_code == 422

    r = client.patch("/word-bank/w-lucid", json={"difficulty": 4})
    assert r.json()["difficulty"] == 4

    assert [e["word"] for e in client.get("/word-bank", params={"difficulty": 4}).json()] == ["lucid"]
    assert client.get("/word-bank", params={"difficulty": 3}).json() == []

    assert client.delete("/word-bank/w-lucid").status_code == 204
    assert client.get("/word-bank/w-lucid").status_code == 404


@pytest.mark.api
def test_word_bank_enrich(client):
    def handler(request):
        return httpx.Response(200, json=[{"fl": "adjective", "shortdef": ["clear and easy to understand"]}])

    enricher = WordBankEnricher(DictionaryClient(api_key="k", transport=httpx.MockTransport(handler)))
    app.dependency_overrides[get_word_enricher] = lambda: enricher

    r = client.post("/word-bank/enrich", json={"word": "Lucid"})
    assert r.status_code == 201
    body = r.json()
    assert body["word"] == "lucid"
    assert body["definition"] == "clear and easy to understand"
    assert body["difficulty"] == 3
    assert body["age_groups"] == ["young_adult", "adult", "senior"]

    assert client.post("/word-bank/enrich", json={"word": "lucid"}).status_code == 400
    assert client.post("/word-bank/enrich", json={"word": ""}).status_code == 422
