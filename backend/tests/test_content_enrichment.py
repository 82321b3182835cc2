import asyncio

import httpx
import pytest

from onewordaday.core.content_enrichment import (
    DictionaryClient,
    WordBankEnricher,
    age_groups_for,
    calculate_difficulty,
    parse_dictionary_entry,
)
from onewordaday.core.errors import DuplicateWord
from onewordaday.models import WordBankEntry

CANDOR = [
    {
        "meta": {"id": "candor", "syns": [["frankness", "openness"]], "ants": [["dishonesty"]]},
        "hwi": {"hw": "can*dor", "prs": [{"mw": "ˈkan-dər"}]},
        "fl": "noun",
        "def": [
            {
                "sseq": [
                    [["sense", {"sn": "1", "dt": [["text", "{bc}whiteness"]]}]],
                    [
                        [
                            "sense",
                            {
                                "sn": "2",
                                "dt": [
                                    ["text", "{bc}unreserved, honest, or sincere expression"],
                                    ["vis", [{"t": "spoke with {it}candor{/it} about the risks"}]],
                                ],
                            },
                        ]
                    ],
                ]
            }
        ],
        "shortdef": ["unreserved, honest, or sincere expression", "whiteness"],
    }
]


# ---------- heuristics ----------

@pytest.mark.unit
@pytest.mark.parametrize(
    "word,expected",
    [
        ("cat", 2),
        ("candor", 3),
        ("abstraction", 4),
        ("serendipity", 5),
    ],
)
def test_calculate_difficulty(word, expected):
    assert calculate_difficulty(word) == expected


@pytest.mark.unit
def test_age_groups_follow_difficulty():
    assert age_groups_for(1) == ["child", "teen", "young_adult", "adult", "senior"]
    assert age_groups_for(3) == ["young_adult", "adult", "senior"]
    assert age_groups_for(5) == ["adult", "senior"]
    assert age_groups_for(9) == ["adult"]


# ---------- dictionary parsing ----------

@pytest.mark.unit
def test_parse_dictionary_entry():
    entry = parse_dictionary_entry("candor", CANDOR)

    assert entry.definition == "unreserved, honest, or sincere expression"
    assert entry.part_of_speech == "noun"
    assert entry.pronunciation == "ˈkan-dər"
    assert entry.synonyms == ["frankness", "openness"]
    assert entry.antonyms == ["dishonesty"]
    assert entry.examples == ["spoke with candor about the risks"]


@pytest.mark.unit
def test_unknown_word_gets_placeholder_definition():
    # suggestions instead of entries
    entry = parse_dictionary_entry("candr", ["candor", "candid"])
    assert entry.definition == "A word meaning: candr"
    assert entry.examples == []


# ---------- dictionary client ----------

def _client(handler, key="dict-key"):
    return DictionaryClient(api_key=key, api_url="https://dict.test/json/", transport=httpx.MockTransport(handler))


def test_lookup_calls_dictionary_with_key():
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["key"] = request.url.params["key"]
        return httpx.Response(200, json=CANDOR)

    entry = asyncio.run(_client(handler).lookup("candor"))

    assert seen == {"path": "/json/candor", "key": "dict-key"}
    assert entry.part_of_speech == "noun"


def test_lookup_failure_falls_back_to_placeholder():
    entry = asyncio.run(_client(lambda request: httpx.Response(502, text="bad gateway")).lookup("candor"))
    assert entry.definition == "Definition for candor"


def test_lookup_without_key_makes_no_request():
    def must_not_call(request):
        raise AssertionError("no request expected without a key")

    entry = asyncio.run(_client(must_not_call, key=None).lookup("candor"))
    assert entry.definition == "Definition for candor"


# ---------- enricher ----------

def _enricher():
    return WordBankEnricher(_client(lambda request: httpx.Response(200, json=CANDOR)))


def test_enrich_stores_scored_entry(db):
    entry = asyncio.run(_enricher().enrich(db, "  Candor "))

    assert entry.word == "candor"
    assert entry.word_id
    assert entry.difficulty == 3
    assert entry.age_groups == ["young_adult", "adult", "senior"]
    assert entry.definition == "unreserved, honest, or sincere expression"
    assert entry.syllables == "ca-ndo-r"
    assert entry.examples == ["spoke with candor about the risks"]
    assert db.query(WordBankEntry).filter(WordBankEntry.word == "candor").count() == 1


def test_enrich_respects_given_part_of_speech(db):
    entry = asyncio.run(_enricher().enrich(db, "candor", part_of_speech="adjective"))
    assert entry.part_of_speech == "adjective"


def test_enrich_rejects_words_already_in_bank(db, add_bank_word):
    add_bank_word("w1", "candor", 3)

    with pytest.raises(DuplicateWord):
        asyncio.run(_enricher().enrich(db, "Candor"))
    assert db.query(WordBankEntry).count() == 1
