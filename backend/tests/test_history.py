from datetime import date, timedelta

from onewordaday.core.history import word_history

from fakes import TODAY


def _day(n):
    return (TODAY - timedelta(days=n)).isoformat()


def test_history_is_newest_first_with_stats(db, add_daily_word):
    add_daily_word("u1", _day(2), "astute", practice_status="practiced")
    add_daily_word("u1", _day(1), "candor", practice_status="skipped")
    add_daily_word("u1", _day(0), "erudite")
    add_daily_word("u2", _day(0), "someone-else")

    h = word_history(db, "u1", today=TODAY)

    assert [w.word for w in h.words] == ["erudite", "candor", "astute"]
    assert h.stats == {"total_words": 3, "practiced_words": 1, "skipped_words": 1, "pending_words": 1}
    assert h.has_more is False


def test_history_limit_reports_more(db, add_daily_word):
    for i in range(5):
        add_daily_word("u1", _day(i), f"word{i}")

    h = word_history(db, "u1", today=TODAY, limit=2)

    assert [w.word for w in h.words] == ["word0", "word1"]
    assert h.has_more is True


def test_history_date_range(db, add_daily_word):
    for i in range(6):
        add_daily_word("u1", _day(i), f"word{i}")

    h = word_history(db, "u1", today=TODAY, start_date=TODAY - timedelta(days=4), end_date=TODAY - timedelta(days=2))

    assert [w.word for w in h.words] == ["word2", "word3", "word4"]


def test_history_search_matches_word_or_definition(db, add_daily_word):
    add_daily_word("u1", _day(0), "astute", definition="Having shrewd judgement.")
    add_daily_word("u1", _day(1), "candor", definition="Openness and honesty.")
    add_daily_word("u1", _day(2), "Shrewd", definition="Sharp in practical matters.")

    h = word_history(db, "u1", today=TODAY, search="SHREWD")

    assert [w.word for w in h.words] == ["astute", "Shrewd"]
    assert h.stats["total_words"] == 2


def test_history_for_new_user_is_empty(db):
    h = word_history(db, "nobody", today=date(2024, 1, 1))
    assert h.words == []
    assert h.stats["total_words"] == 0
