from datetime import datetime, timedelta, timezone

import pytest

from onewordaday.core.clock import utc_now, utc_today


@pytest.mark.unit
def test_utc_now_is_naive_utc():
    now = utc_now()
    assert now.tzinfo is None
    assert abs(now - datetime.now(timezone.utc).replace(tzinfo=None)) < timedelta(seconds=5)


def test_stored_timestamps_use_utc_clock(db, add_bank_word):
    before = utc_now()
    entry = add_bank_word("w1", "astute", 4)
    assert before <= entry.created_at <= utc_now()


@pytest.mark.unit
def test_utc_today_matches_utc_now():
    assert utc_today() in {utc_now().date(), (utc_now() - timedelta(seconds=5)).date()}
