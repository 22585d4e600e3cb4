from datetime import datetime, timedelta, timezone

from stadium_orders.core import timezone_utils
from stadium_orders.core.config import settings


def test_ensure_utc_attaches_and_converts():
    naive = datetime(2026, 5, 1, 18, 30)
    assert timezone_utils.ensure_utc(naive) == naive.replace(tzinfo=timezone.utc)
    plus_two = datetime(2026, 5, 1, 20, 30, tzinfo=timezone(timedelta(hours=2)))
    assert timezone_utils.ensure_utc(plus_two).hour == 18
    assert timezone_utils.ensure_utc(None) is None


def test_to_venue_time_defaults_to_utc():
    value = timezone_utils.to_venue_time(datetime(2026, 5, 1, 18, 30))
    assert value.utcoffset() == timedelta(0)
    assert timezone_utils.to_venue_time(None) is None


def test_unknown_venue_timezone_falls_back_to_utc(monkeypatch):
    monkeypatch.setattr(settings, "VENUE_TIMEZONE", "Nowhere/Stadium")
    assert timezone_utils.venue_tz() is timezone.utc
