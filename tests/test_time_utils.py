from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from google.api_core.datetime_helpers import DatetimeWithNanoseconds

from chat_notifier.time_utils import EPOCH, is_away, to_datetime
from tests.fixtures import NOW


def test_to_datetime_handles_missing_value():
    assert to_datetime(None) is None


def test_to_datetime_treats_naive_as_utc():
    assert to_datetime(datetime(2024, 1, 1, 12, 0)) == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_to_datetime_accepts_firestore_timestamp():
    value = DatetimeWithNanoseconds(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
    assert to_datetime(value) == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_to_datetime_accepts_object_with_datetime_attribute():
    value = SimpleNamespace(datetime=datetime(2024, 1, 1, tzinfo=timezone.utc))
    assert to_datetime(value) == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_to_datetime_rejects_unknown_types():
    with pytest.raises(TypeError):
        to_datetime("yesterday")


def test_missing_last_active_counts_as_epoch():
    assert is_away(None, 300, now=NOW)
    assert is_away(EPOCH, 300, now=NOW)


def test_is_away_threshold():
    assert is_away(NOW - timedelta(minutes=10), 300, now=NOW)
    assert not is_away(NOW - timedelta(minutes=1), 300, now=NOW)
    assert not is_away(NOW - timedelta(minutes=5), 300, now=NOW)


def test_to_datetime_accepts_object_with_to_datetime_method():
    class ProtoTimestamp:
        def to_datetime(self):
            return datetime(2024, 1, 1, 8, 0)

    assert to_datetime(ProtoTimestamp()) == datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)
