"""
Shared builders for message documents, user snapshots, and clients.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

from chat_notifier.schemas import UserProfile

NOW = datetime(2024, 6, 15, 13, 30, 0, tzinfo=timezone.utc)
CHAT_ROOM_ID = "room_1"
MESSAGE_ID = "msg_1"


def build_message(**overrides) -> dict:
    data = {"senderId": "A", "receiverId": "B", "text": "hi"}
    data.update(overrides)
    return data


def minutes_ago(minutes: int) -> datetime:
    return NOW - timedelta(minutes=minutes)


def build_firebase_client(users: dict) -> MagicMock:
    """Firebase client double whose get_user serves the given profiles."""
    client = MagicMock()
    client.get_user.side_effect = lambda user_id: users.get(user_id, UserProfile())
    client.send_notification.return_value = "projects/test/messages/1"
    return client


def build_snapshot(data: dict | None) -> MagicMock:
    snapshot = MagicMock()
    snapshot.exists = data is not None
    snapshot.to_dict.return_value = data
    return snapshot
