from enum import Enum
from typing import Any, Optional

from firebase_admin import messaging
from pydantic import BaseModel, ConfigDict


class NotifyOutcome(str, Enum):
    NO_DATA = "no_data"
    ALREADY_SENT = "already_sent"
    SYSTEM_MESSAGE = "system_message"
    NO_TOKEN = "no_token"
    RECIPIENT_ACTIVE = "recipient_active"
    SENT = "sent"


class ChatMessage(BaseModel):
    """Fields of a chatrooms/{chatRoomId}/messages/{messageId} document used here"""
    model_config = ConfigDict(extra="ignore")

    senderId: str
    receiverId: str
    notificationSent: Optional[bool] = False
    systemMessage: Optional[bool] = False


class UserProfile(BaseModel):
    """Fields of a users/{userId} document used here"""
    model_config = ConfigDict(extra="ignore")

    fcmToken: Optional[str] = None
    # Firestore timestamp; converted with time_utils.to_datetime
    lastActive: Optional[Any] = None
    nickname: Optional[str] = None

    @classmethod
    def from_snapshot(cls, snapshot) -> "UserProfile":
        if snapshot is None or not snapshot.exists:
            return cls()
        return cls.model_validate(snapshot.to_dict() or {})


class NotificationData(BaseModel):
    chatRoomId: str
    senderId: str
    click_action: str


class NotificationPayload(BaseModel):
    title: str
    body: str
    data: NotificationData
    token: str

    def to_message(self) -> messaging.Message:
        return messaging.Message(
            notification=messaging.Notification(
                title=self.title,
                body=self.body
            ),
            data=self.data.model_dump(),
            token=self.token
        )
