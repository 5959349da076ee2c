import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from .config import settings
from .firebase_client import FirebaseClient
from .schemas import ChatMessage, NotificationData, NotificationPayload, NotifyOutcome, UserProfile
from .time_utils import is_away

logger = logging.getLogger(__name__)


class MessageNotifier:
    """Sends a push notification for a new chat message when the receiver is away."""

    def __init__(self, firebase_client: FirebaseClient):
        self.firebase = firebase_client

    async def handle(self,
                     message_data: Optional[Dict[str, Any]],
                     chat_room_id: str,
                     message_id: str,
                     message_ref,
                     now: Optional[datetime] = None) -> NotifyOutcome:
        """
        Handle a newly created message document.

        Args:
            message_data: Document fields, or None if the event carried no snapshot
            chat_room_id: chatRoomId path parameter
            message_id: messageId path parameter
            message_ref: DocumentReference of the created message
            now: Reference time for the away check, defaults to the current time

        Returns:
            What the handler decided; the trigger runtime ignores it
        """
        if message_data is None:
            logger.info(f"No data for message {message_id}, skipping")
            return NotifyOutcome.NO_DATA

        message = ChatMessage.model_validate(message_data)
        if message.notificationSent:
            logger.info(f"Message {message_id} already notified")
            return NotifyOutcome.ALREADY_SENT
        if message.systemMessage:
            logger.info(f"Message {message_id} is a system message")
            return NotifyOutcome.SYSTEM_MESSAGE

        sender, receiver = await asyncio.gather(
            asyncio.to_thread(self.firebase.get_user, message.senderId),
            asyncio.to_thread(self.firebase.get_user, message.receiverId),
        )

        if not receiver.fcmToken:
            logger.info(f"Receiver {message.receiverId} has no FCM token")
            return NotifyOutcome.NO_TOKEN

        if not is_away(receiver.lastActive, settings.away_threshold_seconds, now):
            logger.info(f"Receiver {message.receiverId} is active, skipping notification")
            return NotifyOutcome.RECIPIENT_ACTIVE

        payload = build_payload(chat_room_id, message, sender, receiver)
        await asyncio.to_thread(self.firebase.send_notification, payload)
        # Not written before dispatch: a retry after a failed write sends again
        await asyncio.to_thread(self.firebase.mark_notification_sent, message_ref)

        logger.info(f"Notified {message.receiverId} of message {message_id} in {chat_room_id}")
        return NotifyOutcome.SENT


def build_payload(chat_room_id: str,
                  message: ChatMessage,
                  sender: UserProfile,
                  receiver: UserProfile) -> NotificationPayload:
    return NotificationPayload(
        title=sender.nickname or settings.default_notification_title,
        body=settings.notification_body,
        data=NotificationData(
            chatRoomId=chat_room_id,
            senderId=message.senderId,
            click_action=settings.click_action
        ),
        token=receiver.fcmToken
    )
