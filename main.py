import asyncio
import logging

from firebase_functions import firestore_fn

from chat_notifier.firebase_client import FirebaseClient
from chat_notifier.logging_config import setup_logging
from chat_notifier.notifier import MessageNotifier

setup_logging()
logger = logging.getLogger(__name__)

# Process-wide Firebase app, initialized before the trigger is registered
firebase_client = FirebaseClient()
notifier = MessageNotifier(firebase_client)


@firestore_fn.on_document_created(document="chatrooms/{chatRoomId}/messages/{messageId}")
def send_message_notification(event: firestore_fn.Event[firestore_fn.DocumentSnapshot | None]) -> None:
    """Push a notification for a new chat message if the receiver is away."""
    snapshot = event.data
    chat_room_id = event.params["chatRoomId"]
    message_id = event.params["messageId"]

    outcome = asyncio.run(notifier.handle(
        snapshot.to_dict() if snapshot is not None else None,
        chat_room_id,
        message_id,
        snapshot.reference if snapshot is not None else None,
    ))
    logger.info(f"Message {chat_room_id}/{message_id}: {outcome.value}")
