import json
import logging
from typing import Optional

import firebase_admin
import google.cloud.firestore
from firebase_admin import credentials, firestore, messaging
from firebase_admin.exceptions import FirebaseError

from .config import settings
from .schemas import NotificationPayload, UserProfile

logger = logging.getLogger(__name__)


class FirebaseClient:
    """Firebase client for Firestore lookups and FCM delivery."""

    _instance = None

    def __new__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super(FirebaseClient, cls).__new__(cls)
            cls._instance.initialized = False
        return cls._instance

    def __init__(self, app: Optional[firebase_admin.App] = None,
                 firestore_db: Optional[google.cloud.firestore.Client] = None):
        """
        Initialize the Firebase Admin SDK once per process.

        Args:
            app: Already initialized Firebase app, mainly for tests
            firestore_db: Firestore client to use instead of the app's default
        """
        if self.initialized:
            return
        self.app = app
        self.firestore_db = firestore_db
        if self.firestore_db is None:
            self.connect()
        self.initialized = True

    @classmethod
    def reset(cls) -> None:
        """Forget the process-wide instance."""
        cls._instance = None

    def connect(self) -> None:
        """Reuse the default Firebase app or initialize a new one."""
        try:
            if self.app is None:
                try:
                    self.app = firebase_admin.get_app()
                    logger.info("Retrieved existing Firebase app")
                except ValueError:
                    self.app = firebase_admin.initialize_app(credential=self._credential())
                    logger.info(f"Initialized Firebase app: {self.app.name}")
            self.firestore_db = firestore.client(self.app)
        except Exception as e:
            logger.error(f"Failed to initialize Firebase: {str(e)}")
            raise

    @staticmethod
    def _credential():
        cert_json = settings.firebase_secret
        if not cert_json:
            # Application Default Credentials inside the Functions runtime
            return None
        cert_dict = json.loads(cert_json)
        if isinstance(cert_dict, str):
            cert_dict = json.loads(cert_dict)
        return credentials.Certificate(cert_dict)

    def get_user(self, user_id: str) -> UserProfile:
        """
        Read a user document.

        Args:
            user_id: The user's ID

        Returns:
            UserProfile, with every field unset if the document does not exist
        """
        try:
            user = self.firestore_db.collection(settings.users_collection).document(user_id).get()
        except Exception as e:
            logger.error(f"Error fetching user {user_id}: {str(e)}")
            raise
        return UserProfile.from_snapshot(user)

    def send_notification(self, payload: NotificationPayload) -> str:
        """
        Send a push notification to a single device token.

        Returns:
            FCM message ID
        """
        try:
            message_id = messaging.send(payload.to_message(), app=self.app)
        except FirebaseError as e:
            logger.error(f"Firebase error sending notification: {str(e)}")
            raise
        logger.info(f"Sent notification {message_id} for chat room {payload.data.chatRoomId}")
        return message_id

    def mark_notification_sent(self, message_ref) -> None:
        """Flag the message document so it is never notified again."""
        try:
            message_ref.update({'notificationSent': True})
        except Exception as e:
            logger.error(f"Error marking message {message_ref.path} as notified: {str(e)}")
            raise
