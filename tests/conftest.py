import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from chat_notifier.firebase_client import FirebaseClient


@pytest.fixture(autouse=True)
def reset_firebase_client():
    FirebaseClient.reset()
    yield
    FirebaseClient.reset()
