import os
from pathlib import Path
from unittest.mock import Mock

import pytest
from dotenv import load_dotenv

# Load environment variables for tests before any app module reads settings
load_dotenv(Path(__file__).resolve().parents[1] / ".env.test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("EMAIL_ENABLED", "false")


# Patch outgoing email for all tests
@pytest.fixture(autouse=True)
def sent_emails(monkeypatch):
    """Replace the SMTP sender used by booking notifications with a Mock."""
    mock = Mock(return_value=True)
    monkeypatch.setattr("app.notifications.booking_emails.send_email", mock)
    return mock
