"""Global test configuration and fixtures.

Fixture Scoping Strategy:
- session: Test settings (immutable)
- function: Attachment files and provider client doubles (need fresh state)
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from courier.external.interfaces import IPostmarkClient, ISparkPostClient
from courier.infrastructure.config import Settings
from tests.factories import ATTACHMENT_BYTES


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Create test settings.

    Returns:
        Settings instance configured for testing
    """
    return Settings(
        app_env="testing",
        log_level="DEBUG",
        postmark_server_token="test-postmark-token",
        sparkpost_api_key="test-sparkpost-key",
        provider_timeout=5.0,
    )


@pytest.fixture
def attachment_file(tmp_path: Path) -> Path:
    """Write a small text file to attach.

    Returns:
        Path of a ``.txt`` file containing ``ATTACHMENT_BYTES``
    """
    path = tmp_path / "attachment_test.txt"
    path.write_bytes(ATTACHMENT_BYTES)
    return path


@pytest.fixture
def postmark_client() -> MagicMock:
    """Create Postmark client double returning a successful response."""
    client = MagicMock(spec=IPostmarkClient)
    success = {"ErrorCode": 0, "Message": "OK", "MessageID": "0a129aee-e1cd-480d-b08d-4f48548ff48d"}
    client.send_email.return_value = success
    client.send_email_with_template.return_value = success
    return client


@pytest.fixture
def sparkpost_client() -> MagicMock:
    """Create SparkPost client double returning a successful transmission."""
    client = MagicMock(spec=ISparkPostClient)
    client.create_transmission.return_value = {
        "total_rejected_recipients": 0,
        "total_accepted_recipients": 1,
        "id": "11668787484950529",
    }
    return client
