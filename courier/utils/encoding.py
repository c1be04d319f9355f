"""Encoding helpers for provider payloads."""

import base64

from courier.domain.models.email import Attachment


def encode_attachment(attachment: Attachment) -> str:
    """Read an attachment and return its contents as base64 text.

    The source file is read and closed here, so no handle outlives the call.
    """
    return base64.b64encode(attachment.read_bytes()).decode("ascii")
