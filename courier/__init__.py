"""Courier: provider-agnostic transactional email delivery."""

from courier.domain.exceptions import (
    CourierException,
    TransmissionException,
    UnsupportedContentException,
    ValidationException,
)
from courier.domain.models import (
    Address,
    Attachment,
    Content,
    Email,
    EmptyContent,
    SimpleContent,
    TemplatedContent,
)
from courier.external import ICourier, PostmarkCourier, SparkPostCourier


__all__ = [
    "Address",
    "Attachment",
    "Content",
    "CourierException",
    "Email",
    "EmptyContent",
    "ICourier",
    "PostmarkCourier",
    "SimpleContent",
    "SparkPostCourier",
    "TemplatedContent",
    "TransmissionException",
    "UnsupportedContentException",
    "ValidationException",
]
