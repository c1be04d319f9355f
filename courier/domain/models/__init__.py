"""Domain models."""

from courier.domain.models.email import (
    Address,
    Attachment,
    Content,
    Email,
    EmptyContent,
    SimpleContent,
    TemplatedContent,
)


__all__ = [
    "Address",
    "Attachment",
    "Content",
    "Email",
    "EmptyContent",
    "SimpleContent",
    "TemplatedContent",
]
