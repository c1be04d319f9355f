"""Canonical email model shared by all couriers.

Emails are immutable once built. Couriers read them and project them onto a
provider's wire format; they never modify them.
"""

import mimetypes
from pathlib import Path
from typing import Annotated, Any, Literal, Union, cast

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator


DEFAULT_MIME_TYPE = "application/octet-stream"


class Address(BaseModel):
    """An email address with an optional display name."""

    model_config = ConfigDict(frozen=True)

    email: EmailStr = Field(..., description="Well-formed email address")
    name: str | None = Field(None, description="Optional display name")

    def formatted(self) -> str:
        """Format as ``"Name" <email>`` or the bare address when unnamed.

        Example:
            >>> Address(email="reply.to@test.com", name="Replier").formatted()
            '"Replier" <reply.to@test.com>'
        """
        if self.name:
            return f'"{self.name}" <{self.email}>'
        return self.email

    @property
    def local_part(self) -> str:
        return self.email.rsplit("@", 1)[0]

    @property
    def domain(self) -> str:
        return self.email.rsplit("@", 1)[1]


class Attachment(BaseModel):
    """A file attached to an email.

    The source is either a file ``path`` or in-memory ``data``. File contents
    are only read when a courier serializes the attachment.

    A ``content_id`` marks the attachment as inline, so HTML bodies can refer
    to it with ``cid:<content_id>``.
    """

    model_config = ConfigDict(frozen=True)

    path: Path | None = None
    data: bytes | None = None
    name: str = ""
    content_id: str | None = None
    charset: str | None = None
    content_type: str | None = None

    @model_validator(mode="before")
    @classmethod
    def default_name_from_path(cls, values: Any) -> Any:
        if isinstance(values, dict) and not values.get("name") and values.get("path"):
            values = {**values, "name": Path(values["path"]).name}
        return values

    @model_validator(mode="after")
    def validate_source(self) -> "Attachment":
        if (self.path is None) == (self.data is None):
            raise ValueError("Attachment requires exactly one of path or data")
        if not self.name:
            raise ValueError("Attachment built from data requires a name")
        return self

    @property
    def is_inline(self) -> bool:
        return self.content_id is not None

    @property
    def mime_type(self) -> str:
        """Explicit content type, else guessed from the file name."""
        if self.content_type:
            return self.content_type
        source = str(self.path) if self.path is not None else self.name
        guessed, _ = mimetypes.guess_type(source)
        return guessed or DEFAULT_MIME_TYPE

    def read_bytes(self) -> bytes:
        if self.path is not None:
            return self.path.read_bytes()
        return cast("bytes", self.data)


class Content(BaseModel):
    """Base class for email content variants.

    Couriers handle the variants defined here and reject any other subclass
    with ``UnsupportedContentException``.
    """

    model_config = ConfigDict(frozen=True)

    kind: str


class SimpleContent(Content):
    """Literal HTML and/or text bodies."""

    kind: Literal["simple"] = "simple"
    html: str | None = None
    text: str | None = None


class TemplatedContent(Content):
    """A provider-side template rendered with substitution variables."""

    kind: Literal["templated"] = "templated"
    template_id: str
    variables: dict[str, Any] = Field(default_factory=dict)


class EmptyContent(Content):
    """No body at all."""

    kind: Literal["empty"] = "empty"


# Known variants are selected by their "kind" tag. Any other Content subclass
# is kept as given.
KnownContent = Annotated[
    SimpleContent | TemplatedContent | EmptyContent, Field(discriminator="kind")
]
EmailContent = Annotated[Union[KnownContent, Content], Field(union_mode="left_to_right")]


class Email(BaseModel):
    """A complete email ready to hand to a courier.

    Attributes:
        subject: Subject line
        sender: From address
        to: Primary recipients (at least one)
        cc: Carbon-copy recipients
        bcc: Blind carbon-copy recipients
        reply_to: Reply-to addresses
        content: One content variant
        attachments: File attachments, regular or inline
        headers: Custom header name to value mapping
    """

    model_config = ConfigDict(frozen=True)

    subject: str
    sender: Address
    to: list[Address] = Field(..., min_length=1)
    cc: list[Address] = Field(default_factory=list)
    bcc: list[Address] = Field(default_factory=list)
    reply_to: list[Address] = Field(default_factory=list)
    content: EmailContent = Field(default_factory=EmptyContent)
    attachments: list[Attachment] = Field(default_factory=list)
    headers: dict[str, str] = Field(default_factory=dict)
