"""Email delivery through Postmark.

Postmark takes flat fields: comma-joined recipient strings, formatted
``"Name" <address>`` senders, and a template model for templated sends.
"""

from typing import Any

from courier.domain.exceptions import TransmissionException, UnsupportedContentException
from courier.domain.models.email import Address, Attachment, Email, SimpleContent, TemplatedContent
from courier.external.clients.postmark_client import PostmarkError
from courier.external.interfaces import ICourier, IPostmarkClient
from courier.infrastructure.logging.config import get_logger
from courier.utils.encoding import encode_attachment


logger = get_logger(__name__)

PROVIDER = "postmark"


class PostmarkCourier(ICourier):
    """Courier that delivers emails with a Postmark client.

    Supports simple and templated content. Opens are always tracked.
    """

    def __init__(self, client: IPostmarkClient) -> None:
        """Initialize Postmark courier.

        Args:
            client: Postmark client used for the actual API calls
        """
        self._client = client

    def deliver(self, email: Email) -> None:
        """Deliver an email through Postmark.

        Args:
            email: Email to deliver

        Raises:
            UnsupportedContentException: Content is neither simple nor templated
            TransmissionException: Postmark rejected the email or was unreachable
        """
        match email.content:
            case SimpleContent() as content:
                send = self._send_simple
            case TemplatedContent() as content:
                send = self._send_templated
            case _:
                logger.warning(
                    "unsupported_content", provider=PROVIDER, content_kind=email.content.kind
                )
                raise UnsupportedContentException(email.content)

        try:
            response = send(email, content)
        except PostmarkError as e:
            logger.error(
                "email_delivery_failed",
                provider=PROVIDER,
                error_code=e.error_code,
                status_code=e.status_code,
                error=e.message,
            )
            raise TransmissionException(
                e.message,
                provider=PROVIDER,
                error_code=e.error_code,
                status_code=e.status_code,
            ) from e

        logger.info("email_delivered", provider=PROVIDER, message_id=response.get("MessageID"))

    def _send_simple(self, email: Email, content: SimpleContent) -> dict[str, Any]:
        return self._client.send_email(
            from_=email.sender.formatted(),
            to=self._join_addresses(email.to),
            subject=email.subject,
            html_body=content.html if content.html is not None else "",
            text_body=content.text or None,
            tag=None,
            track_opens=True,
            reply_to=self._reply_to(email),
            cc=self._join_addresses(email.cc),
            bcc=self._join_addresses(email.bcc),
            headers=self._build_headers(email.headers),
            attachments=self._build_attachments(email.attachments),
            metadata=None,
        )

    def _send_templated(self, email: Email, content: TemplatedContent) -> dict[str, Any]:
        template_model = {"subject": email.subject, **content.variables}

        return self._client.send_email_with_template(
            from_=email.sender.formatted(),
            to=self._join_addresses(email.to),
            template_id=self._template_id(content.template_id),
            template_model=template_model,
            inline_css=False,
            tag=None,
            track_opens=True,
            reply_to=self._reply_to(email),
            cc=self._join_addresses(email.cc),
            bcc=self._join_addresses(email.bcc),
            headers=self._build_headers(email.headers),
            attachments=self._build_attachments(email.attachments),
            metadata=None,
        )

    @staticmethod
    def _template_id(template_id: str) -> int | str:
        """Plain ASCII digit strings are sent as integer ids, anything else as an alias."""
        if template_id.isascii() and template_id.isdigit():
            return int(template_id)
        return template_id

    @staticmethod
    def _join_addresses(addresses: list[Address]) -> str | None:
        if not addresses:
            return None
        return ",".join(address.email for address in addresses)

    @staticmethod
    def _reply_to(email: Email) -> str | None:
        if not email.reply_to:
            return None
        return ",".join(address.formatted() for address in email.reply_to)

    @staticmethod
    def _build_headers(headers: dict[str, str]) -> list[dict[str, str]] | None:
        if not headers:
            return None
        return [{"Name": name, "Value": value} for name, value in headers.items()]

    @staticmethod
    def _build_attachments(attachments: list[Attachment]) -> list[dict[str, Any]]:
        payload = []
        for attachment in attachments:
            content_type = f'{attachment.mime_type}; name="{attachment.name}"'
            if attachment.charset:
                content_type += f'; charset="{attachment.charset}"'

            payload.append(
                {
                    "Content": encode_attachment(attachment),
                    "ContentType": content_type,
                    "Name": attachment.name,
                    "ContentID": attachment.content_id,
                }
            )
        return payload
