"""Email delivery through SparkPost.

SparkPost takes a nested transmission payload. Templated emails are sent
by template id, except when they carry attachments: SparkPost's template
send path does not accept attachments, so the stored template is fetched
and its content is flattened into an inline payload instead.

Templates may declare a dynamic sender (``{{fromEmail}}@{{fromDomain}}``)
and a dynamic reply-to (``{{replyTo}}``). Both are resolved from the email
and exposed to the template as substitution data.
"""

from typing import Any

from courier.domain.exceptions import (
    TransmissionException,
    UnsupportedContentException,
    ValidationException,
)
from courier.domain.models.email import (
    Address,
    Email,
    EmptyContent,
    SimpleContent,
    TemplatedContent,
)
from courier.external.clients.sparkpost_client import SparkPostError
from courier.external.interfaces import ICourier, ISparkPostClient
from courier.infrastructure.logging.config import get_logger
from courier.utils.encoding import encode_attachment


logger = get_logger(__name__)

PROVIDER = "sparkpost"

FROM_EMAIL_PLACEHOLDER = "{{fromEmail}}@{{fromDomain}}"
REPLY_TO_PLACEHOLDER = "{{replyTo}}"


class SparkPostCourier(ICourier):
    """Courier that delivers emails with a SparkPost client.

    Supports simple, empty and templated content. Templates are fetched on
    every templated delivery; nothing is cached between calls.
    """

    def __init__(self, client: ISparkPostClient) -> None:
        """Initialize SparkPost courier.

        Args:
            client: SparkPost client used for the actual API calls
        """
        self._client = client

    def deliver(self, email: Email) -> None:
        """Deliver an email through SparkPost.

        Args:
            email: Email to deliver

        Raises:
            UnsupportedContentException: Content variant is not supported
            ValidationException: Template needs a reply-to the email lacks
            TransmissionException: Template fetch or transmission failed
        """
        match email.content:
            case SimpleContent(html=html, text=text):
                payload = self._build_simple_payload(email, html, text)
            case EmptyContent():
                payload = self._build_simple_payload(email, "", "")
            case TemplatedContent() as content:
                payload = self._build_templated_payload(email, content)
            case _:
                logger.warning(
                    "unsupported_content", provider=PROVIDER, content_kind=email.content.kind
                )
                raise UnsupportedContentException(email.content)

        try:
            response = self._client.create_transmission(payload)
        except SparkPostError as e:
            logger.error(
                "email_delivery_failed",
                provider=PROVIDER,
                error_code=e.error_code,
                status_code=e.status_code,
                error=e.message,
            )
            raise self._transmission_error(e) from e

        logger.info("email_delivered", provider=PROVIDER, transmission_id=response.get("id"))

    def _build_simple_payload(
        self, email: Email, html: str | None, text: str | None
    ) -> dict[str, Any]:
        content: dict[str, Any] = {
            "from": self._address(email.sender),
            "subject": email.subject,
            "html": html,
            "text": text,
            "attachments": self._build_attachments(email),
            "reply_to": email.reply_to[0].formatted() if email.reply_to else None,
        }
        if email.headers:
            content["headers"] = dict(email.headers)

        return self._with_recipients(email, {"content": content})

    def _build_templated_payload(self, email: Email, content: TemplatedContent) -> dict[str, Any]:
        template = self._fetch_template(content.template_id)

        substitution_data: dict[str, Any] = {
            **content.variables,
            "fromName": email.sender.name,
            "fromEmail": email.sender.local_part,
            "fromDomain": email.sender.domain,
            "subject": email.subject,
        }

        reply_to = template.get("reply_to")
        if reply_to == REPLY_TO_PLACEHOLDER:
            if not email.reply_to:
                logger.warning(
                    "template_reply_to_missing",
                    provider=PROVIDER,
                    template_id=content.template_id,
                )
                raise ValidationException(
                    f"Template {content.template_id} requires a reply-to address",
                    details={"template_id": content.template_id, "field": "reply_to"},
                )
            reply_to = email.reply_to[0].formatted()
        if email.reply_to:
            substitution_data["replyTo"] = email.reply_to[0].formatted()

        if not email.attachments:
            template_content: dict[str, Any] = {"template_id": content.template_id}
        else:
            sender = template.get("from")
            if isinstance(sender, dict) and sender.get("email") == FROM_EMAIL_PLACEHOLDER:
                sender = self._address(email.sender)

            template_content = {
                "from": sender,
                "subject": template.get("subject"),
                "html": template.get("html"),
                "text": template.get("text"),
                "attachments": self._build_attachments(email),
                "reply_to": reply_to,
                "headers": template.get("headers"),
            }

        return self._with_recipients(
            email,
            {"content": template_content, "substitution_data": substitution_data},
        )

    def _fetch_template(self, template_id: str) -> dict[str, Any]:
        try:
            return self._client.get_template(template_id)
        except SparkPostError as e:
            logger.error(
                "template_fetch_failed",
                provider=PROVIDER,
                template_id=template_id,
                status_code=e.status_code,
                error=e.message,
            )
            raise self._transmission_error(e) from e

    def _with_recipients(self, email: Email, payload: dict[str, Any]) -> dict[str, Any]:
        payload["recipients"] = self._recipients(email.to)
        # cc/bcc keys are omitted entirely when empty
        if email.cc:
            payload["cc"] = self._recipients(email.cc)
        if email.bcc:
            payload["bcc"] = self._recipients(email.bcc)
        return payload

    @staticmethod
    def _address(address: Address) -> dict[str, str | None]:
        return {"name": address.name, "email": address.email}

    def _recipients(self, addresses: list[Address]) -> list[dict[str, Any]]:
        return [{"address": self._address(address)} for address in addresses]

    @staticmethod
    def _build_attachments(email: Email) -> list[dict[str, str]]:
        return [
            {
                "name": attachment.name,
                "type": attachment.mime_type,
                "data": encode_attachment(attachment),
            }
            for attachment in email.attachments
        ]

    @staticmethod
    def _transmission_error(error: SparkPostError) -> TransmissionException:
        return TransmissionException(
            error.message,
            provider=PROVIDER,
            error_code=error.error_code,
            status_code=error.status_code,
        )
