"""Synchronous Postmark API client.

Implements the subset of the Postmark REST API that PostmarkCourier needs:
``POST /email`` and ``POST /email/withTemplate``.
"""

from typing import Any

import httpx

from courier.external.interfaces import IPostmarkClient
from courier.infrastructure.config import Settings
from courier.infrastructure.logging.config import get_logger


logger = get_logger(__name__)

POSTMARK_API_URL = "https://api.postmarkapp.com"


class PostmarkError(Exception):
    """Error reported by the Postmark API or raised while reaching it.

    Attributes:
        message: Postmark error message
        error_code: Postmark API error code (``ErrorCode``), if any
        status_code: HTTP status code, if a response was received
    """

    def __init__(
        self, message: str, error_code: int | None = None, status_code: int | None = None
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


def _compact(fields: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in fields.items() if value is not None}


def _json_object(response: httpx.Response) -> dict[str, Any] | None:
    try:
        data = response.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


class PostmarkClient(IPostmarkClient):
    """Postmark client backed by ``httpx``.

    Keyword arguments are translated to Postmark's PascalCase JSON fields;
    ``None`` values are left out of the request body.
    """

    def __init__(
        self,
        server_token: str,
        base_url: str = POSTMARK_API_URL,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize Postmark client.

        Args:
            server_token: Postmark server API token
            base_url: Postmark API base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self._client = httpx.Client(
            base_url=base_url,
            headers={
                "Accept": "application/json",
                "X-Postmark-Server-Token": server_token,
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "PostmarkClient":
        return cls(
            server_token=settings.postmark_server_token,
            base_url=settings.postmark_api_url,
            timeout=settings.provider_timeout,
        )

    def send_email(
        self,
        from_: str,
        to: str,
        subject: str,
        html_body: str | None = None,
        text_body: str | None = None,
        tag: str | None = None,
        track_opens: bool | None = None,
        reply_to: str | None = None,
        cc: str | None = None,
        bcc: str | None = None,
        headers: list[dict[str, str]] | None = None,
        attachments: list[dict[str, Any]] | None = None,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        body = _compact(
            {
                "From": from_,
                "To": to,
                "Cc": cc,
                "Bcc": bcc,
                "Subject": subject,
                "Tag": tag,
                "HtmlBody": html_body,
                "TextBody": text_body,
                "ReplyTo": reply_to,
                "Headers": headers,
                "TrackOpens": track_opens,
                "Attachments": attachments,
                "Metadata": metadata,
            }
        )
        return self._post("/email", body)

    def send_email_with_template(
        self,
        from_: str,
        to: str,
        template_id: int | str,
        template_model: dict[str, Any],
        inline_css: bool = True,
        tag: str | None = None,
        track_opens: bool | None = None,
        reply_to: str | None = None,
        cc: str | None = None,
        bcc: str | None = None,
        headers: list[dict[str, str]] | None = None,
        attachments: list[dict[str, Any]] | None = None,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        # Postmark addresses templates either by numeric id or by alias
        template_key = "TemplateId" if isinstance(template_id, int) else "TemplateAlias"
        body = _compact(
            {
                "From": from_,
                "To": to,
                "Cc": cc,
                "Bcc": bcc,
                template_key: template_id,
                "TemplateModel": template_model,
                "InlineCss": inline_css,
                "Tag": tag,
                "ReplyTo": reply_to,
                "Headers": headers,
                "TrackOpens": track_opens,
                "Attachments": attachments,
                "Metadata": metadata,
            }
        )
        return self._post("/email/withTemplate", body)

    def _post(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        """Post a JSON body and return the decoded response.

        Raises:
            PostmarkError: On transport failure, non-2xx status, a body that
                is not a JSON object, or a non-zero ``ErrorCode``
        """
        try:
            response = self._client.post(path, json=body)
        except httpx.HTTPError as e:
            logger.warning("postmark_request_failed", path=path, error=str(e))
            raise PostmarkError(f"Postmark request failed: {e}") from e

        data = _json_object(response)
        if response.is_error:
            error_body = data or {}
            raise PostmarkError(
                error_body.get("Message") or response.text or f"HTTP {response.status_code}",
                error_code=error_body.get("ErrorCode"),
                status_code=response.status_code,
            )
        if data is None:
            raise PostmarkError(
                "Malformed Postmark response body", status_code=response.status_code
            )

        error_code = data.get("ErrorCode")
        if error_code:
            raise PostmarkError(
                data.get("Message") or f"Postmark error {error_code}",
                error_code=error_code,
                status_code=response.status_code,
            )

        logger.debug("postmark_request_succeeded", path=path, message_id=data.get("MessageID"))
        return data

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "PostmarkClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
