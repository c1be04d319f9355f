"""External service interface definitions.

This module defines the courier contract and the narrow provider-client
interfaces each courier depends on. Keeping the provider clients behind
these interfaces lets couriers run against test doubles without
reproducing a vendor SDK's full surface.
"""

from abc import ABC, abstractmethod
from typing import Any

from courier.domain.models.email import Email


class ICourier(ABC):
    """Abstract interface for email delivery providers.

    Defines the contract for delivering an email through a provider
    (Postmark, SparkPost, ...) while keeping callers provider-agnostic.
    """

    @abstractmethod
    def deliver(self, email: Email) -> None:
        """Deliver an email through the provider.

        Args:
            email: Fully built email

        Raises:
            UnsupportedContentException: Content variant cannot be mapped
            ValidationException: Email lacks data the provider setup requires
            TransmissionException: Provider call failed
        """


class IPostmarkClient(ABC):
    """Operations of the Postmark API used by PostmarkCourier.

    Implementations raise ``PostmarkError`` on failure.
    """

    @abstractmethod
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
        """Send a single email with literal bodies.

        Returns:
            Postmark response body (includes ``MessageID``)
        """

    @abstractmethod
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
        """Send a single email rendered from a server-side template.

        Args:
            template_id: Numeric template id, or a template alias string

        Returns:
            Postmark response body (includes ``MessageID``)
        """


class ISparkPostClient(ABC):
    """Operations of the SparkPost API used by SparkPostCourier.

    Implementations raise ``SparkPostError`` on failure.
    """

    @abstractmethod
    def get_template(self, template_id: str) -> dict[str, Any]:
        """Fetch a stored template.

        Returns:
            The template's ``content`` object (from, subject, reply_to,
            html, text, headers)
        """

    @abstractmethod
    def create_transmission(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Create a transmission and wait for the provider's answer.

        Returns:
            The ``results`` object of the response (includes ``id``)
        """
