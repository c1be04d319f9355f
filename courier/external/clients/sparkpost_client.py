"""Synchronous SparkPost API client.

Implements the two SparkPost REST operations SparkPostCourier needs:
reading a stored template and creating a transmission.
"""

from typing import Any
from urllib.parse import quote

import httpx

from courier.external.interfaces import ISparkPostClient
from courier.infrastructure.config import Settings
from courier.infrastructure.logging.config import get_logger


logger = get_logger(__name__)

SPARKPOST_API_URL = "https://api.sparkpost.com/api/v1"


class SparkPostError(Exception):
    """Error reported by the SparkPost API or raised while reaching it.

    Attributes:
        message: First error message returned by SparkPost
        error_code: SparkPost error code, if any
        status_code: HTTP status code, if a response was received
    """

    def __init__(
        self, message: str, error_code: str | None = None, status_code: int | None = None
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


def _json_object(response: httpx.Response) -> dict[str, Any] | None:
    try:
        data = response.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def _first_error(data: dict[str, Any] | None) -> dict[str, Any]:
    errors = data.get("errors") if data else None
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        return errors[0]
    return {}


class SparkPostClient(ISparkPostClient):
    """SparkPost client backed by ``httpx``."""

    def __init__(
        self,
        api_key: str,
        base_url: str = SPARKPOST_API_URL,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize SparkPost client.

        Args:
            api_key: SparkPost API key
            base_url: SparkPost API base URL, including the ``/api/v1`` prefix
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self._client = httpx.Client(
            base_url=base_url,
            headers={
                "Accept": "application/json",
                "Authorization": api_key,
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "SparkPostClient":
        return cls(
            api_key=settings.sparkpost_api_key,
            base_url=settings.sparkpost_api_url,
            timeout=settings.provider_timeout,
        )

    def get_template(self, template_id: str) -> dict[str, Any]:
        path = f"/templates/{quote(template_id, safe='')}"
        results = self._results(self._request("GET", path))
        content = results.get("content")
        if not isinstance(content, dict):
            raise SparkPostError(f"SparkPost template {template_id} has no content")
        return dict(content)

    def create_transmission(self, payload: dict[str, Any]) -> dict[str, Any]:
        return self._results(self._request("POST", "/transmissions", json=payload))

    @staticmethod
    def _results(data: dict[str, Any]) -> dict[str, Any]:
        results = data.get("results")
        if not isinstance(results, dict):
            raise SparkPostError("Malformed SparkPost response body: missing results")
        return dict(results)

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        """Send a request and return the decoded JSON body.

        Raises:
            SparkPostError: On transport failure, non-2xx status, or a body
                that is not a JSON object
        """
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("sparkpost_request_failed", method=method, path=path, error=str(e))
            raise SparkPostError(f"SparkPost request failed: {e}") from e

        data = _json_object(response)
        if response.is_error:
            first = _first_error(data)
            raise SparkPostError(
                first.get("message") or response.text or f"HTTP {response.status_code}",
                error_code=first.get("code"),
                status_code=response.status_code,
            )
        if data is None:
            raise SparkPostError(
                "Malformed SparkPost response body", status_code=response.status_code
            )

        logger.debug("sparkpost_request_succeeded", method=method, path=path)
        return data

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "SparkPostClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
