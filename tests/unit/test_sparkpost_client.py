"""Tests for the SparkPost HTTP client.

Test Organization:
- TestSparkPostClientTemplates: Template retrieval
- TestSparkPostClientTransmissions: Transmission creation
- TestSparkPostClientErrors: HTTP and network failures
"""

import json

import httpx
import pytest

from courier.external.clients.sparkpost_client import SparkPostClient, SparkPostError
from courier.infrastructure.config import Settings


TEMPLATE_CONTENT = {
    "from": {"email": "{{fromEmail}}@{{fromDomain}}", "name": "Template Address"},
    "subject": "Template Subject",
    "reply_to": "{{replyTo}}",
    "html": "This is a template html test",
}


def make_client(handler) -> SparkPostClient:
    return SparkPostClient(api_key="api-key", transport=httpx.MockTransport(handler))


class TestSparkPostClientTemplates:
    """Test get_template."""

    def test_returns_template_content(self) -> None:
        """Test the template's content object is returned.

        Arrange: Transport answering GET /api/v1/templates/1234
        Act: get_template
        Assert: results.content is returned and the API key is sent
        """
        # Arrange
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"results": {"id": "1234", "content": TEMPLATE_CONTENT}})

        client = make_client(handler)

        # Act
        content = client.get_template("1234")

        # Assert
        assert content == TEMPLATE_CONTENT
        assert requests[0].method == "GET"
        assert requests[0].url.path == "/api/v1/templates/1234"
        assert requests[0].headers["Authorization"] == "api-key"

    def test_quotes_template_id(self) -> None:
        """Test template ids are URL-quoted into a single path segment."""
        # Arrange
        paths: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            paths.append(request.url.raw_path.decode())
            return httpx.Response(200, json={"results": {"content": {}}})

        client = make_client(handler)

        # Act
        client.get_template("a/b")

        # Assert
        assert paths == ["/api/v1/templates/a%2Fb"]


class TestSparkPostClientTransmissions:
    """Test create_transmission."""

    def test_posts_payload(self) -> None:
        """Test the payload is posted as JSON and results are returned."""
        # Arrange
        bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"results": {"id": "11668787484950529"}})

        client = make_client(handler)
        payload = {"content": {"template_id": "1234"}, "recipients": []}

        # Act
        result = client.create_transmission(payload)

        # Assert
        assert bodies == [payload]
        assert result == {"id": "11668787484950529"}

    def test_builds_from_settings(self, test_settings: Settings) -> None:
        """Test settings provide key, URL and timeout."""
        # Arrange & Act
        with SparkPostClient.from_settings(test_settings) as client:
            # Assert
            assert client._client.headers["Authorization"] == "test-sparkpost-key"
            assert client._client.base_url.path == "/api/v1/"
            assert client._client.timeout.read == 5.0


class TestSparkPostClientErrors:
    """Test error responses raise SparkPostError."""

    def test_raises_with_first_error(self) -> None:
        """Test SparkPost's first error message and code are carried."""
        # Arrange
        body = {"errors": [{"message": "resource not found", "code": "1600"}]}
        client = make_client(lambda request: httpx.Response(404, json=body))

        # Act & Assert
        with pytest.raises(SparkPostError) as exc_info:
            client.get_template("missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.error_code == "1600"
        assert exc_info.value.message == "resource not found"

    def test_raises_on_error_without_body(self) -> None:
        """Test an empty error body still raises with the HTTP status."""
        # Arrange
        client = make_client(lambda request: httpx.Response(400))

        # Act & Assert
        with pytest.raises(SparkPostError) as exc_info:
            client.create_transmission({})

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "HTTP 400"

    def test_raises_on_network_error(self) -> None:
        """Test transport failures become SparkPostError without a status."""

        # Arrange
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(handler)

        # Act & Assert
        with pytest.raises(SparkPostError) as exc_info:
            client.create_transmission({})

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, json=[{"id": "1"}]),
            httpx.Response(200, text="accepted"),
            httpx.Response(200, json={"id": "1"}),
            httpx.Response(200, json={"results": ["1"]}),
        ],
    )
    def test_raises_on_malformed_transmission_body(self, response: httpx.Response) -> None:
        """Test a 2xx body without a results object raises SparkPostError."""
        # Arrange
        client = make_client(lambda request: response)

        # Act & Assert
        with pytest.raises(SparkPostError):
            client.create_transmission({})

    def test_raises_on_template_without_content(self) -> None:
        """Test a template response missing its content raises SparkPostError."""
        # Arrange
        client = make_client(lambda request: httpx.Response(200, json={"results": {"id": "1"}}))

        # Act & Assert
        with pytest.raises(SparkPostError, match="1234"):
            client.get_template("1234")

    def test_raises_on_unexpected_error_shape(self) -> None:
        """Test an error body with non-list errors keeps the HTTP status."""
        # Arrange
        client = make_client(lambda request: httpx.Response(500, json={"errors": "boom"}))

        # Act & Assert
        with pytest.raises(SparkPostError) as exc_info:
            client.create_transmission({})

        assert exc_info.value.status_code == 500
        assert exc_info.value.error_code is None
