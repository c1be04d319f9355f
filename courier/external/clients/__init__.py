"""HTTP clients for the supported email providers."""

from courier.external.clients.postmark_client import PostmarkClient, PostmarkError
from courier.external.clients.sparkpost_client import SparkPostClient, SparkPostError


__all__ = ["PostmarkClient", "PostmarkError", "SparkPostClient", "SparkPostError"]
