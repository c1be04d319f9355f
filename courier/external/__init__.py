"""Provider couriers and the interfaces they implement."""

from courier.external.interfaces import ICourier, IPostmarkClient, ISparkPostClient
from courier.external.postmark_courier import PostmarkCourier
from courier.external.sparkpost_courier import SparkPostCourier


__all__ = [
    "ICourier",
    "IPostmarkClient",
    "ISparkPostClient",
    "PostmarkCourier",
    "SparkPostCourier",
]
