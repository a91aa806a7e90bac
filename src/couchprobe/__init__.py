from .domain.models import HealthStatus, Health, HealthBuilder, ClusterInfo, BucketInfo
from .health.couchbase import CouchbaseHealthIndicator
from .health.contributor import health, aggregate

__all__ = [
    "HealthStatus",
    "Health",
    "HealthBuilder",
    "ClusterInfo",
    "BucketInfo",
    "CouchbaseHealthIndicator",
    "health",
    "aggregate",
]
