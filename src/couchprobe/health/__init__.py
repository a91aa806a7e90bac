from .couchbase import CouchbaseHealthIndicator
from .contributor import health, aggregate

__all__ = ["CouchbaseHealthIndicator", "health", "aggregate"]
