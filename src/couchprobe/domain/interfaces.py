from typing import Protocol, runtime_checkable
from .models import BucketInfo, ClusterInfo, Health

@runtime_checkable
class CouchbaseOperations(Protocol):
    """
    Client handle already bound to a cluster and a bucket.
    Implementations must be safe for concurrent use.
    """

    def get_cluster_info(self) -> ClusterInfo:
        """Cached cluster metadata. Local and cheap; never blocks on the network."""
        ...

    async def get_bucket_info(self) -> BucketInfo:
        """Fetch bucket metadata. Cancellable."""
        ...

@runtime_checkable
class HealthIndicator(Protocol):
    """
    Anything that can report its own health.
    check() returns a Health on success and raises on failure.
    """

    async def check(self) -> Health:
        ...
