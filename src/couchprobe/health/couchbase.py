import asyncio
import logging
from datetime import timedelta
from typing import Iterable
from ..domain.interfaces import CouchbaseOperations
from ..domain.models import Health, HealthBuilder

logger = logging.getLogger(__name__)

def _comma_delimited(values: Iterable[str]) -> str:
    return ",".join(values)

class CouchbaseHealthIndicator:
    """
    Reports cluster versions and the nodes serving the bound bucket.

    The timeout only bounds the bucket-info fetch. Cluster info comes from
    the client's cached metadata and is read directly.
    Failures (including TimeoutError) propagate to the caller; see
    health.contributor.health() for the DOWN translation.
    """
    def __init__(self, operations: CouchbaseOperations, timeout: timedelta):
        if timeout < timedelta(0):
            raise ValueError(f"Timeout must not be negative: {timeout}")
        self.operations = operations
        self.timeout = timeout

    async def check(self) -> Health:
        cluster = self.operations.get_cluster_info()
        versions = _comma_delimited(cluster.all_versions)

        bucket = await asyncio.wait_for(
            self.operations.get_bucket_info(),
            timeout=self.timeout.total_seconds(),
        )
        nodes = _comma_delimited(bucket.node_list)
        logger.debug("Bucket '%s' served by [%s]", bucket.name, nodes)

        return (
            HealthBuilder()
            .up()
            .with_detail("versions", versions)
            .with_detail("nodes", nodes)
            .build()
        )
