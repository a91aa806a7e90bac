import asyncio
import pytest
from couchprobe.domain.models import BucketInfo, ClusterInfo

class FakeOperations:
    """In-memory CouchbaseOperations for probe tests."""
    def __init__(self, versions=(), nodes=(), bucket_delay=0.0, bucket_error=None, bucket_name="default"):
        self.versions = list(versions)
        self.nodes = list(nodes)
        self.bucket_delay = bucket_delay
        self.bucket_error = bucket_error
        self.bucket_name = bucket_name
        self.cluster_calls = 0
        self.bucket_calls = 0
        self.bucket_cancelled = False

    def get_cluster_info(self) -> ClusterInfo:
        self.cluster_calls += 1
        return ClusterInfo(all_versions=self.versions)

    async def get_bucket_info(self) -> BucketInfo:
        self.bucket_calls += 1
        try:
            if self.bucket_delay:
                await asyncio.sleep(self.bucket_delay)
        except asyncio.CancelledError:
            self.bucket_cancelled = True
            raise
        if self.bucket_error is not None:
            raise self.bucket_error
        return BucketInfo(name=self.bucket_name, node_list=self.nodes)

@pytest.fixture
def make_operations():
    return FakeOperations
