import logging
from typing import Any, Iterable, List, Optional
from acouchbase.cluster import Cluster
from couchbase.auth import PasswordAuthenticator
from couchbase.diagnostics import ServiceType
from couchbase.exceptions import CouchbaseException
from couchbase.options import ClusterOptions, PingOptions
from ..domain.models import BucketInfo, ClusterInfo
from ..exceptions import ConnectionError

logger = logging.getLogger(__name__)

def _node_versions(cluster_info: Any) -> List[str]:
    """
    Pulls one version per node out of the SDK's cluster info result.
    Build suffixes ("7.2.0-5325-enterprise") are cut down to the release.
    """
    versions = []
    for node in getattr(cluster_info, "nodes", None) or []:
        raw = node.get("version") if isinstance(node, dict) else getattr(node, "version", None)
        if raw:
            versions.append(str(raw).split("-", 1)[0])

    if not versions:
        # Older servers only expose the aggregate version
        server_version = getattr(cluster_info, "server_version_short", None) or getattr(cluster_info, "server_version", None)
        if server_version:
            versions.append(str(server_version).split("-", 1)[0])
    return versions

def _host_of(remote: str) -> str:
    host = remote.rsplit(":", 1)[0] if remote.count(":") == 1 or remote.startswith("[") else remote
    return host.strip("[]")

def _unique(values: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(v for v in values if v))

class CouchbaseConnector:
    """
    CouchbaseOperations backed by the asyncio flavour of the Couchbase SDK.

    Cluster info is fetched once on connect() and served from memory
    afterwards; bucket info is a live KV ping on every call.
    """
    def __init__(self, connection_string: str, username: str, password: str,
                 bucket_name: str, alias: str = "unknown"):
        self.connection_string = connection_string
        self.username = username
        self.password = password
        self.bucket_name = bucket_name
        self.alias = alias
        self._cluster = None
        self._bucket = None
        self._cluster_info: Optional[ClusterInfo] = None

    async def connect(self) -> None:
        if self._cluster is not None:
            return
        cluster = None
        try:
            options = ClusterOptions(PasswordAuthenticator(self.username, self.password))
            cluster = await Cluster.connect(self.connection_string, options)
            bucket = cluster.bucket(self.bucket_name)
            await bucket.on_connect()
            raw_info = await cluster.cluster_info()
        except CouchbaseException as e:
            if cluster is not None:
                # Opened but unusable (bad bucket, info failure): don't leak it
                try:
                    await cluster.close()
                except CouchbaseException as close_error:
                    logger.warning("Failed to close %s after connect error: %s", self.alias, close_error)
            raise ConnectionError(f"Failed to connect to {self.alias}: {e}")

        self._cluster = cluster
        self._bucket = bucket
        self._cluster_info = ClusterInfo(all_versions=_node_versions(raw_info))
        logger.info("Connected to %s (bucket '%s')", self.alias, self.bucket_name)

    async def close(self) -> None:
        if self._cluster is None:
            return
        cluster = self._cluster
        self._cluster = None
        self._bucket = None
        self._cluster_info = None
        try:
            await cluster.close()
        except CouchbaseException as e:
            raise ConnectionError(f"Failed to close connection to {self.alias}: {e}")

    def get_cluster_info(self) -> ClusterInfo:
        if self._cluster_info is None:
            raise ConnectionError(f"Not connected to {self.alias}; call connect() first")
        return self._cluster_info

    async def get_bucket_info(self) -> BucketInfo:
        if self._bucket is None:
            raise ConnectionError(f"Not connected to {self.alias}; call connect() first")
        try:
            result = await self._bucket.ping(PingOptions(service_types=[ServiceType.KeyValue]))
        except CouchbaseException as e:
            raise ConnectionError(f"Failed to fetch bucket info for '{self.bucket_name}': {e}")

        reports = result.endpoints.get(ServiceType.KeyValue, [])
        nodes = _unique(_host_of(report.remote) for report in reports if report.remote)
        return BucketInfo(name=self.bucket_name, node_list=nodes)
