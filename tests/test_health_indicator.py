import pytest
from datetime import timedelta
from couchprobe.domain.interfaces import CouchbaseOperations, HealthIndicator
from couchprobe.domain.models import HealthStatus
from couchprobe.exceptions import ConnectionError
from couchprobe.health.couchbase import CouchbaseHealthIndicator

TIMEOUT = timedelta(seconds=2)

@pytest.mark.asyncio
async def test_single_version_and_two_nodes(make_operations):
    """A one-node-version cluster with two bucket nodes reports UP with joined details."""
    ops = make_operations(versions=["6.5.0"], nodes=["10.0.0.1", "10.0.0.2"])
    report = await CouchbaseHealthIndicator(ops, TIMEOUT).check()

    assert report.status == HealthStatus.UP
    assert report.details == {"versions": "6.5.0", "nodes": "10.0.0.1,10.0.0.2"}

@pytest.mark.asyncio
async def test_empty_versions_and_nodes(make_operations):
    """No versions and no nodes still yields UP with empty strings."""
    ops = make_operations()
    report = await CouchbaseHealthIndicator(ops, TIMEOUT).check()

    assert report.status == HealthStatus.UP
    assert report.details == {"versions": "", "nodes": ""}

@pytest.mark.asyncio
@pytest.mark.parametrize("versions", [
    ["7.2.0"],
    ["7.2.0", "7.1.4", "7.2.0"],
    ["6.6.0", "7.0.0", "6.5.1", "7.1.0"],
])
async def test_versions_joined_in_order(make_operations, versions):
    """Versions are comma-joined in the order reported, duplicates kept."""
    ops = make_operations(versions=versions, nodes=["a"])
    report = await CouchbaseHealthIndicator(ops, TIMEOUT).check()
    assert report.details["versions"] == ",".join(versions)

@pytest.mark.asyncio
@pytest.mark.parametrize("nodes", [
    ["10.0.0.3"],
    ["node-c", "node-a", "node-b"],
])
async def test_nodes_joined_in_order(make_operations, nodes):
    """Nodes are comma-joined in the order reported."""
    ops = make_operations(versions=["7.0.0"], nodes=nodes)
    report = await CouchbaseHealthIndicator(ops, TIMEOUT).check()
    assert report.details["nodes"] == ",".join(nodes)

@pytest.mark.asyncio
async def test_bucket_timeout_raises_and_cancels(make_operations):
    """A slow bucket-info fetch fails with TimeoutError and the pending call is cancelled."""
    ops = make_operations(versions=["7.0.0"], nodes=["a"], bucket_delay=5)
    indicator = CouchbaseHealthIndicator(ops, timedelta(milliseconds=20))

    with pytest.raises(TimeoutError):
        await indicator.check()

    assert ops.bucket_cancelled is True

@pytest.mark.asyncio
async def test_client_error_propagates_unchanged(make_operations):
    """A client failure before the timeout surfaces as itself, not as TimeoutError."""
    error = ConnectionError("bucket not reachable")
    ops = make_operations(bucket_error=error)
    indicator = CouchbaseHealthIndicator(ops, timedelta(seconds=5))

    with pytest.raises(ConnectionError) as excinfo:
        await indicator.check()

    assert excinfo.value is error
    assert not isinstance(excinfo.value, TimeoutError)

@pytest.mark.asyncio
async def test_cluster_info_error_propagates(make_operations):
    """Errors from the cluster-info call are not wrapped either."""
    ops = make_operations()

    def broken():
        raise ConnectionError("not connected")
    ops.get_cluster_info = broken

    with pytest.raises(ConnectionError):
        await CouchbaseHealthIndicator(ops, TIMEOUT).check()
    assert ops.bucket_calls == 0

@pytest.mark.asyncio
async def test_each_check_fetches_fresh_data(make_operations):
    """No state is carried between invocations."""
    ops = make_operations(versions=["7.0.0"], nodes=["a"])
    indicator = CouchbaseHealthIndicator(ops, TIMEOUT)

    first = await indicator.check()
    ops.nodes = ["a", "b"]
    second = await indicator.check()

    assert first.details["nodes"] == "a"
    assert second.details["nodes"] == "a,b"
    assert ops.cluster_calls == 2
    assert ops.bucket_calls == 2

def test_negative_timeout_rejected(make_operations):
    with pytest.raises(ValueError):
        CouchbaseHealthIndicator(make_operations(), timedelta(seconds=-1))

def test_protocol_conformance(make_operations):
    ops = make_operations()
    assert isinstance(ops, CouchbaseOperations)
    assert isinstance(CouchbaseHealthIndicator(ops, TIMEOUT), HealthIndicator)
