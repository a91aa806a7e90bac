import asyncio
import logging
import typer
from datetime import timedelta
from typing import List, Optional
from pathlib import Path
from .config import AppConfig, CouchbaseConfig
from .connectors.factory import get_connector
from .domain.models import Health, HealthBuilder, HealthStatus
from .exceptions import ConnectionError, CouchprobeException
from .health.contributor import health
from .health.couchbase import CouchbaseHealthIndicator
from .log import setup_logger

logger = logging.getLogger(__name__)

app = typer.Typer(help="Couchbase Cluster Health Probe")

@app.callback()
def main():
    """Health checks for Couchbase clusters."""

async def probe_cluster(cluster: CouchbaseConfig, timeout: timedelta) -> Health:
    """
    Connect, run the health indicator once and close again.
    A cluster that cannot be reached at all is reported DOWN.
    """
    connector = get_connector(cluster)
    try:
        await connector.connect()
    except ConnectionError as e:
        return HealthBuilder().down(e).build()

    try:
        return await health(CouchbaseHealthIndicator(connector, timeout))
    finally:
        try:
            await connector.close()
        except ConnectionError as e:
            # The report is already decided; a failed close doesn't change it
            logger.warning("%s", e)

@app.command()
def check(
    config: Path = typer.Option(..., "--config", "-c", help="Path to configuration file"),
    alias: Optional[str] = typer.Option(None, "--alias", "-a", help="Only check this cluster alias"),
    timeout_ms: Optional[int] = typer.Option(None, "--timeout-ms", min=0, help="Override the bucket-info timeout"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
):
    """
    Query cluster versions and bucket nodes for each configured cluster.
    Exits with 1 if any cluster is DOWN.
    """
    if verbose:
        setup_logger(logging.DEBUG)

    try:
        app_config = AppConfig.from_yaml(config)
        clusters: List[CouchbaseConfig] = (
            [app_config.get_cluster_config(alias)] if alias else list(app_config.clusters)
        )
    except CouchprobeException as e:
        typer.echo(f"Error loading config: {e}", err=True)
        raise typer.Exit(code=1)

    if not clusters:
        typer.echo("Error: no clusters configured", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Starting health check for {len(clusters)} cluster(s)...")

    all_up = True
    for cluster in clusters:
        timeout = (
            timedelta(milliseconds=timeout_ms) if timeout_ms is not None
            else app_config.timeout_for(cluster)
        )
        try:
            report = asyncio.run(probe_cluster(cluster, timeout))
        except CouchprobeException as e:
            report = HealthBuilder().down(e).build()

        if report.status == HealthStatus.UP:
            typer.secho(f"✅ {cluster.alias}: {report.status.value}", fg=typer.colors.GREEN)
        else:
            all_up = False
            typer.secho(f"❌ {cluster.alias}: {report.status.value}", fg=typer.colors.RED)

        for key, value in report.details.items():
            typer.echo(f"   {key}: {value}")

    if not all_up:
        raise typer.Exit(code=1)

if __name__ == "__main__":
    app()
