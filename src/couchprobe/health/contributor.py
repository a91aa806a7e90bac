import asyncio
import logging
from typing import Dict, Mapping
from ..domain.interfaces import HealthIndicator
from ..domain.models import Health, HealthBuilder

logger = logging.getLogger(__name__)

async def health(indicator: HealthIndicator) -> Health:
    """
    Run one indicator, turning any failure into a DOWN report
    with the error recorded under the "error" detail.
    """
    try:
        return await indicator.check()
    except Exception as e:
        logger.warning("Health check failed for %s: %s", type(indicator).__name__, e)
        return HealthBuilder().down(e).build()

async def aggregate(indicators: Mapping[str, HealthIndicator]) -> Dict[str, Health]:
    """Run independent indicators concurrently. Result keeps input order."""
    names = list(indicators)
    results = await asyncio.gather(*(health(indicators[name]) for name in names))
    return dict(zip(names, results))
