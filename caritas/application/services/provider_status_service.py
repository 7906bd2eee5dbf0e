"""
Provider status aggregator.

Queries every configured provider concurrently and normalizes the answers
into one AggregatedStatus. Each provider is isolated: a failing probe turns
into an unavailable entry and never fails the aggregate.

Dependencies: httpx, pydantic, caritas.boundary.providers
System role: Multi-provider health/quota aggregation
"""

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Sequence

import httpx
from pydantic import ValidationError

from caritas.boundary.providers.probes import ProviderProbe, ProviderProbeError
from caritas.models.provider_status import AggregatedStatus, ProviderStatus

logger = logging.getLogger(__name__)


class ProviderStatusAggregator:
    """Stateless aggregator over a fixed list of provider probes."""

    def __init__(self, probes: Sequence[ProviderProbe]) -> None:
        """
        Initialize aggregator.

        Args:
            probes: One probe per configured provider
        """
        self.probes = list(probes)

    async def _status_for(self, probe: ProviderProbe) -> ProviderStatus:
        template = probe.fallback_template()
        if not probe.configured:
            return ProviderStatus.model_validate(template)

        try:
            live = await probe.probe()
            return ProviderStatus.model_validate({**template, **live})
        except httpx.TimeoutException:
            logger.warning("Provider check timed out", extra={"provider": probe.name})
            error = "Timeout"
        except (ProviderProbeError, httpx.HTTPError, ValueError, ValidationError) as e:
            logger.warning(
                "Provider check failed",
                extra={"provider": probe.name, "error_type": type(e).__name__, "error": str(e)},
            )
            error = str(e) or "Connection error"
        except Exception as e:
            logger.exception("Provider check crashed", extra={"provider": probe.name})
            error = str(e) or "Connection error"

        return ProviderStatus.model_validate({**template, **probe.failure(error)})

    async def get_status(self) -> AggregatedStatus:
        """
        Aggregate the status of every provider.

        Never raises: the result always holds one entry per probe.

        Returns:
            AggregatedStatus: Normalized provider statuses
        """
        started = time.perf_counter()
        statuses = await asyncio.gather(*(self._status_for(probe) for probe in self.probes))
        elapsed_ms = int((time.perf_counter() - started) * 1000)

        logger.info(
            "Provider status check completed",
            extra={
                "response_time_ms": elapsed_ms,
                "available": [p.name for p, s in zip(self.probes, statuses) if s.available],
            },
        )
        return AggregatedStatus(
            timestamp=datetime.now(timezone.utc),
            response_time_ms=elapsed_ms,
            providers={probe.name: status for probe, status in zip(self.probes, statuses)},
        )
