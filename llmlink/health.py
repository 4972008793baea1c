from __future__ import annotations

import asyncio
import time
from abc import ABC, abstractmethod

import httpx

from .adapters.base import categorize_exception
from .endpoints import EndpointSpec, ProbeResult
from .types import ErrorKind

PROBE_PATH = "/api/tags"


class HealthProbe(ABC):
    @abstractmethod
    async def probe(self, endpoint: EndpointSpec) -> ProbeResult:
        ...


class HttpHealthProbe(HealthProbe):
    """
    Unauthenticated reachability check against a local model server.

    Issues ``GET /api/tags`` with a hard time budget. Never raises: every
    outcome, including transport failures, comes back as a ``ProbeResult``.
    Only HTTP 200 counts as reachable.
    """

    def __init__(self, timeout: float = 5.0, path: str = PROBE_PATH):
        self.timeout = timeout
        self.path = path

    async def probe(self, endpoint: EndpointSpec) -> ProbeResult:
        try:
            async with httpx.AsyncClient(
                base_url=endpoint.base_url, timeout=httpx.Timeout(self.timeout)
            ) as client:
                resp = await asyncio.wait_for(client.get(self.path), self.timeout)
        except Exception as exc:
            err = categorize_exception(exc, endpoint)
            return ProbeResult(
                reachable=False,
                error_kind=err.kind,
                detail=err.message,
                checked_at=time.time(),
            )

        if resp.status_code == 200:
            return ProbeResult(
                reachable=True,
                status_code=resp.status_code,
                checked_at=time.time(),
            )
        return ProbeResult(
            reachable=False,
            status_code=resp.status_code,
            error_kind=ErrorKind.OTHER,
            detail=f"HTTP {resp.status_code}",
            checked_at=time.time(),
        )
