from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .types import ErrorKind


@dataclass(frozen=True)
class EndpointSpec:
    host: str
    port: int

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def label(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass
class ProbeResult:
    reachable: bool
    status_code: Optional[int] = None
    error_kind: Optional[ErrorKind] = None
    detail: Optional[str] = None
    checked_at: Optional[float] = None

    def describe(self) -> str:
        if self.reachable:
            return f"reachable (HTTP {self.status_code})"
        kind = self.error_kind.value if self.error_kind else "unknown"
        if self.detail:
            return f"{kind}: {self.detail}"
        return kind
