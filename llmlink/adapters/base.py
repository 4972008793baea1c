from __future__ import annotations

import socket
from abc import ABC, abstractmethod
from typing import Iterator

from llmlink.endpoints import EndpointSpec
from llmlink.types import ErrorKind, InferenceRequest, InferenceResult, TranslationError

_HOST_NOT_FOUND_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "no address associated",
    "temporary failure in name resolution",
)


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Walk causes, contexts and exception-group members breadth first."""
    seen = set()
    pending = [exc]
    while pending:
        current = pending.pop(0)
        if not isinstance(current, BaseException) or id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        pending.append(current.__cause__)
        pending.append(current.__context__)
        pending.extend(getattr(current, "exceptions", None) or ())


def categorize_exception(exc: Exception, endpoint: EndpointSpec) -> TranslationError:
    """Map a transport exception onto the translation error taxonomy."""
    chain = list(_exception_chain(exc))
    names = " ".join(e.__class__.__name__ for e in chain)
    text = " ".join(str(e) for e in chain).lower()

    if "Timeout" in names:
        return TranslationError(ErrorKind.TIMEOUT, f"Connection timeout to {endpoint.label}")
    if any(isinstance(e, socket.gaierror) for e in chain) or any(
        marker in text for marker in _HOST_NOT_FOUND_MARKERS
    ):
        return TranslationError(ErrorKind.HOST_NOT_FOUND, f"Host not found: {endpoint.host}")
    if any(isinstance(e, ConnectionRefusedError) for e in chain) or "refused" in text:
        return TranslationError(
            ErrorKind.CONNECTION_REFUSED, f"Connection refused to {endpoint.label}"
        )
    return TranslationError(
        ErrorKind.OTHER, f"Connection error ({exc.__class__.__name__}): {exc}"
    )


class BackendAdapter(ABC):
    @abstractmethod
    async def infer(self, endpoint: EndpointSpec, request: InferenceRequest) -> InferenceResult:
        ...
