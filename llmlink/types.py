from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorKind(str, Enum):
    CONNECTION_REFUSED = "connection_refused"
    TIMEOUT = "timeout"
    HOST_NOT_FOUND = "host_not_found"
    HTTP_ERROR = "http_error"
    EMPTY_RESPONSE = "empty_response"
    PARSE_ERROR = "parse_error"
    OTHER = "other"


CONNECTIVITY_KINDS = frozenset(
    {ErrorKind.CONNECTION_REFUSED, ErrorKind.TIMEOUT, ErrorKind.HOST_NOT_FOUND}
)


@dataclass
class TranslationError(Exception):
    kind: ErrorKind
    message: str
    status_code: Optional[int] = None
    raw_backend: Optional[Any] = None

    def __str__(self) -> str:
        return self.message

    @property
    def is_connectivity(self) -> bool:
        return self.kind in CONNECTIVITY_KINDS


@dataclass
class Message:
    role: str
    content: str


@dataclass
class InferenceRequest:
    model: str
    messages: List[Message]
    temperature: Optional[float] = None
    num_predict: Optional[int] = None
    stream: bool = False
    extra_options: Dict[str, Any] = field(default_factory=dict)


@dataclass
class InferenceResult:
    content: str
    raw: Optional[Dict[str, Any]] = None
    done_reason: Optional[str] = None
