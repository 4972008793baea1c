from .types import (
    ErrorKind,
    InferenceRequest,
    InferenceResult,
    Message,
    TranslationError,
)
from .endpoints import EndpointSpec, ProbeResult
from .health import HealthProbe, HttpHealthProbe
from .adapters import BackendAdapter, OllamaChatAdapter

__all__ = [
    # Types
    "ErrorKind",
    "InferenceRequest",
    "InferenceResult",
    "Message",
    "TranslationError",
    # Endpoints
    "EndpointSpec",
    "ProbeResult",
    # Health
    "HealthProbe",
    "HttpHealthProbe",
    # Adapters
    "BackendAdapter",
    "OllamaChatAdapter",
]
