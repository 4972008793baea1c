"""
Root conftest to ensure proper import paths.

This file exists at the project root so that the project directory is on
``sys.path`` before pytest starts collecting tests, whether or not the
project has been installed.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import httpx
import pytest

# Ensure project root is in Python path
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


# ============================================================================
# Shared Test Fixtures
# ============================================================================

@pytest.fixture
def mock_logger():
    """Create a mock structlog-style logger.

    The logger supports:
    - bind(**kwargs) -> logger (returns itself with context)
    - debug/info/warning/error/critical methods
    """
    logger = MagicMock()
    logger.bind.return_value = logger
    return logger


@pytest.fixture
def mock_httpx(monkeypatch):
    """Route every httpx.AsyncClient through an in-process handler.

    Usage:
        mock_httpx(lambda request: httpx.Response(200, json={...}))

    The handler may return a response, raise an httpx exception, or be a
    coroutine function. Requests seen by the handler are collected in the
    returned list.
    """
    real_client = httpx.AsyncClient

    def install(handler):
        seen = []

        def recording_handler(request):
            seen.append(request)
            return handler(request)

        def factory(*args, **kwargs):
            kwargs["transport"] = httpx.MockTransport(recording_handler)
            return real_client(*args, **kwargs)

        monkeypatch.setattr(httpx, "AsyncClient", factory)
        return seen

    return install
