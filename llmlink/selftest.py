from __future__ import annotations

from importlib import metadata


def _version(pkg: str) -> str:
    try:
        return metadata.version(pkg)
    except metadata.PackageNotFoundError:
        return "unknown"


def run_selftest() -> bool:
    """
    Lightweight import/dep check; no network calls.
    """
    try:
        import httpx  # noqa: F401
        print(f"llmlink selftest: httpx {_version('httpx')}")
    except ImportError as exc:
        print(f"llmlink selftest: missing httpx ({exc})")
        return False

    try:
        from llmlink.adapters.ollama_chat import OllamaChatAdapter  # noqa: F401
        from llmlink.health import HttpHealthProbe  # noqa: F401
        from llmlink.types import InferenceRequest  # noqa: F401
        print("llmlink selftest: core imports ok")
    except ImportError as exc:
        print(f"llmlink selftest: import failed ({exc})")
        return False

    print("llmlink selftest: ok")
    return True


def main() -> int:
    return 0 if run_selftest() else 1


if __name__ == "__main__":
    raise SystemExit(main())
