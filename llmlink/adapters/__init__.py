from .base import BackendAdapter, categorize_exception
from .ollama_chat import OllamaChatAdapter

__all__ = ["BackendAdapter", "OllamaChatAdapter", "categorize_exception"]
