from .backend_anthropic import AnthropicAdapter
from .backend_gemini import GeminiAdapter
from .backend_openai import OpenAIAdapter
from .clipboard_memory import MemoryClipboard
from .credentials_keyring import KeyringCredentialStore
from .credentials_memory import MemoryCredentialStore

__all__ = [
    "AnthropicAdapter",
    "GeminiAdapter",
    "KeyringCredentialStore",
    "MemoryClipboard",
    "MemoryCredentialStore",
    "OpenAIAdapter",
]
