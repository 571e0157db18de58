"""
Base translator interface and implementations.

This module defines:
- Abstract Translator interface that all backends implement
- DummyTranslator for testing (echo or simple transformations)
- create_translator() factory

Design Philosophy:
- Translators are stateless per call: each request carries its languages
  and context
- translate() is a coroutine so the batch dispatcher can run several
  calls concurrently
- translate() raises on failure; recovery is the dispatcher's job
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from loctrans.config import TranslationConfig
from loctrans.models import TranslationRequest, TranslationResponse


class Translator(ABC):
    """Abstract base class for all translation backends.
    
    All translators must implement:
    - name: Identifier reported in responses
    - translate(): Translate a single request
    
    check_availability() is called once before a run; override it for
    backends that depend on a server.
    """
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Return the translator name (e.g., 'ollama-llama3.1:8b', 'dummy-prefix')."""
        pass
    
    @property
    def model(self) -> str:
        """Model identifier reported in every response, placeholders included."""
        return self.name
    
    @abstractmethod
    async def translate(self, request: TranslationRequest) -> TranslationResponse:
        """Translate a single request.
        
        Raises:
            TranslationError: If the backend call fails
        """
        pass
    
    def check_availability(self) -> bool:
        """Whether the backend can serve requests right now."""
        return True
    
    async def close(self) -> None:
        """Release network resources held between calls."""
        return None
    
    async def __aenter__(self) -> "Translator":
        return self
    
    async def __aexit__(self, *exc_info) -> None:
        await self.close()


class DummyTranslator(Translator):
    """A dummy translator for testing.
    
    Modes:
    - 'echo': Return the input unchanged
    - 'upper': Return uppercase version
    - 'prefix': Add [<target_lang>] prefix
    - 'reverse': Reverse the text (for debugging)
    """
    
    def __init__(self, mode: str = "prefix"):
        self.mode = mode
    
    @property
    def name(self) -> str:
        return f"dummy-{self.mode}"
    
    async def translate(self, request: TranslationRequest) -> TranslationResponse:
        text = request.text
        if self.mode == "echo":
            translated = text
        elif self.mode == "upper":
            translated = text.upper()
        elif self.mode == "reverse":
            translated = text[::-1]
        else:  # prefix
            translated = f"[{request.target_lang}] {text}"
        
        return TranslationResponse(
            translated_text=translated,
            source_lang=request.source_lang,
            target_lang=request.target_lang,
            model=self.model,
        )


def create_translator(
    backend: str = "ollama",
    config: Optional[TranslationConfig] = None,
    **kwargs,
) -> Translator:
    """Factory function to create a translator by name.
    
    Args:
        backend: 'ollama' (default) or 'dummy'/'echo'/'test'
        config: Settings for server-backed translators
        **kwargs: Backend-specific arguments (e.g. mode for dummy)
        
    Returns:
        Configured Translator instance
    """
    backend_lower = backend.lower().replace("_", "-")
    
    if backend_lower in ("ollama", "local"):
        from loctrans.translate.ollama import OllamaTranslator
        return OllamaTranslator(config or TranslationConfig())
    
    elif backend_lower in ("dummy", "echo", "test"):
        mode = kwargs.get("mode", "echo" if backend_lower == "echo" else "prefix")
        return DummyTranslator(mode=mode)
    
    raise ValueError(
        f"Unknown translator backend: {backend}. "
        f"Available backends: ollama, dummy"
    )
