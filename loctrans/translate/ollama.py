"""
Ollama translation backend (local, completely free).

Requires Ollama to be installed and running locally.

Installation:
    1. Install Ollama: https://ollama.ai
    2. Pull a model: ollama pull llama3.1:8b
    3. Run: loctrans check

Translation calls go through one shared aiohttp session so that a batch
of requests can run concurrently. The availability check is a plain
blocking requests call, made once before a run.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Optional

import aiohttp
import requests

from loctrans.config import TranslationConfig
from loctrans.errors import TranslationError
from loctrans.models import TranslationRequest, TranslationResponse
from loctrans.translate.base import Translator

logger = logging.getLogger(__name__)

LANGUAGE_NAMES = {
    "fr": "French",
    "en": "English",
    "es": "Spanish",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "nl": "Dutch",
}

GENERATION_OPTIONS = {
    "temperature": 0.1,
    "top_p": 0.9,
}

_LABEL_RE = re.compile(r"^(Translation|Traduction)\s*:\s*", re.IGNORECASE)
_QUOTES_RE = re.compile(r"^[\"']|[\"']$")


def language_name(code: str) -> str:
    return LANGUAGE_NAMES.get(code, code)


def build_prompt(request: TranslationRequest) -> str:
    """Build the generation prompt for one request."""
    source = language_name(request.source_lang)
    target = language_name(request.target_lang)
    context = f"\n\nContext: {request.context}" if request.context else ""
    
    return f"""You are an expert professional translator. Translate EXACTLY the following text from {source} to {target}.

STRICT RULES:
- You MUST translate into {target} only
- Return ONLY the translation, nothing else
- No explanation, no comment
- Keep variables/placeholders such as {{variable}} or {{{{variable}}}} unchanged
- Respect the style and tone{context}

Text in {source}: "{request.text}"

Translation in {target}:"""


def extract_translation(response: str) -> str:
    """Clean a raw model reply down to the translated text.
    
    Removes a leading "Translation:" label and one pair of surrounding
    quotes. If nothing is left, the stripped raw reply is returned.
    """
    cleaned = _LABEL_RE.sub("", response.strip())
    cleaned = _QUOTES_RE.sub("", cleaned).strip()
    return cleaned or response.strip()


class OllamaTranslator(Translator):
    """Ollama translator using the /api/generate endpoint.
    
    Usage:
        config = TranslationConfig(model="llama3.1:8b")
        async with OllamaTranslator(config) as translator:
            response = await translator.translate(request)
    """
    
    def __init__(self, config: Optional[TranslationConfig] = None):
        self.config = config or TranslationConfig()
        self.base_url = self.config.ollama_host.rstrip("/")
        self.api_url = f"{self.base_url}/api/generate"
        self._session: Optional[aiohttp.ClientSession] = None
    
    @property
    def name(self) -> str:
        return f"ollama-{self.config.model}"
    
    @property
    def model(self) -> str:
        return self.config.model
    
    def list_models(self) -> list[str]:
        """Names of the models installed on the Ollama server."""
        response = requests.get(f"{self.base_url}/api/tags", timeout=5)
        response.raise_for_status()
        models = response.json().get("models", [])
        return [m.get("name", "") for m in models]
    
    def check_availability(self) -> bool:
        """Check that Ollama is running and the configured model is pulled."""
        try:
            models = self.list_models()
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error("Cannot connect to Ollama at %s: %s", self.base_url, e)
            return False
        
        if self.config.model not in models:
            logger.error(
                "Model '%s' is not installed on %s (available: %s). Pull it with: ollama pull %s",
                self.config.model, self.base_url, ", ".join(models) or "none", self.config.model,
            )
            return False
        return True
    
    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.config.timeout_seconds),
                connector=aiohttp.TCPConnector(limit=self.config.max_concurrent_requests),
            )
        return self._session
    
    async def generate(self, prompt: str) -> str:
        """Send a prompt to Ollama and return the raw reply text."""
        payload = {
            "model": self.config.model,
            "prompt": prompt,
            "stream": False,
            "options": GENERATION_OPTIONS,
        }
        session = self._get_session()
        async with session.post(self.api_url, json=payload) as response:
            response.raise_for_status()
            data = await response.json()
        return data.get("response", "")
    
    async def translate(self, request: TranslationRequest) -> TranslationResponse:
        """Translate using Ollama."""
        prompt = build_prompt(request)
        try:
            raw = await self.generate(prompt)
        except asyncio.TimeoutError as e:
            raise TranslationError(
                f"Ollama timeout after {self.config.timeout}ms for model '{self.config.model}'"
            ) from e
        except aiohttp.ClientError as e:
            raise TranslationError(f"Ollama error: {e}") from e
        
        return TranslationResponse(
            translated_text=extract_translation(raw),
            source_lang=request.source_lang,
            target_lang=request.target_lang,
            model=self.model,
        )
    
    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
