"""Shared fixtures and test translators."""

import asyncio

import pytest

from loctrans.errors import TranslationError
from loctrans.models import TranslationRequest, TranslationResponse
from loctrans.translate.base import Translator

CONFIG_ENV_VARS = [
    "OLLAMA_HOST",
    "OLLAMA_MODEL",
    "DEFAULT_SOURCE_LANG",
    "DEFAULT_TARGET_LANGS",
    "MAX_CONCURRENT_REQUESTS",
    "TRANSLATION_TIMEOUT",
    "TRANSLATIONS_DIR",
    "OUTPUT_DIR",
    "OUTPUT_FILE_NAME",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment and .env out of the tests."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("loctrans.config.load_dotenv", lambda *args, **kwargs: False)


class ScriptedTranslator(Translator):
    """Translator with controllable failures, delays and concurrency tracking.
    
    Texts listed in ``fail_on`` raise TranslationError. ``delays`` maps a
    text to the seconds its call sleeps before answering.
    """
    
    def __init__(self, fail_on=(), delays=None):
        self.fail_on = set(fail_on)
        self.delays = delays or {}
        self.calls: list[TranslationRequest] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False
    
    @property
    def name(self) -> str:
        return "scripted"
    
    async def translate(self, request: TranslationRequest) -> TranslationResponse:
        self.calls.append(request)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(request.text, 0.001))
            if request.text in self.fail_on:
                raise TranslationError(f"cannot translate {request.text!r}")
            return TranslationResponse(
                translated_text=f"{request.text}-{request.target_lang}",
                source_lang=request.source_lang,
                target_lang=request.target_lang,
                model="scripted",
            )
        finally:
            self.in_flight -= 1
    
    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def scripted():
    return ScriptedTranslator()
